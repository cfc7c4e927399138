"""Configuration for the console."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from pi.console.trie import DEFAULT_ALPHABET

DEFAULT_PROMPT = "pi-console ->"


@dataclass
class ConsoleConfig:
    """Console settings.

    ``write_log_path`` names a file that receives a copy of everything
    written to the terminal; empty disables it.
    """

    prompt: str = DEFAULT_PROMPT
    alphabet: str = DEFAULT_ALPHABET
    write_log_path: str = ""
    extra_words: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> ConsoleConfig:
        """Build a config from ``PI_CONSOLE_*`` environment variables."""
        return cls(
            prompt=os.environ.get("PI_CONSOLE_PROMPT", DEFAULT_PROMPT),
            write_log_path=os.environ.get("PI_CONSOLE_WRITE_LOG", ""),
        )
