"""A small command console built on the input session.

Prints a prompt, reads an edited line and answers it from a fixed command
table until ``quit`` is entered. The command names form the completion
vocabulary.
"""

from __future__ import annotations

import logging
from typing import Callable

from pi.console.config import ConsoleConfig
from pi.console.history import HistoryLog
from pi.console.keys import InputDecodeError
from pi.console.session import NEWLINE, InputSession
from pi.console.terminal import PlatformIOError, Terminal
from pi.console.trie import CompletionTrie

logger = logging.getLogger(__name__)

QUIT_COMMAND = "quit"


class Console:
    """Read-eval loop over an :class:`InputSession`."""

    def __init__(self, config: ConsoleConfig, terminal: Terminal) -> None:
        self.config = config
        self.terminal = terminal

        self._commands: dict[str, Callable[[], list[str]]] = {
            "help": self._help,
            "history": self._history,
            QUIT_COMMAND: lambda: [],
        }

        vocabulary = CompletionTrie(config.alphabet)
        for word in [*self._commands, *config.extra_words]:
            vocabulary.insert(word)

        self.session = InputSession(
            terminal,
            vocabulary=vocabulary,
            history=HistoryLog(),
            prompt=config.prompt,
        )

    @property
    def commands(self) -> list[str]:
        return sorted(self._commands)

    def run(self) -> int:
        """Loop until ``quit``. Returns the process exit code."""
        prompt = f"{self.config.prompt} "
        try:
            while True:
                self.terminal.write(prompt)
                line = self.session.read_line()
                if line == QUIT_COMMAND:
                    return 0
                self._print(self.execute(line))
        except (InputDecodeError, PlatformIOError) as e:
            logger.exception("Input session aborted")
            self._print([f"There was an error getting the user's input: {e}"])
            return 1

    def execute(self, line: str) -> list[str]:
        """Return the response lines for *line*."""
        handler = self._commands.get(line)
        if handler is None:
            return [f"You typed: {line}"]
        return handler()

    def _help(self) -> list[str]:
        return ["Commands: " + ", ".join(self.commands)]

    def _history(self) -> list[str]:
        return list(self.session.history)

    def _print(self, lines: list[str]) -> None:
        for line in lines:
            self.terminal.write(line + NEWLINE)
