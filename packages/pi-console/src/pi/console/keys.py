"""Key event classification for the line editor.

Raw terminal input arrives in arbitrary chunks: a single read may hold
several keystrokes, or only the first half of an escape sequence.
:class:`KeyDecoder` buffers the input, splits it into complete sequences
and classifies each one as a :class:`KeyEvent`.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key events
# ---------------------------------------------------------------------------


class KeyKind(enum.Enum):
    PRINTABLE = "printable"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    TAB = "tab"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    UNDEFINED = "undefined"
    ERROR = "error"


@dataclass(frozen=True)
class KeyEvent:
    """A classified keystroke. ``char`` is only set for printable keys."""

    kind: KeyKind
    char: str = ""

    @classmethod
    def printable(cls, char: str) -> KeyEvent:
        return cls(KeyKind.PRINTABLE, char)


class InputDecodeError(RuntimeError):
    """The key source reported input it could not decode."""


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ESC = "\x1b"

SINGLE_KEYS: dict[str, KeyKind] = {
    "\r": KeyKind.ENTER,
    "\n": KeyKind.ENTER,
    "\x7f": KeyKind.BACKSPACE,
    "\b": KeyKind.BACKSPACE,
    "\t": KeyKind.TAB,
}

# Legacy escape sequences -> key kinds
ESCAPE_SEQUENCES: dict[str, KeyKind] = {
    "\x1b[A": KeyKind.UP,
    "\x1b[B": KeyKind.DOWN,
    "\x1b[C": KeyKind.RIGHT,
    "\x1b[D": KeyKind.LEFT,
    "\x1bOA": KeyKind.UP,
    "\x1bOB": KeyKind.DOWN,
    "\x1bOC": KeyKind.RIGHT,
    "\x1bOD": KeyKind.LEFT,
    "\x1b[3~": KeyKind.DELETE,
}

# Windows console: msvcrt.getwch() returns "\x00" or "\xe0" followed by a
# scan code for the extended keys.
WINDOWS_PREFIXES = ("\x00", "\xe0")

WINDOWS_SCAN_CODES: dict[str, KeyKind] = {
    "H": KeyKind.UP,
    "P": KeyKind.DOWN,
    "K": KeyKind.LEFT,
    "M": KeyKind.RIGHT,
    "S": KeyKind.DELETE,
}

_CSI_FINAL_RE = re.compile(r"[\x40-\x7e]")


# ---------------------------------------------------------------------------
# Sequence splitting
# ---------------------------------------------------------------------------


def _is_complete_sequence(data: str) -> str:
    """Check if a string is a complete escape sequence or needs more data.

    Returns 'complete', 'incomplete', or 'not-escape'.
    """
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [ params final
    if after_esc.startswith("["):
        if len(after_esc) < 2:
            return "incomplete"
        return "complete" if _CSI_FINAL_RE.fullmatch(after_esc[-1]) else "incomplete"

    # SS3 sequences: ESC O final
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key sequences: ESC followed by a single character
    return "complete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split accumulated input into complete key sequences.

    Returns (sequences, remainder) where the remainder is a trailing escape
    sequence that still needs more input.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        seq_end = 1
        while seq_end <= len(remaining):
            candidate = remaining[:seq_end]
            if _is_complete_sequence(candidate) == "complete":
                break
            seq_end += 1
        else:
            return sequences, remaining

        sequences.append(remaining[:seq_end])
        pos += seq_end

    return sequences, ""


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify(sequence: str) -> KeyEvent:
    """Classify one complete key sequence."""
    kind = SINGLE_KEYS.get(sequence) or ESCAPE_SEQUENCES.get(sequence)
    if kind is not None:
        return KeyEvent(kind)
    if len(sequence) == 1 and 32 <= ord(sequence) <= 126:
        return KeyEvent.printable(sequence)
    return KeyEvent(KeyKind.UNDEFINED)


def classify_windows(chars: str) -> KeyEvent:
    """Classify the characters ``msvcrt.getwch`` returned for one key."""
    if len(chars) == 2 and chars[0] in WINDOWS_PREFIXES:
        return KeyEvent(WINDOWS_SCAN_CODES.get(chars[1], KeyKind.UNDEFINED))
    return classify(chars)


class KeyDecoder:
    """Buffers raw input and yields key events for complete sequences.

    An escape sequence split across two reads is held back until the rest
    arrives. :meth:`flush` gives up on a held sequence, which is how a lone
    Escape keypress is eventually reported.
    """

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> bool:
        return bool(self._buffer)

    def feed(self, data: str) -> list[KeyEvent]:
        sequences, self._buffer = split_sequences(self._buffer + data)
        return [classify(seq) for seq in sequences]

    def flush(self) -> list[KeyEvent]:
        if not self._buffer:
            return []
        held, self._buffer = self._buffer, ""
        return [classify(held)]
