"""Cursor-aware single-line text buffer with in-place terminal redraw.

Each editing operation updates the logical line and returns the exact
string to write to the terminal so that the on-screen line matches it.
Only backspace (``\\b``) motion, overwriting and the bell are used, so the
output works on any character terminal without cursor addressing.

After every operation the visual cursor column, measured from the first
character of the line, equals :attr:`LineBuffer.cursor`.
"""

from __future__ import annotations

from dataclasses import dataclass

BELL = "\a"
BACKSPACE = "\b"


def _back(count: int) -> str:
    return BACKSPACE * count


@dataclass
class LineBuffer:
    line: str = ""
    cursor: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.cursor <= len(self.line):
            raise ValueError(f"cursor {self.cursor} outside line of length {len(self.line)}")

    @property
    def at_end(self) -> bool:
        return self.cursor == len(self.line)

    def insert(self, char: str) -> str:
        """Insert *char* at the cursor and advance past it."""
        tail = self.line[self.cursor :]
        self.line = self.line[: self.cursor] + char + tail
        self.cursor += 1
        if not tail:
            return char
        # Re-echo what follows, then walk back to just after the new char
        return char + tail + _back(len(tail))

    def backspace(self) -> str:
        """Remove the character before the cursor."""
        if self.cursor == 0:
            return BELL
        if self.at_end:
            self.line = self.line[:-1]
            self.cursor -= 1
            return BACKSPACE + " " + BACKSPACE

        tail = self.line[self.cursor :]
        self.line = self.line[: self.cursor - 1] + tail
        self.cursor -= 1
        # The trailing space blanks the stale last column
        return BACKSPACE + tail + " " + _back(len(tail) + 1)

    def delete(self) -> str:
        """Remove the character under the cursor."""
        if self.at_end:
            return BELL
        tail = self.line[self.cursor + 1 :]
        self.line = self.line[: self.cursor] + tail
        return tail + " " + _back(len(tail) + 1)

    def move_left(self) -> str:
        if self.cursor == 0:
            return BELL
        self.cursor -= 1
        return BACKSPACE

    def move_right(self) -> str:
        if self.at_end:
            return BELL
        passed = self.line[self.cursor]
        self.cursor += 1
        return passed

    def replace(self, new_line: str) -> str:
        """Swap the whole line for *new_line*, leaving the cursor at its end."""
        output = _back(self.cursor) + new_line
        shrink = len(self.line) - len(new_line)
        if shrink > 0:
            output += " " * shrink + _back(shrink)
        self.line = new_line
        self.cursor = len(new_line)
        return output

    def redraw(self, prompt: str) -> str:
        """Draw *prompt* and the line from column 0 of a fresh row."""
        return prompt + self.line + _back(len(self.line) - self.cursor)
