"""Shared fixtures: an in-memory terminal that replays scripted key batches."""

from __future__ import annotations

import pytest

from pi.console.keys import KeyEvent, KeyKind


class ScriptedTerminal:
    """In-memory terminal that records all writes for test inspection.

    Implements the ``Terminal`` protocol from ``pi.console.terminal``. Each
    call to ``read_keys`` returns the next scripted batch; running out of
    batches is a test bug and fails loudly.
    """

    def __init__(self, batches: list[list[KeyEvent]] | None = None) -> None:
        self._batches: list[list[KeyEvent]] = list(batches or [])
        self._buffer: list[str] = []
        self.started = False
        self.stopped = False

    # -- Terminal protocol --------------------------------------------------

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def __enter__(self) -> ScriptedTerminal:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def write(self, data: str) -> None:
        self._buffer.append(data)

    def read_keys(self) -> list[KeyEvent]:
        if not self._batches:
            raise AssertionError("ScriptedTerminal ran out of key batches")
        return self._batches.pop(0)

    # -- Test helpers -------------------------------------------------------

    def feed(self, *batch: KeyEvent) -> None:
        self._batches.append(list(batch))

    def type(self, text: str) -> None:
        """Queue *text* as one batch of printable keys."""
        self.feed(*(KeyEvent.printable(c) for c in text))

    def press(self, *kinds: KeyKind) -> None:
        """Queue each key kind as its own batch."""
        for kind in kinds:
            self.feed(KeyEvent(kind))

    def get_output(self) -> str:
        return "".join(self._buffer)

    def clear_output(self) -> None:
        self._buffer.clear()


def render(output: str) -> tuple[str, int]:
    """Replay backspace/overwrite output onto a single row.

    Returns the visible row (trailing spaces stripped) and the final cursor
    column. Bells are ignored; a carriage return moves to column 0 and a
    line feed starts a new, empty row.
    """
    row: list[str] = []
    col = 0
    for ch in output:
        if ch == "\a":
            continue
        if ch == "\b":
            col = max(0, col - 1)
        elif ch == "\r":
            col = 0
        elif ch == "\n":
            row = []
            col = 0
        else:
            if col == len(row):
                row.append(ch)
            else:
                row[col] = ch
            col += 1
    return "".join(row).rstrip(" "), col


@pytest.fixture
def terminal() -> ScriptedTerminal:
    return ScriptedTerminal()
