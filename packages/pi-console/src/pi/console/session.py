"""Input session: turns key events into one edited, completed line.

The session reads batches of classified key events from its terminal and
dispatches each one to the line buffer, the history log or the completion
trie, writing the redraw output each operation returns. It finishes when
an ``ENTER`` event arrives.
"""

from __future__ import annotations

import enum
import logging

from pi.console.history import HistoryLog
from pi.console.keys import InputDecodeError, KeyEvent, KeyKind
from pi.console.line_buffer import BELL, LineBuffer
from pi.console.terminal import Terminal
from pi.console.trie import CompletionTrie

logger = logging.getLogger(__name__)

NEWLINE = "\r\n"
NO_MATCHES = "No matches"


class TabState(enum.Enum):
    """Double-tab sub-machine: ARMED after a tab that completed nothing."""

    DISARMED = "disarmed"
    ARMED = "armed"


class InputSession:
    """Reads edited lines from a terminal.

    The session owns its vocabulary and history for its whole lifetime.
    Per-line state (buffer, tab state, history browse position) is created
    fresh by every :meth:`read_line` call.
    """

    def __init__(
        self,
        terminal: Terminal,
        vocabulary: CompletionTrie | None = None,
        history: HistoryLog | None = None,
        prompt: str = "",
    ) -> None:
        self.terminal = terminal
        self.vocabulary = vocabulary if vocabulary is not None else CompletionTrie()
        self.history = history if history is not None else HistoryLog()
        self.prompt = prompt

        self._buffer = LineBuffer()
        self._tab_state = TabState.DISARMED

    @property
    def buffer(self) -> LineBuffer:
        return self._buffer

    @property
    def tab_state(self) -> TabState:
        return self._tab_state

    def read_line(self) -> str:
        """Run the editor until enter is pressed and return the line.

        The finished line is recorded in the history.

        Raises:
            InputDecodeError: The key source reported an undecodable key.
            PlatformIOError: The terminal device failed.
        """
        self._buffer = LineBuffer()
        self._tab_state = TabState.DISARMED
        self.history.reset()

        while True:
            for event in self.terminal.read_keys():
                if event.kind is KeyKind.ENTER:
                    self.terminal.write(NEWLINE)
                    line = self._buffer.line
                    self.history.record(line)
                    return line
                self.handle_key(event)

    def handle_key(self, event: KeyEvent) -> None:
        """Apply a single non-enter key event to the current line."""
        kind = event.kind
        if kind is KeyKind.ERROR:
            raise InputDecodeError("There was an error when processing key inputs")

        if kind is KeyKind.TAB:
            self._complete()
            return

        self._tab_state = TabState.DISARMED

        if kind is KeyKind.PRINTABLE:
            self.terminal.write(self._buffer.insert(event.char))
        elif kind is KeyKind.BACKSPACE:
            self.terminal.write(self._buffer.backspace())
        elif kind is KeyKind.DELETE:
            self.terminal.write(self._buffer.delete())
        elif kind is KeyKind.LEFT:
            self.terminal.write(self._buffer.move_left())
        elif kind is KeyKind.RIGHT:
            self.terminal.write(self._buffer.move_right())
        elif kind is KeyKind.UP or kind is KeyKind.DOWN:
            self._browse_history(kind)

    # -- history ------------------------------------------------------------

    def _browse_history(self, kind: KeyKind) -> None:
        self.history.begin_browse(self._buffer.line)
        entry = self.history.previous() if kind is KeyKind.UP else self.history.next()
        if entry is None:
            self.terminal.write(BELL)
            return
        self.terminal.write(self._buffer.replace(entry))

    # -- completion ---------------------------------------------------------

    def _complete(self) -> None:
        line = self._buffer.line

        if self._tab_state is TabState.ARMED:
            self._list_completions(line)
            self._tab_state = TabState.DISARMED
            return

        result = self.vocabulary.query(line)
        logger.debug("Completion for %r: %r", line, result)
        if result.is_match and result.extension != line:
            self.terminal.write(self._buffer.replace(result.extension))
        else:
            self.terminal.write(BELL)
            self._tab_state = TabState.ARMED

    def _list_completions(self, line: str) -> None:
        matches = self.vocabulary.list_completions(line)
        listing = NEWLINE.join(matches) if matches else NO_MATCHES
        self.terminal.write(NEWLINE + listing + NEWLINE)
        self.terminal.write(self._buffer.redraw(self._prompt_text()))

    def _prompt_text(self) -> str:
        return f"{self.prompt} " if self.prompt else ""
