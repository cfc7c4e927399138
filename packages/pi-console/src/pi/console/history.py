"""Command history with arrow-key browsing."""

from __future__ import annotations

import logging
from typing import Iterator

logger = logging.getLogger(__name__)


class HistoryLog:
    """Tracks completed input lines in chronological order.

    Empty lines and immediate repeats are not recorded. While browsing, the
    line that was being composed is kept as a draft and handed back once the
    browse position moves past the newest entry.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._position = 0
        self._draft = ""

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def position(self) -> int:
        return self._position

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def browsing(self) -> bool:
        return self._position != len(self._entries)

    def record(self, line: str) -> None:
        """Append *line* unless it is empty or repeats the newest entry."""
        if not line:
            return
        if self._entries and self._entries[-1] == line:
            return
        self._entries.append(line)
        self.reset()

    def reset(self) -> None:
        """Return to the resting position and drop the draft."""
        self._position = len(self._entries)
        self._draft = ""

    def begin_browse(self, current_line: str) -> None:
        """Save *current_line* as the draft unless already browsing."""
        if not self.browsing:
            self._draft = current_line

    def previous(self) -> str | None:
        """Step to the older entry, or None at the oldest."""
        if self._position == 0:
            return None
        self._position -= 1
        logger.debug("History position %d/%d", self._position, len(self._entries))
        return self._entries[self._position]

    def next(self) -> str | None:
        """Step to the newer entry (or the draft), or None when not browsing."""
        if not self.browsing:
            return None
        self._position += 1
        logger.debug("History position %d/%d", self._position, len(self._entries))
        if self._position == len(self._entries):
            return self._draft
        return self._entries[self._position]
