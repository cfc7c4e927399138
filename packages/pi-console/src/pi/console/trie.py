"""Prefix tree over a fixed alphabet for tab completion.

The trie answers two questions about a prefix: how far it extends without
ambiguity (:meth:`CompletionTrie.query`) and which vocabulary words lie
beneath that point (:meth:`CompletionTrie.list_completions`).

Children are stored in a list indexed by alphabet position, so each edge
lookup is O(1) and child iteration order is the alphabet order rather than
insertion order. Each node caches the text from the root to itself, which
keeps completion queries from re-walking parent links.
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class InvalidCharacterError(ValueError):
    """A vocabulary word contains a character outside the accepted alphabet."""

    def __init__(self, word: str, char: str) -> None:
        super().__init__(f"Invalid character {char!r} in {word!r}")
        self.word = word
        self.char = char


class StructuralCorruptionError(AssertionError):
    """A non-terminal node has no children. Indicates a bug, never user input."""


# ---------------------------------------------------------------------------
# Alphabet index
# ---------------------------------------------------------------------------

DEFAULT_ALPHABET = string.ascii_letters + string.digits + "-_"

INVALID_INDEX = 255

_FIRST_PRINTABLE = 32
_LAST_PRINTABLE = 126


class AlphabetIndex:
    """Maps printable ASCII characters to dense child-array positions.

    Positions are handed out in ASCII order over the accepted characters.
    Any character outside the accepted set (including every non-printable
    and non-ASCII character) maps to :data:`INVALID_INDEX`.
    """

    __slots__ = ("_index", "_chars")

    def __init__(self, valid_chars: str = DEFAULT_ALPHABET) -> None:
        accepted = set(valid_chars)
        self._index: list[int] = [INVALID_INDEX] * (_LAST_PRINTABLE + 1)
        self._chars: list[str] = []
        for code in range(_FIRST_PRINTABLE, _LAST_PRINTABLE + 1):
            if chr(code) in accepted:
                self._index[code] = len(self._chars)
                self._chars.append(chr(code))

    def __len__(self) -> int:
        return len(self._chars)

    def index(self, char: str) -> int:
        code = ord(char)
        if code >= len(self._index):
            return INVALID_INDEX
        return self._index[code]

    def char(self, index: int) -> str:
        return self._chars[index]


# ---------------------------------------------------------------------------
# Nodes and results
# ---------------------------------------------------------------------------


class TrieNode:
    __slots__ = ("children", "is_terminal", "prefix_text")

    def __init__(self, size: int, prefix_text: str = "") -> None:
        self.children: list[TrieNode | None] = [None] * size
        self.is_terminal = False
        self.prefix_text = prefix_text

    def live_children(self) -> list[int]:
        """Alphabet positions of the populated child edges, in order."""
        return [i for i, child in enumerate(self.children) if child is not None]


@dataclass(frozen=True)
class Completion:
    """Result of a completion query.

    Attributes:
        count: 0 when nothing matches, 1 when ``extension`` is a complete
            word, otherwise the number of branches at the ambiguity point.
        extension: The longest unambiguous text for the queried prefix.
    """

    count: int
    extension: str

    @property
    def is_match(self) -> bool:
        return self.count > 0


NO_MATCH = Completion(0, "")


# ---------------------------------------------------------------------------
# CompletionTrie
# ---------------------------------------------------------------------------


class CompletionTrie:
    """Vocabulary of words over a restricted alphabet.

    The root node is created lazily by the first successful insertion, so an
    empty trie never holds a childless non-terminal node.
    """

    def __init__(self, valid_chars: str = DEFAULT_ALPHABET) -> None:
        self._alphabet = AlphabetIndex(valid_chars)
        self._root: TrieNode | None = None
        self._size = 0

    @property
    def alphabet(self) -> AlphabetIndex:
        return self._alphabet

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self._walk(word)
        return node is not None and node.is_terminal

    # -- mutation -----------------------------------------------------------

    def insert(self, word: str) -> None:
        """Add *word* to the vocabulary.

        Raises:
            InvalidCharacterError: *word* contains a character outside the
                alphabet. The trie is not modified.
        """
        indices = []
        for char in word:
            idx = self._alphabet.index(char)
            if idx == INVALID_INDEX:
                raise InvalidCharacterError(word, char)
            indices.append(idx)

        if self._root is None:
            self._root = TrieNode(len(self._alphabet))

        node = self._root
        for pos, idx in enumerate(indices):
            child = node.children[idx]
            if child is None:
                child = TrieNode(len(self._alphabet), word[: pos + 1])
                node.children[idx] = child
            node = child

        if not node.is_terminal:
            node.is_terminal = True
            self._size += 1
            logger.debug("Added %r to vocabulary", word)

    # -- queries ------------------------------------------------------------

    def query(self, prefix: str) -> Completion:
        """Return the longest unambiguous extension of *prefix*."""
        node = self._walk(prefix)
        if node is None:
            return NO_MATCH
        count, stop = self._longest_extension(node)
        return Completion(count, stop.prefix_text)

    def list_completions(self, prefix: str) -> list[str]:
        """Return every word under the ambiguity node for *prefix*.

        Words are listed in alphabet-index order.
        """
        node = self._walk(prefix)
        if node is None:
            return []
        _, stop = self._longest_extension(node)
        return list(self._iter_words(stop))

    def words(self) -> list[str]:
        """Every word in the vocabulary, in alphabet-index order."""
        if self._root is None:
            return []
        return list(self._iter_words(self._root))

    def dump(self) -> str:
        """Render every node for debugging."""
        if self._root is None:
            return "Empty!"
        lines: list[str] = []
        stack = [self._root]
        while stack:
            node = stack.pop()
            live = node.live_children()
            edges = " ".join(f"[{self._alphabet.char(i)}]" for i in live) or "None"
            lines.append("----- Begin Node -----")
            lines.append(f"Word to here: {node.prefix_text}")
            lines.append(f"Live children: {edges}")
            lines.append(f"Is terminal: {'true' if node.is_terminal else 'false'}")
            lines.append("----- End Node -----")
            stack.extend(node.children[i] for i in reversed(live))
        return "\n".join(lines)

    # -- internals ----------------------------------------------------------

    def _walk(self, prefix: str) -> TrieNode | None:
        node = self._root
        for char in prefix:
            if node is None:
                return None
            idx = self._alphabet.index(char)
            if idx == INVALID_INDEX:
                return None
            node = node.children[idx]
        return node

    def _longest_extension(self, node: TrieNode) -> tuple[int, TrieNode]:
        """Descend single-child chains until a terminal or branching node."""
        while not node.is_terminal:
            live = node.live_children()
            if not live:
                raise StructuralCorruptionError(
                    f"Node {node.prefix_text!r} is neither terminal nor has children"
                )
            if len(live) > 1:
                return len(live), node
            node = node.children[live[0]]
        return 1, node

    def _iter_words(self, node: TrieNode) -> Iterator[str]:
        stack = [node]
        while stack:
            current = stack.pop()
            if current.is_terminal:
                yield current.prefix_text
            # Reverse so the lowest alphabet position is popped first
            stack.extend(current.children[i] for i in reversed(current.live_children()))
