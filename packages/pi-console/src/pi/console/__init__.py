"""pi-console: Terminal line editor with history and tab completion."""

# Completion
from pi.console.trie import (
    DEFAULT_ALPHABET,
    INVALID_INDEX,
    AlphabetIndex,
    Completion,
    CompletionTrie,
    InvalidCharacterError,
    StructuralCorruptionError,
    TrieNode,
)

# Line editing
from pi.console.history import HistoryLog
from pi.console.line_buffer import BACKSPACE, BELL, LineBuffer

# Keyboard input handling
from pi.console.keys import (
    InputDecodeError,
    KeyDecoder,
    KeyEvent,
    KeyKind,
    classify,
    classify_windows,
    split_sequences,
)

# Terminal interface and implementations
from pi.console.terminal import (
    KeySource,
    PlatformIOError,
    PosixTerminal,
    Terminal,
    WindowsTerminal,
    create_terminal,
)

# Input session
from pi.console.session import InputSession, TabState

# Console
from pi.console.config import ConsoleConfig
from pi.console.console import Console

__all__ = [
    # Completion
    "DEFAULT_ALPHABET",
    "INVALID_INDEX",
    "AlphabetIndex",
    "Completion",
    "CompletionTrie",
    "InvalidCharacterError",
    "StructuralCorruptionError",
    "TrieNode",
    # Line editing
    "BACKSPACE",
    "BELL",
    "HistoryLog",
    "LineBuffer",
    # Keys
    "InputDecodeError",
    "KeyDecoder",
    "KeyEvent",
    "KeyKind",
    "classify",
    "classify_windows",
    "split_sequences",
    # Terminal
    "KeySource",
    "PlatformIOError",
    "PosixTerminal",
    "Terminal",
    "WindowsTerminal",
    "create_terminal",
    # Session
    "InputSession",
    "TabState",
    # Console
    "Console",
    "ConsoleConfig",
]
