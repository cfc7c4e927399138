"""Terminal collaborators: raw-mode setup and classified key input.

Provides a ``Terminal`` protocol and two concrete implementations:
``PosixTerminal`` (termios raw mode, ``os.read`` input) and
``WindowsTerminal`` (``msvcrt`` console input). The input session only ever
talks to the protocol; :func:`create_terminal` picks the implementation for
the running platform.
"""

from __future__ import annotations

import logging
import os
import select
import sys
from typing import IO, Protocol

from pi.console.keys import (
    WINDOWS_PREFIXES,
    KeyDecoder,
    KeyEvent,
    KeyKind,
    classify_windows,
)

logger = logging.getLogger(__name__)

_READ_SIZE = 4096
# Seconds to wait for the rest of a split escape sequence
_ESCAPE_TIMEOUT = 0.01


class PlatformIOError(OSError):
    """Reading from or configuring the terminal device failed."""


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class KeySource(Protocol):
    """Blocking producer of classified key events."""

    def read_keys(self) -> list[KeyEvent]: ...


class Terminal(KeySource, Protocol):
    """Interface for terminal I/O used by the input session."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    def __enter__(self) -> Terminal: ...

    def __exit__(self, *exc_info: object) -> None: ...


# ---------------------------------------------------------------------------
# Shared output handling
# ---------------------------------------------------------------------------


class _OutputMixin:
    _output: IO[str]
    _write_log_path: str

    def write(self, data: str) -> None:
        """Write data to the output stream and optionally to the write log."""
        try:
            self._output.write(data)
            self._output.flush()
        except OSError as e:
            raise PlatformIOError(f"Terminal write failed: {e}") from e

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                logger.warning("Could not append to write log %s", self._write_log_path)
                self._write_log_path = ""

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


# ---------------------------------------------------------------------------
# PosixTerminal
# ---------------------------------------------------------------------------


class PosixTerminal(_OutputMixin):
    """Terminal backed by a POSIX tty file descriptor.

    ``start`` saves the current termios attributes and switches the device
    to raw mode (no line buffering, no echo, no signal keys, no output
    post-processing); ``stop`` restores the saved attributes.
    """

    def __init__(
        self,
        input_fd: int | None = None,
        output: IO[str] | None = None,
        write_log_path: str = "",
    ) -> None:
        self._input_fd = input_fd
        self._output = sys.stdout if output is None else output
        self._write_log_path = write_log_path
        self._decoder = KeyDecoder()
        self._original_termios: list | None = None

    @property
    def _fd(self) -> int:
        return sys.stdin.fileno() if self._input_fd is None else self._input_fd

    def start(self) -> None:
        """Enable raw mode on the input device."""
        import termios
        import tty

        try:
            self._original_termios = termios.tcgetattr(self._fd)
            tty.setraw(self._fd)
        except termios.error as e:
            raise PlatformIOError(f"Unable to set raw terminal mode: {e}") from e
        logger.debug("Entered raw mode on fd %d", self._fd)

    def stop(self) -> None:
        """Restore the terminal attributes saved by ``start``."""
        if self._original_termios is None:
            return
        import termios

        termios.tcsetattr(self._fd, termios.TCSADRAIN, self._original_termios)
        self._original_termios = None
        logger.debug("Restored terminal mode on fd %d", self._fd)

    def read_keys(self) -> list[KeyEvent]:
        """Block until at least one complete key sequence is available."""
        while True:
            data = self._read()
            if not data:
                # End of input: the device is gone
                return self._decoder.flush() + [KeyEvent(KeyKind.ERROR)]

            events = self._decoder.feed(data.decode("ascii", errors="replace"))
            if self._decoder.pending and not self._readable(_ESCAPE_TIMEOUT):
                events.extend(self._decoder.flush())
            if events:
                return events

    def _read(self) -> bytes:
        try:
            return os.read(self._fd, _READ_SIZE)
        except OSError as e:
            raise PlatformIOError(f"Reading key input failed: {e}") from e

    def _readable(self, timeout: float) -> bool:
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
        except (OSError, ValueError):
            return False
        return bool(ready)


# ---------------------------------------------------------------------------
# WindowsTerminal
# ---------------------------------------------------------------------------


class WindowsTerminal(_OutputMixin):
    """Terminal backed by the Windows console via :mod:`msvcrt`.

    ``msvcrt.getwch`` already delivers unbuffered, unechoed keystrokes, so
    there is no mode to enter or restore.
    """

    def __init__(self, output: IO[str] | None = None, write_log_path: str = "") -> None:
        import msvcrt

        self._msvcrt = msvcrt
        self._output = sys.stdout if output is None else output
        self._write_log_path = write_log_path

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def read_keys(self) -> list[KeyEvent]:
        events = [self._read_key()]
        while self._msvcrt.kbhit():
            events.append(self._read_key())
        return events

    def _read_key(self) -> KeyEvent:
        try:
            chars = self._msvcrt.getwch()
            if chars in WINDOWS_PREFIXES:
                chars += self._msvcrt.getwch()
        except OSError as e:
            raise PlatformIOError(f"Reading console input failed: {e}") from e
        return classify_windows(chars)


def create_terminal(write_log_path: str = "") -> Terminal:
    """Return the terminal implementation for the running platform."""
    if os.name == "nt":
        return WindowsTerminal(write_log_path=write_log_path)
    return PosixTerminal(write_log_path=write_log_path)
