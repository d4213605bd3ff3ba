"""Character input and output for the virtual machine's terminal."""

from __future__ import annotations

import contextlib
import os
import select
import sys
from typing import IO, Any, Iterator

try:
    import termios
    import tty
except ImportError:
    termios = None  # type: ignore[assignment]
    tty = None  # type: ignore[assignment]

try:
    import msvcrt
except ImportError:
    msvcrt = None  # type: ignore[assignment]


def _fileno(stream: Any) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


class Console:
    """Reads single bytes from an input stream and writes text to an output stream."""

    def __init__(
        self,
        input_stream: IO[Any] | None = None,
        output_stream: IO[str] | None = None,
    ) -> None:
        if input_stream is None:
            input_stream = getattr(sys.stdin, "buffer", sys.stdin)
        self._input = input_stream
        self._output = output_stream if output_stream is not None else sys.stdout
        self._fd = _fileno(input_stream)
        self._pending: str | None = None

    def _windows_console(self) -> bool:
        return msvcrt is not None and self._fd is not None and os.isatty(self._fd)

    def _read_one(self) -> str | None:
        if self._windows_console():
            data: Any = msvcrt.getch()
        elif self._fd is not None:
            data = os.read(self._fd, 1)
        else:
            data = self._input.read(1)
        if not data:
            return None
        if isinstance(data, (bytes, bytearray)):
            return data.decode("latin-1")
        return data

    def key_available(self) -> bool:
        """Tell, without waiting, whether a character can be read."""
        if self._pending is not None:
            return True
        if self._windows_console():
            return bool(msvcrt.kbhit())
        if self._fd is not None:
            try:
                ready, _, _ = select.select([self._fd], [], [], 0)
            except (OSError, ValueError):
                return False
            return bool(ready)
        char = self._read_one()
        if char is None:
            return False
        self._pending = char
        return True

    def getchar(self) -> str | None:
        """Read one character, or return None at end of input."""
        if self._pending is not None:
            char, self._pending = self._pending, None
            return char
        return self._read_one()

    def putchar(self, char: str) -> None:
        """Write one character and flush it."""
        self.write(char)

    def write(self, text: str) -> None:
        """Write text and flush it."""
        self._output.write(text)
        self._output.flush()

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[Console]:
        """Put an input terminal into raw mode for the duration of the block."""
        if termios is None or self._fd is None or not os.isatty(self._fd):
            yield self
            return
        saved = termios.tcgetattr(self._fd)
        tty.setraw(self._fd)
        try:
            yield self
        finally:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, saved)