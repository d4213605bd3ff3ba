"""The LC-3 address space with memory-mapped keyboard registers."""

from __future__ import annotations

import sys
from array import array
from typing import BinaryIO

from .console import Console

KBSR = 0xFE00
KBDR = 0xFE02
MEMORY_SIZE = 65536
WORD_MASK = 0xFFFF


class ImageError(OSError):
    """An image file could not be loaded."""


class Memory:
    """65,536 words of memory; reading KBSR polls the console for a key."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console()
        self._data = [0] * MEMORY_SIZE

    @staticmethod
    def _check(address: int) -> int:
        if not 0 <= address < MEMORY_SIZE:
            raise IndexError(f"address 0x{address:X} is outside memory")
        return address

    def write(self, address: int, value: int) -> None:
        self._data[self._check(address)] = value & WORD_MASK

    def read(self, address: int) -> int:
        self._check(address)
        if address == KBSR:
            if self.console.key_available():
                self.write(KBSR, 1 << 15)
                char = self.console.getchar()
                if char is not None:
                    self.write(KBDR, ord(char))
        else:
            self.write(KBSR, 0)
        return self._data[address]

    def load_image(self, stream: BinaryIO) -> None:
        """Load a big-endian image whose first word is its origin address."""
        header = stream.read(2)
        if len(header) < 2:
            raise ImageError("image is too short to hold an origin address")
        origin = int.from_bytes(header, "big")

        payload = stream.read()
        if len(payload) % 2:
            payload += b"\x00"
        words = array("H")
        words.frombytes(payload)
        if sys.byteorder == "little":
            words.byteswap()

        count = min(len(words), MEMORY_SIZE - origin)
        self._data[origin : origin + count] = words[:count].tolist()