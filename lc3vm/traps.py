"""Trap routines offered by the virtual machine."""

from __future__ import annotations

from enum import IntEnum


class TrapCode(IntEnum):
    """Trap vectors carried in the low byte of a TRAP instruction."""

    GETC = 0x20
    OUT = 0x21
    PUTS = 0x22
    IN = 0x23
    PUTSP = 0x24
    HALT = 0x25

    @classmethod
    def decode(cls, instruction: int) -> TrapCode:
        """Return the trap vector of a TRAP instruction."""
        try:
            return cls(instruction & 0xFF)
        except ValueError:
            raise ValueError(
                f"unexpected trap code 0x{instruction & 0xFF:02X}"
            ) from None