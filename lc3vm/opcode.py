"""Operation codes of the LC-3 instruction set."""

from __future__ import annotations

from enum import IntEnum


class OpCode(IntEnum):
    """The sixteen LC-3 operations, selected by the top four instruction bits."""

    BR = 0
    ADD = 1
    LD = 2
    ST = 3
    JSR = 4
    AND = 5
    LDR = 6
    STR = 7
    RTI = 8
    NOT = 9
    LDI = 10
    STI = 11
    JMP = 12
    RES = 13
    LEA = 14
    TRAP = 15

    @classmethod
    def decode(cls, instruction: int) -> OpCode:
        """Return the operation encoded in a 16-bit instruction word."""
        try:
            return cls(instruction >> 12)
        except ValueError:
            raise ValueError(
                f"unexpected operation code in instruction 0x{instruction:X}"
            ) from None