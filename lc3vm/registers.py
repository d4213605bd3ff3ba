"""The LC-3 register file."""

from __future__ import annotations

from enum import IntEnum

PC_START = 0x3000
WORD_MASK = 0xFFFF


class Register(IntEnum):
    """General purpose registers, the program counter and the condition flags."""

    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3
    R4 = 4
    R5 = 5
    R6 = 6
    R7 = 7
    PC = 8
    COND = 9


REGISTER_COUNT = len(Register)


class RegisterFile:
    """Ten 16-bit registers; the program counter starts at ``PC_START``."""

    def __init__(self) -> None:
        self._values = [0] * REGISTER_COUNT
        self[Register.PC] = PC_START

    def __getitem__(self, register: Register | int) -> int:
        return self._values[Register(register)]

    def __setitem__(self, register: Register | int, value: int) -> None:
        self._values[Register(register)] = value & WORD_MASK

    def advance_pc(self) -> None:
        """Move the program counter to the next word."""
        self[Register.PC] = self[Register.PC] + 1

    def __repr__(self) -> str:
        body = ", ".join(f"{reg.name}=0x{self[reg]:04X}" for reg in Register)
        return f"RegisterFile({body})"