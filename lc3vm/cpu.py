"""The LC-3 processor: instruction decoding, execution and trap routines."""

from __future__ import annotations

from enum import IntFlag
from typing import Callable

from .console import Console
from .memory import Memory
from .opcode import OpCode
from .registers import WORD_MASK, Register, RegisterFile
from .traps import TrapCode


class FlagBit(IntFlag):
    """Condition flags held in the COND register."""

    POS = 1 << 0
    ZRO = 1 << 1
    NEG = 1 << 2


class CpuError(RuntimeError):
    """The processor met an instruction or condition it cannot handle."""


def sign_extend(value: int, bit_count: int) -> int:
    """Widen a ``bit_count``-bit two's complement field to a 16-bit word."""
    value &= (1 << bit_count) - 1
    if (value >> (bit_count - 1)) & 1:
        value |= WORD_MASK << bit_count
    return value & WORD_MASK


def _wrap_add(a: int, b: int) -> int:
    return (a + b) & WORD_MASK


def _dr(instruction: int) -> Register:
    return Register((instruction >> 9) & 0x7)


def _sr1(instruction: int) -> Register:
    return Register((instruction >> 6) & 0x7)


def _sr2(instruction: int) -> Register:
    return Register(instruction & 0x7)


def _pc_offset9(instruction: int) -> int:
    return sign_extend(instruction & 0x1FF, 9)


def _offset6(instruction: int) -> int:
    return sign_extend(instruction & 0x3F, 6)


class Cpu:
    """Registers plus the logic that executes one instruction at a time."""

    def __init__(self, console: Console | None = None) -> None:
        self.registers = RegisterFile()
        self.running = False
        self.console = console if console is not None else Console()
        self._operations: dict[OpCode, Callable[[int, Memory], None]] = {
            OpCode.BR: self._br,
            OpCode.ADD: self._add,
            OpCode.LD: self._ld,
            OpCode.ST: self._st,
            OpCode.JSR: self._jsr,
            OpCode.AND: self._and,
            OpCode.LDR: self._ldr,
            OpCode.STR: self._str,
            OpCode.RTI: self._rti,
            OpCode.NOT: self._not,
            OpCode.LDI: self._ldi,
            OpCode.STI: self._sti,
            OpCode.JMP: self._jmp,
            OpCode.RES: self._res,
            OpCode.LEA: self._lea,
            OpCode.TRAP: self._trap,
        }
        self._traps: dict[TrapCode, Callable[[Memory], None]] = {
            TrapCode.GETC: self._trap_getc,
            TrapCode.OUT: self._trap_out,
            TrapCode.PUTS: self._trap_puts,
            TrapCode.IN: self._trap_in,
            TrapCode.PUTSP: self._trap_putsp,
            TrapCode.HALT: self._trap_halt,
        }

    def execute(self, instruction: int, memory: Memory) -> None:
        """Carry out one 16-bit instruction against ``memory``."""
        try:
            opcode = OpCode.decode(instruction)
        except ValueError as exc:
            raise CpuError(str(exc)) from None
        self._operations[opcode](instruction, memory)

    def _update_flags(self, register: Register) -> None:
        value = self.registers[register]
        if value == 0:
            flag = FlagBit.ZRO
        elif value >> 15:
            flag = FlagBit.NEG
        else:
            flag = FlagBit.POS
        self.registers[Register.COND] = flag

    @property
    def _pc(self) -> int:
        return self.registers[Register.PC]

    def _br(self, instruction: int, memory: Memory) -> None:
        condition = (instruction >> 9) & 0x7
        if condition & self.registers[Register.COND]:
            self.registers[Register.PC] = _wrap_add(self._pc, _pc_offset9(instruction))

    def _add(self, instruction: int, memory: Memory) -> None:
        dr = _dr(instruction)
        left = self.registers[_sr1(instruction)]
        if (instruction >> 5) & 0x1:
            right = sign_extend(instruction & 0x1F, 5)
        else:
            right = self.registers[_sr2(instruction)]
        self.registers[dr] = _wrap_add(left, right)
        self._update_flags(dr)

    def _and(self, instruction: int, memory: Memory) -> None:
        # Condition flags are deliberately left untouched here.
        left = self.registers[_sr1(instruction)]
        if instruction & 0x20:
            right = sign_extend(instruction & 0x1F, 5)
        else:
            right = self.registers[_sr2(instruction)]
        self.registers[_dr(instruction)] = left & right

    def _not(self, instruction: int, memory: Memory) -> None:
        dr = _dr(instruction)
        self.registers[dr] = ~self.registers[_sr1(instruction)] & WORD_MASK
        self._update_flags(dr)

    def _ld(self, instruction: int, memory: Memory) -> None:
        dr = _dr(instruction)
        address = _wrap_add(self._pc, _pc_offset9(instruction))
        self.registers[dr] = memory.read(address)
        self._update_flags(dr)

    def _st(self, instruction: int, memory: Memory) -> None:
        address = _wrap_add(self._pc, _pc_offset9(instruction))
        memory.write(address, self.registers[_dr(instruction)])

    def _ldr(self, instruction: int, memory: Memory) -> None:
        dr = _dr(instruction)
        address = _wrap_add(self.registers[_sr1(instruction)], _offset6(instruction))
        self.registers[dr] = memory.read(address)
        self._update_flags(dr)

    def _str(self, instruction: int, memory: Memory) -> None:
        value = self.registers[_dr(instruction)]
        address = _wrap_add(self.registers[_sr1(instruction)], _offset6(instruction))
        memory.write(address, value)

    def _ldi(self, instruction: int, memory: Memory) -> None:
        dr = _dr(instruction)
        pointer = _wrap_add(self._pc, _pc_offset9(instruction))
        self.registers[dr] = memory.read(memory.read(pointer))
        self._update_flags(dr)

    def _sti(self, instruction: int, memory: Memory) -> None:
        pointer = _wrap_add(self._pc, _pc_offset9(instruction))
        memory.write(memory.read(pointer), self.registers[_dr(instruction)])

    def _jsr(self, instruction: int, memory: Memory) -> None:
        pc = self._pc
        self.registers[Register.R7] = pc
        if (instruction >> 11) & 0x1:
            target = _wrap_add(pc, sign_extend(instruction & 0x7FF, 11))
        else:
            target = self.registers[_sr1(instruction)]
        self.registers[Register.PC] = target

    def _jmp(self, instruction: int, memory: Memory) -> None:
        self.registers[Register.PC] = self.registers[_sr1(instruction)]

    def _lea(self, instruction: int, memory: Memory) -> None:
        dr = _dr(instruction)
        self.registers[dr] = _wrap_add(self._pc, _pc_offset9(instruction))
        self._update_flags(dr)

    def _rti(self, instruction: int, memory: Memory) -> None:
        raise CpuError("RTI is not supported")

    def _res(self, instruction: int, memory: Memory) -> None:
        pass

    def _trap(self, instruction: int, memory: Memory) -> None:
        try:
            code = TrapCode.decode(instruction)
        except ValueError as exc:
            raise CpuError(str(exc)) from None
        self._traps[code](memory)

    def _read_char(self) -> str:
        char = self.console.getchar()
        if char is None:
            raise CpuError("end of input while waiting for a character")
        return char

    def _trap_getc(self, memory: Memory) -> None:
        self.registers[Register.R0] = ord(self._read_char())

    def _trap_in(self, memory: Memory) -> None:
        self.console.write("Enter a character: ")
        self.registers[Register.R0] = ord(self._read_char())

    def _trap_out(self, memory: Memory) -> None:
        self.console.putchar(chr(self.registers[Register.R0] & 0xFF))

    def _words_from_r0(self, memory: Memory):
        address = self.registers[Register.R0]
        while (word := memory.read(address)) != 0:
            yield word
            address += 1

    def _trap_puts(self, memory: Memory) -> None:
        self.console.write(
            "".join(chr(word & 0xFF) for word in self._words_from_r0(memory))
        )

    def _trap_putsp(self, memory: Memory) -> None:
        chars = []
        for word in self._words_from_r0(memory):
            chars.append(chr(word & 0xFF))
            high = (word >> 8) & 0xFF
            if high:
                chars.append(chr(high))
        self.console.write("".join(chars))

    def _trap_halt(self, memory: Memory) -> None:
        self.console.write("HALT\n")
        self.running = False