"""The virtual machine: a processor wired to memory and a console."""

from __future__ import annotations

import os

from .console import Console
from .cpu import Cpu
from .memory import Memory
from .registers import Register


class Vm:
    """Fetches, decodes and executes instructions until the program halts."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console()
        self.cpu = Cpu(self.console)
        self.memory = Memory(self.console)

    def load_image(self, path: str | os.PathLike[str]) -> None:
        """Load an image file into memory at the origin it names."""
        with open(path, "rb") as stream:
            self.memory.load_image(stream)

    def step(self) -> None:
        """Execute the instruction at the program counter."""
        registers = self.cpu.registers
        instruction = self.memory.read(registers[Register.PC])
        registers.advance_pc()
        self.cpu.execute(instruction, self.memory)

    def run(self) -> None:
        """Run with the terminal in raw mode until a HALT trap."""
        self.cpu.running = True
        with self.console.raw_mode():
            while self.cpu.running:
                self.step()