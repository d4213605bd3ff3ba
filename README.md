# lc3vm

A virtual machine for the LC-3, the 16-bit computer architecture used in
teaching. It loads program images in the standard object format and runs
them in your terminal. An image is a big-endian origin word followed by
big-endian program words.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running a program

```
lc3vm program.obj
```

You can give several images. Each one is loaded at its own origin address,
and execution then starts at `0x3000`:

```
lc3vm os.obj program.obj
```

With no arguments, the command prints `Usage: lc3 [image-file]...` and exits
with status 1. If an image cannot be opened or is too short to hold an
origin word, the command prints `Error loading image: ...` and exits with
status 1. For each image that loads, it prints `loading file <name>`.

While a program runs on a POSIX terminal, standard input is switched to raw
mode so that keystrokes reach the machine one at a time. The terminal
settings are restored when the run ends. Execution stops when the program
issues the `HALT` trap, which prints `HALT`.

## What is emulated

- All LC-3 instructions except `RTI`, which raises `lc3vm.cpu.CpuError`.
  The reserved opcode does nothing.
- The trap routines `GETC`, `OUT`, `PUTS`, `IN`, `PUTSP` and `HALT`. The
  machine handles these itself, so no operating system image is needed.
  An unknown trap vector raises `CpuError`. So does reaching the end of
  input while `GETC` or `IN` is waiting for a character.
- The memory-mapped keyboard registers:
  - Keyboard status at `0xFE00`. Reading it polls the console; if a key is
    waiting, bit 15 is set and the character is stored in the data register.
  - Keyboard data at `0xFE02`.
- `AND` stores its result but leaves the condition flags unchanged.

## Using it from Python

```python
from lc3vm.vm import Vm

vm = Vm()
vm.load_image("program.obj")
vm.run()
```

`Vm.step()` executes the single instruction at the program counter. This is
useful for tracing and for tests. The machine's parts are exposed as
attributes:

- `vm.cpu.registers` is a `RegisterFile`, indexed by
  `lc3vm.registers.Register`.
- `vm.memory` is a `Memory`, with `read`, `write` and `load_image`.
- `vm.console` is the console the machine uses for input and output.

You can build a `Console` from `lc3vm.console` over any pair of streams and
pass it to `Vm` to feed input and capture output:

```python
import io

from lc3vm.console import Console
from lc3vm.vm import Vm

output = io.StringIO()
vm = Vm(Console(io.BytesIO(b"a"), output))
```

## What it does not do

- There is no assembler. Programs must already be assembled into object
  images.
- There is no interrupt handling, privilege mode or supervisor stack.
- There is no display status or data register.
- There is no debugger or tracing command. Stepping is only available
  through `Vm.step()` from Python.