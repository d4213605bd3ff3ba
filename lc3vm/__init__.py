"""A virtual machine for the LC-3 computer architecture: processor, memory, console and command line."""

__version__ = "0.1.0"

__all__ = ["__version__"]