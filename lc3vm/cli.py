"""Command line entry point: load images and run them."""

from __future__ import annotations

import sys
from typing import Sequence

from .vm import Vm


def main(argv: Sequence[str] | None = None) -> int:
    """Load each named image in order, then run the machine."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: lc3 [image-file]...")
        return 1

    vm = Vm()
    for arg in args:
        try:
            vm.load_image(arg)
        except OSError as err:
            print(f"Error loading image: {err}")
            return 1
        print(f"loading file {arg}")
    vm.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())