#!/usr/bin/env python3
"""
tas — Tangle Assembler CLI

Usage:
    python tas.py <input.s> [-o output.hex] [--listing] [--verbose]

If -o is omitted, 'ram.hex' is written in the current directory. Nothing
is written when assembly fails; diagnostics go to stderr as
'<file>:<line>: Error: <message>'.

Examples:
    python tas.py blink.s                  # -> ram.hex
    python tas.py blink.s -o blink.hex
    python tas.py blink.s -l -v            # listing + debug trace
"""

import argparse
import logging
import sys
import os

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from tangle_asm import __version__
from tangle_asm.assembler import Assembler
from tangle_asm.hexfile import DEFAULT_OUTPUT, write_hex_file


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="tas",
        description="Tangle Assembler: assemble Tangle source into a hex memory image",
        epilog=f"If -o is omitted, '{DEFAULT_OUTPUT}' will be used instead.",
    )
    parser.add_argument("input", help="Input assembly source file")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT,
                        help=f"Output hex file (default: {DEFAULT_OUTPUT})")
    parser.add_argument("-l", "--listing", action="store_true",
                        help="Print a PC / word / source listing to stdout")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Trace labels and instructions to stderr")
    parser.add_argument("--version", action="version",
                        version=f"tas {__version__}")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )

    # Read input
    try:
        with open(args.input, "r", encoding="utf-8") as f:
            source = f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1
    except (IOError, UnicodeDecodeError) as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        return 1

    asm = Assembler(args.input)
    if not asm.run(source):
        print(f"error while parsing {args.input}", file=sys.stderr)
        return 1

    try:
        write_hex_file(args.output, args.input, asm.words)
    except IOError as e:
        print(f"Error writing {args.output}: {e}", file=sys.stderr)
        return 1

    if args.listing:
        print(asm.get_listing())
    if args.verbose:
        print(f"[tas] Output: {args.output} ({len(asm.words)} words)", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
