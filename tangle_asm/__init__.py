"""
Tangle Assembler
================
A two-pass assembler for the Tangle 16-bit instruction set. Produces the
hex memory image loaded by the Tangle simulator and FPGA boards.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐
    │ ASM text │───>│ Scanner  │───>│ Operands │───>│ Encoder  │───>│ Hex file │
    │ (.s)     │    │ (tokens) │    │ (arity)  │    │ (words)  │    │ (ram.hex)│
    └──────────┘    └──────────┘    └──────────┘    └──────────┘    └──────────┘

    - scanner.py:   LineCursor, character classes, tokens and numbers
    - isa.py:       opcode table, instruction classes, operand arity
    - operands.py:  register / immediate / label parsers, arity strategies
    - encoder.py:   immediate ranges and 16-bit word packing
    - program.py:   labels, symbol table, instructions, assembly context
    - assembler.py: pass 1 (parse + collect labels), pass 2 (patch labels)
    - hexfile.py:   hex image output
"""

__version__ = "0.1.0"

from .errors import (
    AssemblerError, LexicalError, AsmSyntaxError, RangeError,
    DuplicateSymbolError, UnresolvedSymbolError, ResourceError,
    SymbolResolutionError,
)
from .isa import INSTRUCTIONS, InsnClass, Arity, InsnDescriptor, lookup
from .encoder import InstructionWord, ImmediateField, BRANCH_IMM, AMI_IMM, WIDE_IMM
from .program import Instruction, Label, SymbolTable, Resolved, PendingLabel
from .assembler import Assembler, assemble, assemble_to_hex
from .hexfile import format_hex, write_hex_file, DEFAULT_OUTPUT
