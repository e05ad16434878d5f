"""
Tangle instruction word encoder.

Word layout (16 bits):

    15      11 10    8 7     5 4       0
    +---------+-------+-------+---------+
    | opcode  |  rd   |  rs   |  imm5   |   AMI / MEM, two or three operands
    +---------+-------+-------+---------+
    | opcode  |  rd   |      imm8       |   branches, MOVHI / MOVLO
    +---------+-------+-----------------+

Immediate ranges depend on the field. For the absolute (AMI) fields the
sign does not matter once the value is truncated to the field, so both the
signed minimum and the unsigned maximum are accepted.
"""

from __future__ import annotations
from dataclasses import dataclass, replace

from .errors import RangeError

__all__ = [
    'ImmediateField', 'BRANCH_IMM', 'AMI_IMM', 'WIDE_IMM',
    'InstructionWord', 'INSN_BITS', 'INSN_BYTES',
]

INSN_BITS = 16
INSN_BYTES = INSN_BITS // 8

OPCODE_SHIFT = 11
RD_SHIFT = 8
RS_SHIFT = 5
OPCODE_MASK = 0x1F
REG_MASK = 0x7


@dataclass(frozen=True)
class ImmediateField:
    """Width and accepted range of an instruction's immediate field."""
    width: int
    minimum: int
    maximum: int
    relative: bool = False   # label value is (label - pc) instead of label

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def check(self, value: int) -> int:
        if value < self.minimum or value > self.maximum:
            raise RangeError(
                f"invalid number or out-of-range: {value} "
                f"(expects: {self.minimum} -- {self.maximum})")
        return value

    def label_value(self, name: str, offset: int, pc: int) -> int:
        """Immediate for a reference to label `name` from the instruction at `pc`."""
        value = offset - pc if self.relative else offset
        if self.minimum <= value <= self.maximum:
            return value
        if self.relative:
            raise RangeError(
                f"label ({name}) is too far from current pc ({value} bytes, "
                f"range {self.minimum} to {self.maximum}); "
                f"consider using a register-based branch")
        raise RangeError(
            f"label ({name}) is too big ({value}) to fit in the immediate field, "
            f"valid range: {self.minimum} to {self.maximum}")


BRANCH_IMM = ImmediateField(8, -(1 << 7), (1 << 7) - 1, relative=True)
AMI_IMM = ImmediateField(5, -(1 << 4), (1 << 5) - 1)
WIDE_IMM = ImmediateField(8, -(1 << 7), (1 << 8) - 1)


@dataclass(frozen=True)
class InstructionWord:
    """An instruction as named fields; encode() packs them into 16 bits."""
    opcode: int
    rd: int = 0
    rs: int = 0
    imm: int = 0
    field: ImmediateField = AMI_IMM

    def with_imm(self, imm: int) -> InstructionWord:
        return replace(self, imm=imm)

    def encode(self) -> int:
        word = (self.opcode & OPCODE_MASK) << OPCODE_SHIFT
        word |= (self.rd & REG_MASK) << RD_SHIFT
        if self.field.width <= RS_SHIFT:
            word |= (self.rs & REG_MASK) << RS_SHIFT
        word |= self.imm & self.field.mask
        return word
