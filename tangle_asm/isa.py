"""
Tangle instruction set: opcodes, instruction classes and the mnemonic table.

Each mnemonic maps to one InsnDescriptor. The descriptor picks the
instruction class (which decides the immediate field) and the operand
arity, which selects the parsing strategy in operands.py.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Dict

from .encoder import AMI_IMM, BRANCH_IMM, WIDE_IMM, ImmediateField
from .errors import AsmSyntaxError

__all__ = ['InsnClass', 'Arity', 'InsnDescriptor', 'INSTRUCTIONS', 'lookup']


# ──────────────────────────────────────────────
# Opcodes
# ──────────────────────────────────────────────

# Logical
OPC_OR = 0
OPC_AND = 1
OPC_XOR = 2
OPC_SLL = 3
OPC_SLR = 4
OPC_NOT = 5
OPC_NEG = 6

# Arithmetic
OPC_ADD = 7
OPC_SUB = 8
OPC_CMP = 12

# Move
OPC_MOV = 9
OPC_MOVHI = 10
OPC_MOVLO = 11

# Branch
OPC_JE = 13
OPC_JNE = 14
OPC_JGS = 15
OPC_JGU = 16
OPC_JLS = 17
OPC_JLU = 18
OPC_JGES = 19
OPC_JGEU = 20
OPC_JLES = 21
OPC_JLEU = 22
OPC_J = 23
OPC_JAL = 24

# Memory
OPC_LW = 25
OPC_SW = 26


class InsnClass(enum.Enum):
    AMI = "AMI"         # ALU / move / IO
    BRANCH = "BRA"      # branch / jump, PC-relative
    MEMORY = "MEM"      # lw / sw


class Arity(enum.Enum):
    NONE = 0
    ONE = 1
    TWO = 2
    THREE = 3


@dataclass(frozen=True)
class InsnDescriptor:
    mnemonic: str
    opcode: int
    insn_class: InsnClass
    arity: Arity

    @property
    def wide_immediate(self) -> bool:
        """MOVHI/MOVLO carry an 8-bit immediate and take no source register."""
        return self.opcode in (OPC_MOVHI, OPC_MOVLO)

    @property
    def immediate_field(self) -> ImmediateField:
        if self.insn_class is InsnClass.BRANCH:
            return BRANCH_IMM
        if self.wide_immediate:
            return WIDE_IMM
        return AMI_IMM


# ──────────────────────────────────────────────
# Mnemonic table
# ──────────────────────────────────────────────

INSTRUCTIONS: Dict[str, InsnDescriptor] = {}

def _op(mnemonic: str, opcode: int, insn_class: InsnClass, arity: Arity):
    """Register a mnemonic."""
    INSTRUCTIONS[mnemonic] = InsnDescriptor(mnemonic, opcode, insn_class, arity)

AMI, BRA, MEM = InsnClass.AMI, InsnClass.BRANCH, InsnClass.MEMORY

# ── Logical ──
_op('or',    OPC_OR,    AMI, Arity.TWO)
_op('and',   OPC_AND,   AMI, Arity.TWO)
_op('xor',   OPC_XOR,   AMI, Arity.TWO)
_op('sll',   OPC_SLL,   AMI, Arity.TWO)
_op('slr',   OPC_SLR,   AMI, Arity.TWO)
_op('not',   OPC_NOT,   AMI, Arity.ONE)
_op('neg',   OPC_NEG,   AMI, Arity.ONE)

# ── Arithmetic ──
_op('add',   OPC_ADD,   AMI, Arity.TWO)
_op('sub',   OPC_SUB,   AMI, Arity.TWO)
_op('cmp',   OPC_CMP,   AMI, Arity.TWO)

# ── Move ──
_op('mov',   OPC_MOV,   AMI, Arity.TWO)
_op('movhi', OPC_MOVHI, AMI, Arity.TWO)
_op('movlo', OPC_MOVLO, AMI, Arity.TWO)

# ── Branch ──
for mnem, opcode in [
    ('je',   OPC_JE),
    ('jne',  OPC_JNE),
    ('jgs',  OPC_JGS),
    ('jgu',  OPC_JGU),
    ('jls',  OPC_JLS),
    ('jlu',  OPC_JLU),
    ('jges', OPC_JGES),
    ('jgeu', OPC_JGEU),
    ('jles', OPC_JLES),
    ('jleu', OPC_JLEU),
    ('j',    OPC_J),
    ('jal',  OPC_JAL),
]:
    _op(mnem, opcode, BRA, Arity.ONE)

# ── Memory ──
_op('lw',    OPC_LW,    MEM, Arity.THREE)
_op('sw',    OPC_SW,    MEM, Arity.THREE)

# ── Misc ──
# nop is "or %r0, %r0": the all-zero word changes no register.
_op('nop',   OPC_OR,    AMI, Arity.NONE)


def lookup(mnemonic: str) -> InsnDescriptor:
    """Find the descriptor for a mnemonic (case-insensitive)."""
    try:
        return INSTRUCTIONS[mnemonic.lower()]
    except KeyError:
        raise AsmSyntaxError(f"instruction ({mnemonic}) not found") from None
