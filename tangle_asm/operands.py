"""
Operand parsers and the per-arity instruction parsing strategies.

Operand parsers look at the cursor and return the parsed value, None when
the operand kind is not present (so the caller can try the next kind), or
raise an AssemblerError when the operand is present but malformed.

Operand syntax:
    register    %r0 .. %r7
    immediate   $<number>       (decimal, 0x hex, 0-prefixed octal)
    label       bare identifier, possibly defined later in the file

Strategy by arity:
    NONE    nop
    ONE     not %r1  |  j %r2  |  j $-4  |  j loop
    TWO     add %r1, %r2  |  add %r1, $5  |  add %r1, label
    THREE   lw %r1, $4(%r2)
"""

from __future__ import annotations
from typing import Optional, Tuple

from .encoder import AMI_IMM, ImmediateField, InstructionWord
from .errors import AsmSyntaxError
from .isa import Arity, InsnClass, InsnDescriptor
from .program import AssemblyContext, Instruction, PendingLabel, Resolved
from .scanner import LineCursor

__all__ = ['parse_register', 'parse_immediate', 'parse_label', 'parse_instruction']

REGISTER_DIGITS = "01234567"


# ──────────────────────────────────────────────
# Operand parsers
# ──────────────────────────────────────────────

def parse_register(cursor: LineCursor) -> Optional[int]:
    """Parse '%rN'. Returns the register number, or None if no '%' is present."""
    if not cursor.match('%'):
        return None
    if not cursor.match('r'):
        raise AsmSyntaxError(f"expected 'r' after '%', found {cursor.describe()}")
    if cursor.peek() not in REGISTER_DIGITS:
        raise AsmSyntaxError(f"invalid register, found {cursor.describe()} after '%r' "
                             f"(expects %r0 -- %r7)")
    return int(cursor.advance())


def parse_immediate(cursor: LineCursor, field: ImmediateField) -> Optional[int]:
    """Parse '$number' and range check it. Returns None if no '$' is present."""
    if not cursor.match('$'):
        return None
    return field.check(cursor.read_number())


def parse_label(cursor: LineCursor, field: ImmediateField,
                ctx: AssemblyContext) -> Tuple[int, Optional[str]]:
    """Parse a label reference.

    Returns (immediate, None) when the label is already defined, or
    (0, name) when it must be resolved in pass 2.
    """
    name = cursor.read_token()
    label = ctx.symbols.get(name)
    if label is None:
        return 0, name
    return field.label_value(name, label.offset, ctx.pc), None


def _value_operand(cursor: LineCursor, field: ImmediateField,
                   ctx: AssemblyContext) -> Tuple[int, Optional[str]]:
    """Immediate or label operand."""
    imm = parse_immediate(cursor, field)
    if imm is not None:
        return imm, None
    return parse_label(cursor, field, ctx)


# ──────────────────────────────────────────────
# Arity strategies
# ──────────────────────────────────────────────

def _parse_one(cursor: LineCursor, desc: InsnDescriptor,
               ctx: AssemblyContext) -> Tuple[InstructionWord, Optional[str]]:
    field = desc.immediate_field
    rd = parse_register(cursor)
    if rd is not None:
        return InstructionWord(desc.opcode, rd=rd, field=field), None

    if desc.insn_class is not InsnClass.BRANCH:
        raise AsmSyntaxError(
            f"operand of '{desc.mnemonic}' must be a register; in single-operand "
            f"instructions, immediate values and labels are only allowed inside branches")
    imm, pending = _value_operand(cursor, field, ctx)
    return InstructionWord(desc.opcode, imm=imm, field=field), pending


def _parse_two(cursor: LineCursor, desc: InsnDescriptor,
               ctx: AssemblyContext) -> Tuple[InstructionWord, Optional[str]]:
    field = desc.immediate_field
    rd = parse_register(cursor)
    if rd is None:
        raise AsmSyntaxError(f"first operand of instruction '{desc.mnemonic}' must be a register")
    cursor.skip_whitespace()
    cursor.expect(',')
    cursor.skip_whitespace()

    rs = parse_register(cursor)
    if rs is not None:
        if desc.wide_immediate:
            raise AsmSyntaxError(
                f"second operand of instruction '{desc.mnemonic}' must be an immediate or a label")
        return InstructionWord(desc.opcode, rd=rd, rs=rs, field=field), None

    imm, pending = _value_operand(cursor, field, ctx)
    return InstructionWord(desc.opcode, rd=rd, imm=imm, field=field), pending


def _parse_three(cursor: LineCursor, desc: InsnDescriptor,
                 ctx: AssemblyContext) -> Tuple[InstructionWord, Optional[str]]:
    rd = parse_register(cursor)
    if rd is None:
        raise AsmSyntaxError(f"first operand of instruction '{desc.mnemonic}' must be a register")
    cursor.skip_whitespace()
    cursor.expect(',')
    cursor.skip_whitespace()

    imm = parse_immediate(cursor, AMI_IMM)
    if imm is None:
        raise AsmSyntaxError(f"second operand of instruction '{desc.mnemonic}' must be a number ($imm)")
    cursor.skip_whitespace()
    cursor.expect('(')
    cursor.skip_whitespace()

    rs = parse_register(cursor)
    if rs is None:
        raise AsmSyntaxError(f"third operand of instruction '{desc.mnemonic}' must be a register")
    cursor.skip_whitespace()
    cursor.expect(')')
    return InstructionWord(desc.opcode, rd=rd, rs=rs, imm=imm, field=AMI_IMM), None


def parse_instruction(cursor: LineCursor, desc: InsnDescriptor,
                      ctx: AssemblyContext) -> Instruction:
    """Parse the operands of `desc` at the cursor and build the Instruction.

    The instruction is placed at ctx.pc; the caller appends it.
    """
    if desc.arity is Arity.NONE:
        word, pending = InstructionWord(desc.opcode, field=desc.immediate_field), None
    elif desc.arity is Arity.ONE:
        word, pending = _parse_one(cursor, desc, ctx)
    elif desc.arity is Arity.TWO:
        word, pending = _parse_two(cursor, desc, ctx)
    elif desc.arity is Arity.THREE:
        word, pending = _parse_three(cursor, desc, ctx)
    else:
        raise AsmSyntaxError(f"no parser for instruction '{desc.mnemonic}'")

    cursor.skip_whitespace()
    if not cursor.at_statement_end():
        raise AsmSyntaxError(
            f"unexpected {cursor.describe()} after operands of instruction '{desc.mnemonic}'")

    state = PendingLabel(word, pending) if pending is not None else Resolved(word)
    return Instruction(state, desc.insn_class, ctx.pc, ctx.line_num,
                       cursor.text.rstrip("\n"))
