"""
Tangle Two-Pass Assembler.

Assembles Tangle assembly text into a list of 16-bit instruction words.

Input:  Assembly text
Output: Encoded words, hex image text (see hexfile.py), or a listing

Source syntax:
    label:                      defines `label` at the current PC
    add   %r1, $5               instruction (mnemonics are case-insensitive)
    lw    %r2, $4(%r3)          memory access, base + offset
    j     loop                  branch to a label (PC-relative)
    # comment  /  ; comment     ignored to end of line
    .text                       directives are ignored

How the two-pass algorithm works:
  Pass 1: Scan every line. Labels get the current PC. Each instruction is
          parsed and encoded immediately; every instruction is 2 bytes, so
          the PC is known without sizing. A reference to a label that is
          not defined yet leaves the immediate zero and records the name.
          The first error stops pass 1.
  Pass 2: Walk the instructions in order and fill in every pending label
          from the now-complete symbol table. Errors are collected; every
          instruction is visited.
"""

from __future__ import annotations
import logging
import os
from typing import Iterable, List

from .encoder import INSN_BYTES
from .errors import AssemblerError, SymbolResolutionError, UnresolvedSymbolError
from .hexfile import format_hex
from .isa import lookup
from .operands import parse_instruction
from .program import AssemblyContext, Instruction, PendingLabel, Resolved
from .scanner import LineCursor

__all__ = ['Assembler', 'assemble', 'assemble_to_hex']

logger = logging.getLogger(__name__)

DIRECTIVE_CHAR = '.'


class Assembler:
    """Two-pass Tangle assembler.

    Usage:
        asm = Assembler("prog.s")
        words = asm.assemble(source_text)
        hex_text = asm.to_hex()
    """

    def __init__(self, source_name: str = "<source>"):
        self.source_name = source_name
        self.ctx = AssemblyContext(source_name=os.path.basename(source_name) or source_name)
        self.errors: List[AssemblerError] = []

    # ── Results ─────────────────────────────

    @property
    def instructions(self) -> List[Instruction]:
        return self.ctx.instructions

    @property
    def symbols(self):
        return self.ctx.symbols

    @property
    def words(self) -> List[int]:
        return [insn.encoded for insn in self.ctx.instructions]

    # ── Driver ──────────────────────────────

    def assemble(self, source: str) -> List[int]:
        """Assemble source text and return the encoded words.

        Raises the pass 1 error, or SymbolResolutionError with every
        pass 2 error.
        """
        if not self.parse(source.split("\n")):
            raise self.errors[0]
        if not self.resolve_labels():
            raise SymbolResolutionError(self.errors)
        return self.words

    def run(self, source: str) -> bool:
        """Run both passes, reporting instead of raising. Returns success."""
        return self.parse(source.split("\n")) and self.resolve_labels()

    def parse(self, lines: Iterable[str]) -> bool:
        """Pass 1: collect labels and build instructions. Stops at the first error."""
        for line_num, line in enumerate(lines, 1):
            self.ctx.line_num = line_num
            try:
                self._parse_line(line)
            except AssemblerError as e:
                self._report(e, self.ctx.line_num)
                logger.info(f"pass 1 aborted at line {self.ctx.line_num}")
                return False
        logger.info(f"pass 1: {len(self.ctx.instructions)} instructions, "
                    f"{len(self.ctx.symbols)} labels")
        return True

    def _parse_line(self, line: str):
        ctx = self.ctx
        cursor = LineCursor(line)
        while not cursor.at_line_end():
            cursor.skip_whitespace()
            if cursor.at_statement_end() or cursor.peek() == DIRECTIVE_CHAR:
                return

            token = cursor.read_token()
            if cursor.match(':'):
                ctx.symbols.define(token, ctx.pc, ctx.line_num)
                logger.debug(f"{ctx.source_name}:{ctx.line_num}: label {token} = {ctx.pc:#06x}")
                continue

            insn = parse_instruction(cursor, lookup(token), ctx)
            ctx.emit(insn)
            logger.debug(f"{ctx.source_name}:{ctx.line_num}: {insn.pc:#06x} {insn.encoded:04x}"
                         + (f" (pending {insn.pending_label})" if insn.pending_label else ""))
            return

    def resolve_labels(self) -> bool:
        """Pass 2: patch pending label references. Visits every instruction."""
        ok = True
        resolved = 0
        for insn in self.ctx.instructions:
            state = insn.state
            if not isinstance(state, PendingLabel):
                continue
            try:
                label = self.ctx.symbols.get(state.label)
                if label is None:
                    raise UnresolvedSymbolError(f"label ({state.label}) not found")
                imm = state.word.field.label_value(state.label, label.offset, insn.pc)
                insn.state = Resolved(state.word.with_imm(imm))
                resolved += 1
            except AssemblerError as e:
                insn.state = Resolved(state.word)
                self._report(e, insn.line_num)
                ok = False
        logger.info(f"pass 2: {resolved} label references resolved")
        return ok

    def _report(self, err: AssemblerError, line_num: int):
        if not err.line_num:
            err.line_num = line_num
        if not err.source:
            err.source = self.ctx.source_name
        self.errors.append(err)
        logger.error(err.diagnostic())

    # ── Output ──────────────────────────────

    def to_hex(self) -> str:
        return format_hex(self.source_name, self.words)

    def get_listing(self) -> str:
        """Return a listing showing PC, encoded word and source for each instruction."""
        lines = [f"{'PC':>6}  {'WORD':<4}  SOURCE", "-" * 60]
        for insn in self.ctx.instructions:
            lines.append(f"{insn.pc:#06x}  {insn.encoded:04x}  {insn.source.strip()}")
        lines.append(f"{len(self.ctx.instructions)} instructions, "
                     f"{len(self.ctx.instructions) * INSN_BYTES} bytes")
        return '\n'.join(lines)


# ──────────────────────────────────────────────
# Convenience functions
# ──────────────────────────────────────────────

def assemble(source: str, source_name: str = "<source>") -> List[int]:
    """Assemble source text, return the list of encoded words."""
    return Assembler(source_name).assemble(source)


def assemble_to_hex(source: str, source_name: str = "<source>") -> str:
    """Assemble source text, return the hex image text."""
    asm = Assembler(source_name)
    asm.assemble(source)
    return asm.to_hex()
