"""
Assembly-time program model: labels, the symbol table, instructions and
the context that carries all mutable state through one assembly run.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .encoder import INSN_BYTES, InstructionWord
from .errors import DuplicateSymbolError, ResourceError
from .isa import InsnClass

__all__ = [
    'Label', 'SymbolTable', 'Resolved', 'PendingLabel', 'Instruction',
    'AssemblyContext',
]


@dataclass(frozen=True)
class Label:
    name: str
    offset: int
    line_num: int = 0


class SymbolTable:
    """Label name -> Label. Names are case-sensitive and defined only once."""

    def __init__(self):
        self._labels: Dict[str, Label] = {}

    def define(self, name: str, offset: int, line_num: int = 0) -> Label:
        existing = self._labels.get(name)
        if existing is not None:
            where = f" at line {existing.line_num}" if existing.line_num else ""
            raise DuplicateSymbolError(f"label ({name}) is already defined{where}")
        label = Label(name, offset, line_num)
        try:
            self._labels[name] = label
        except MemoryError:
            raise ResourceError(f"failed to allocate new label ({name}), insufficient memory") from None
        return label

    def get(self, name: str) -> Optional[Label]:
        return self._labels.get(name)

    def __len__(self) -> int:
        return len(self._labels)


@dataclass(frozen=True)
class Resolved:
    """Instruction word is final."""
    word: InstructionWord


@dataclass(frozen=True)
class PendingLabel:
    """Immediate field is zero until `label` is resolved in pass 2."""
    word: InstructionWord
    label: str


Encoding = Union[Resolved, PendingLabel]


@dataclass
class Instruction:
    state: Encoding
    insn_class: InsnClass
    pc: int
    line_num: int = 0
    source: str = ""

    @property
    def encoded(self) -> int:
        return self.state.word.encode()

    @property
    def pending_label(self) -> Optional[str]:
        if isinstance(self.state, PendingLabel):
            return self.state.label
        return None


@dataclass
class AssemblyContext:
    """Everything one assembly run mutates."""
    source_name: str = "<source>"
    line_num: int = 0
    pc: int = 0
    symbols: SymbolTable = field(default_factory=SymbolTable)
    instructions: List[Instruction] = field(default_factory=list)

    def emit(self, insn: Instruction):
        """Append an instruction and advance the program counter."""
        try:
            self.instructions.append(insn)
        except MemoryError:
            raise ResourceError(
                f"error while adding processed instruction: {insn.encoded:04x}") from None
        self.pc += INSN_BYTES
