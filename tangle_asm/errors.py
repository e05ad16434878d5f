"""
Assembler error types.

Every failure the assembler can report is an AssemblerError subclass.
Errors are raised where they are detected and caught by the driver at the
pass boundary, which tags them with the source file and line number.
"""

from __future__ import annotations
from typing import List

__all__ = [
    'AssemblerError', 'LexicalError', 'AsmSyntaxError', 'RangeError',
    'DuplicateSymbolError', 'UnresolvedSymbolError', 'ResourceError',
    'SymbolResolutionError',
]


class AssemblerError(Exception):
    """Base class for assembly errors."""
    def __init__(self, message: str, line_num: int = 0, source: str = ""):
        self.message = message
        self.line_num = line_num
        self.source = source
        super().__init__(message)

    def diagnostic(self) -> str:
        """Format as '<file>:<line>: Error: <message>'."""
        where = self.source or "<source>"
        if self.line_num:
            where = f"{where}:{self.line_num}"
        return f"{where}: Error: {self.message}"

    def __str__(self):
        return f"Line {self.line_num}: {self.message}" if self.line_num else self.message


class LexicalError(AssemblerError):
    """Oversized or empty token."""


class AsmSyntaxError(AssemblerError):
    """Unexpected character, missing punctuation, unknown mnemonic or bad operand."""


class RangeError(AssemblerError):
    """Immediate or resolved label value outside its field's range."""


class DuplicateSymbolError(AssemblerError):
    """Label defined more than once."""


class UnresolvedSymbolError(AssemblerError):
    """Label referenced but never defined."""


class ResourceError(AssemblerError):
    """Out of memory while storing a label or instruction."""


class SymbolResolutionError(AssemblerError):
    """Raised by Assembler.assemble() when pass 2 reported one or more errors."""
    def __init__(self, errors: List[AssemblerError]):
        self.errors = list(errors)
        lines = "\n".join(e.diagnostic() for e in self.errors)
        super().__init__(f"{len(self.errors)} label resolution error(s):\n{lines}")
