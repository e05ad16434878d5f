"""
Line scanner for Tangle assembly source.

The assembler works one source line at a time. A LineCursor wraps the line
text and a position; every parser in the package advances the same cursor.

Character classes:
  - whitespace:   space and tab only
  - label chars:  ASCII letters, digits, '_', '+', '-'
                  (tokens are labels, mnemonics or numbers)
  - comments:     '#' or ';' to end of line
  - directives:   elements starting with '.', ignored to end of line
"""

from __future__ import annotations
import re
import string

from .errors import AsmSyntaxError, LexicalError

__all__ = ['LineCursor', 'TOKEN_MAX', 'LABEL_CHARS', 'EOL']

TOKEN_MAX = 32
LABEL_CHARS = frozenset(string.ascii_letters + string.digits + "_+-")
WHITESPACE = " \t"
COMMENT_CHARS = "#;"
EOL = "\0"

# strtol(..., 0): optional blanks and sign, then hex / octal / decimal.
# Alternation order matters: "0x" without hex digits falls back to octal "0".
_NUMBER_RE = re.compile(r'[ \t\n\v\f\r]*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)')


class LineCursor:
    """A read position inside one line of source text."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.text[i] if i < len(self.text) else EOL

    def advance(self) -> str:
        ch = self.peek()
        if self.pos < len(self.text):
            self.pos += 1
        return ch

    def match(self, expected: str) -> bool:
        """Consume the next character if it equals `expected` (case-insensitive)."""
        if self.peek().lower() == expected:
            self.advance()
            return True
        return False

    def expect(self, expected: str):
        if not self.match(expected):
            raise AsmSyntaxError(f"expected '{expected}', found {self.describe()}")

    def describe(self) -> str:
        """Printable description of the next character, for error messages."""
        ch = self.peek()
        if ch == EOL or ch == "\n":
            return "end of line"
        return f"'{ch}'"

    def skip_whitespace(self):
        while self.peek() in WHITESPACE:
            self.pos += 1

    def skip_label_chars(self):
        while self.peek() in LABEL_CHARS:
            self.pos += 1

    def at_line_end(self) -> bool:
        return self.peek() in (EOL, "\n")

    def at_statement_end(self) -> bool:
        """True if only a comment or the end of the line remains."""
        return self.at_line_end() or self.peek() in COMMENT_CHARS

    def read_token(self) -> str:
        """Read a run of label characters and skip the blanks that follow it."""
        start = self.pos
        self.skip_label_chars()
        token = self.text[start:self.pos]
        if len(token) > TOKEN_MAX:
            raise LexicalError(f"token too large ({len(token)} > {TOKEN_MAX} chars): '{token}'")
        if not token:
            raise LexicalError(f"expected a label or mnemonic, found {self.describe()}")
        self.skip_whitespace()
        return token

    def read_number(self) -> int:
        """Read an integer literal (decimal, 0x hex, or 0-prefixed octal)."""
        m = _NUMBER_RE.match(self.text, self.pos)
        if not m:
            raise AsmSyntaxError(f"invalid number, found {self.describe()}")
        sign, digits = m.group(1), m.group(2)
        if digits[:2] in ('0x', '0X'):
            value = int(digits[2:], 16)
        elif digits.startswith('0'):
            value = int(digits, 8)
        else:
            value = int(digits)
        self.pos = m.end()
        return -value if sign == '-' else value
