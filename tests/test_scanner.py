"""
Scanner Tests for the Tangle Assembler.

LineCursor character classes, tokens and numeric literals.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from tangle_asm.errors import AsmSyntaxError, LexicalError
from tangle_asm.scanner import EOL, TOKEN_MAX, LineCursor


class TestTokens:

    def test_token_stops_at_colon(self):
        c = LineCursor("loop: nop")
        assert c.read_token() == "loop"
        assert c.peek() == ":"

    def test_token_skips_trailing_blanks(self):
        c = LineCursor("add \t %r1")
        assert c.read_token() == "add"
        assert c.peek() == "%"

    def test_label_characters(self):
        assert LineCursor("a_b+c-d9,").read_token() == "a_b+c-d9"

    def test_token_size_limit(self):
        assert LineCursor("x" * TOKEN_MAX).read_token() == "x" * TOKEN_MAX
        with pytest.raises(LexicalError, match="too large"):
            LineCursor("x" * (TOKEN_MAX + 1)).read_token()

    @pytest.mark.parametrize("text", ["", ",x", "%r1", "(x"])
    def test_empty_token(self, text):
        with pytest.raises(LexicalError):
            LineCursor(text).read_token()


class TestNumbers:

    @pytest.mark.parametrize("text,value", [
        ("0", 0),
        ("42", 42),
        ("-5", -5),
        ("+7", 7),
        ("0x1F", 31),
        ("0XfF", 255),
        ("017", 15),
        ("-0x10", -16),
        (" 12", 12),
    ])
    def test_literals(self, text, value):
        assert LineCursor(text).read_number() == value

    def test_longest_prefix_is_consumed(self):
        c = LineCursor("09")
        assert c.read_number() == 0
        assert c.peek() == "9"

        c = LineCursor("0x")
        assert c.read_number() == 0
        assert c.peek() == "x"

        c = LineCursor("12(%r1)")
        assert c.read_number() == 12
        assert c.peek() == "("

    @pytest.mark.parametrize("text", ["", "abc", "$1", "-", "x10"])
    def test_invalid_number(self, text):
        with pytest.raises(AsmSyntaxError, match="invalid number"):
            LineCursor(text).read_number()


class TestCursor:

    def test_whitespace_is_space_and_tab_only(self):
        c = LineCursor(" \t x")
        c.skip_whitespace()
        assert c.peek() == "x"

        c = LineCursor("\vx")
        c.skip_whitespace()
        assert c.peek() == "\v"

    def test_match_is_case_insensitive_and_consumes(self):
        c = LineCursor("Rx")
        assert c.match("r")
        assert not c.match("r")
        assert c.peek() == "x"

    def test_expect(self):
        c = LineCursor(",")
        c.expect(",")
        with pytest.raises(AsmSyntaxError, match="expected '\\)', found end of line"):
            c.expect(")")

    def test_peek_past_end(self):
        c = LineCursor("a")
        c.advance()
        assert c.peek() == EOL
        assert c.advance() == EOL
        assert c.at_line_end()

    @pytest.mark.parametrize("text,expected", [
        ("", True),
        ("\n", True),
        ("# comment", True),
        ("; comment", True),
        ("x", False),
        (" #", False),
    ])
    def test_statement_end(self, text, expected):
        assert LineCursor(text).at_statement_end() is expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
