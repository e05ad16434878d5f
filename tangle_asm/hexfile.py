"""
Hex image output.

Format (one word per line, as read by the simulator's $readmemh):

    // <input-file-name> file
    3805
    b8fe
    ...
"""

from __future__ import annotations
from typing import Iterable

__all__ = ['format_hex', 'write_hex_file', 'DEFAULT_OUTPUT']

DEFAULT_OUTPUT = "ram.hex"


def format_hex(source_name: str, words: Iterable[int]) -> str:
    lines = [f"// {source_name} file"]
    lines.extend(f"{word & 0xFFFF:04x}" for word in words)
    return '\n'.join(lines) + '\n'


def write_hex_file(path: str, source_name: str, words: Iterable[int]):
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_hex(source_name, words))
