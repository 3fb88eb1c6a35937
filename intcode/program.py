"""
Intcode VM - Program Text

Programs are written as comma-separated signed integers:

    1,9,10,3,
    2,3,11,0,99,30,40,50

Whitespace and newlines anywhere are ignored, and a single trailing
comma is tolerated (files usually end with one or with a newline).
"""

from pathlib import Path
from typing import List, Sequence, Union

from .errors import ProgramFormatError


def parse_program(text: str) -> List[int]:
    """Parse program text into a list of ints.

    Raises ProgramFormatError naming the first bad token.
    """
    text = ''.join(text.split())
    if not text:
        return []

    parts = text.split(',')
    if parts[-1] == '':
        parts.pop()

    program = []
    for i, part in enumerate(parts):
        try:
            program.append(int(part))
        except ValueError:
            raise ProgramFormatError(part, i) from None
    return program


def format_program(words: Sequence[int]) -> str:
    return ','.join(str(w) for w in words)


def load_program(path: Union[str, Path]) -> List[int]:
    """Read and parse a program file."""
    return parse_program(Path(path).read_text(encoding='utf-8'))
