"""
Intcode VM - Instruction Decoder

An instruction word packs the opcode into its two low decimal digits and
one parameter mode per digit above that, least significant first:

    1002  ->  opcode 02 (mult), modes: 0 position, 1 immediate, 0 position
     ABCDE
       ^^    opcode
      ^      mode of parameter 0
     ^       mode of parameter 1
    ^        mode of parameter 2

Missing high digits read as 0 (position mode). The decoder extracts
exactly as many modes as the opcode has parameters. Any non-zero digit
left over after that means the word is not a valid encoding of that
opcode, and is reported as UnknownOpcode.

Addressing modes:
  POSITION   parameter is an address; the value lives in memory there
  IMMEDIATE  parameter is the value itself (never a write target)
  RELATIVE   parameter is an offset from the VM's relative base
"""

from dataclasses import dataclass
from typing import Mapping, Tuple

from .errors import InvalidParameterMode, UnknownOpcode
from .opcodes import OPCODES, Opcode

# ──────────────────────────────────────────────
# Addressing mode constants
# ──────────────────────────────────────────────

POSITION  = 'POSITION'
IMMEDIATE = 'IMMEDIATE'
RELATIVE  = 'RELATIVE'

MODE_DIGITS = {
    0: POSITION,
    1: IMMEDIATE,
    2: RELATIVE,
}


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction word."""
    op: Opcode
    modes: Tuple[str, ...]
    word: int

    @property
    def params(self) -> int:
        return self.op.params


def decode_instruction(word: int,
                       table: Mapping[int, Opcode] = OPCODES) -> Instruction:
    """Decode a raw instruction word into opcode + parameter modes.

    Raises:
        UnknownOpcode: low two digits not in the table, or stray mode
            digits beyond the opcode's parameter count.
        InvalidParameterMode: a mode digit other than 0, 1 or 2.
    """
    if word < 0:
        raise UnknownOpcode(word, word)

    opcode = word % 100
    op = table.get(opcode)
    if op is None:
        raise UnknownOpcode(opcode, word)

    rest = word // 100
    modes = []
    for _ in range(op.params):
        digit = rest % 10
        mode = MODE_DIGITS.get(digit)
        if mode is None:
            raise InvalidParameterMode(word, digit)
        modes.append(mode)
        rest //= 10

    if rest:
        raise UnknownOpcode(opcode, word)

    return Instruction(op, tuple(modes), word)
