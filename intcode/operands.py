"""
Intcode VM - Operand Resolver

Turns parameter i of a decoded instruction into a value (for reads) or
an address (for writes). `base` is the address of parameter 0, i.e. one
past the instruction word; the engine bumps its position there right
after decoding and leaves it until the next step.

    mode       read value               write address
    ---------  -----------------------  -------------------
    POSITION   mem[raw]                 raw
    IMMEDIATE  raw                      (invalid)
    RELATIVE   mem[relative_base + raw] relative_base + raw
"""

from .decoder import IMMEDIATE, POSITION, RELATIVE, Instruction
from .errors import InvalidParameterMode
from .memory import Memory


def read_param(mem: Memory, ins: Instruction, base: int,
               relative_base: int, i: int) -> int:
    raw = mem.read(base + i)
    mode = ins.modes[i]
    if mode == POSITION:
        return mem.read(raw)
    if mode == IMMEDIATE:
        return raw
    if mode == RELATIVE:
        return mem.read(relative_base + raw)
    raise ValueError(f"Unknown addressing mode: {mode}")


def write_address(mem: Memory, ins: Instruction, base: int,
                  relative_base: int, i: int) -> int:
    raw = mem.read(base + i)
    mode = ins.modes[i]
    if mode == POSITION:
        return raw
    if mode == RELATIVE:
        return relative_base + raw
    raise InvalidParameterMode(
        ins.word, 1,
        f"immediate mode used for write parameter {i} "
        f"in instruction {ins.word}")


def write_param(mem: Memory, ins: Instruction, base: int,
                relative_base: int, i: int, value: int):
    mem.write(write_address(mem, ins, base, relative_base, i), value)
