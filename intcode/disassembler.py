"""
Intcode VM - Static Disassembler

Walks a program image linearly and renders each word as an instruction.
Intcode freely mixes code and data, so a word that does not decode (or
whose operands run off the end of the image) is emitted as DATA and the
walk resumes at the next word.

Operand notation:
    [7]      position mode, address 7
    #7       immediate value 7
    rb+7     relative mode, relative base + 7

Example:
    0000: 1002,4,3,4     MUL [4], #3, [4]
    0004: 33             DATA 33
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .decoder import IMMEDIATE, POSITION, decode_instruction
from .errors import IntcodeError


@dataclass
class DisassembledInstruction:
    """One listing row."""
    address: int
    words: Tuple[int, ...]
    mnemonic: str
    operand_str: str = ""

    @property
    def length(self) -> int:
        return len(self.words)

    @property
    def raw_str(self) -> str:
        return ",".join(str(w) for w in self.words)

    def format(self, raw_width: int = 20) -> str:
        asm = f"{self.mnemonic} {self.operand_str}".strip()
        return f"{self.address:04d}: {self.raw_str.ljust(raw_width)} {asm}"


def format_operand(mode: str, raw: int) -> str:
    if mode == POSITION:
        return f"[{raw}]"
    if mode == IMMEDIATE:
        return f"#{raw}"
    return f"rb{raw:+d}"


def decode_one(words: Sequence[int], offset: int,
               base_addr: int = 0) -> DisassembledInstruction:
    word = words[offset]
    try:
        ins = decode_instruction(word)
    except IntcodeError:
        return DisassembledInstruction(base_addr + offset, (word,),
                                       "DATA", str(word))

    end = offset + 1 + ins.params
    if end > len(words):
        return DisassembledInstruction(base_addr + offset, (word,),
                                       "DATA", str(word))

    raw = tuple(words[offset + 1:end])
    operands = ", ".join(format_operand(m, r) for m, r in zip(ins.modes, raw))
    return DisassembledInstruction(base_addr + offset, (word,) + raw,
                                   ins.op.mnemonic, operands)


def disassemble(words: Sequence[int], base_addr: int = 0,
                max_instructions: int = 0) -> List[DisassembledInstruction]:
    """Disassemble a program image. Returns one row per instruction/DATA word."""
    results: List[DisassembledInstruction] = []
    offset = 0
    while offset < len(words):
        inst = decode_one(words, offset, base_addr)
        results.append(inst)
        offset += inst.length
        if max_instructions and len(results) >= max_instructions:
            break
    return results
