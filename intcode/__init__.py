"""
Intcode Virtual Machine
=======================
An interpreter for Intcode: a linear memory of signed integers, one
program counter, a relative base, and ten opcodes (arithmetic, compare,
conditional jumps, relative-base adjust, host I/O, halt).

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐
    │ Program  │───>│ Decoder  │───>│ Operands │───>│ Opcodes  │
    │ (ints)   │    │ (modes)  │    │ (values) │    │ (effect) │
    └──────────┘    └──────────┘    └──────────┘    └──────────┘
                          ^                               │
                          └──────────── IntcodeVM <───────┘

    - program.py:      text <-> list of ints
    - memory.py:       fixed-size word memory, bounds checked
    - decoder.py:      instruction word -> Instruction(op, modes)
    - operands.py:     parameter i -> value / write address
    - opcodes.py:      read-only opcode table and effect functions
    - vm.py:           fetch/decode/execute loop, copy, trace
    - hooks.py:        stock input/output hooks
    - disassembler.py: static listing of a program image
"""

__version__ = "0.4.0"

from typing import Callable, List, Optional, Sequence, Union

from .errors import (
    IntcodeError, UnknownOpcode, InvalidParameterMode, MissingHook,
    MissingInputHook, MissingOutputHook, HookFailure, MemoryAccessError,
    ProgramOverrun, ProgramFormatError,
)
from .memory import Memory
from .decoder import Instruction, decode_instruction, POSITION, IMMEDIATE, RELATIVE
from .opcodes import OPCODES, Opcode, StepResult
from .vm import IntcodeVM, StopReason
from .program import parse_program, format_program, load_program
from .hooks import InputExhausted, queue_input, collect_output
from .disassembler import disassemble


def run(program: Sequence[int],
        memory: Union[None, int, Memory, List[int]] = None,
        input_fn: Optional[Callable[[], int]] = None,
        output_fn: Optional[Callable[[int], None]] = None) -> IntcodeVM:
    """Run `program` to completion, working in `memory`.

    A caller-owned list passed as `memory` is modified in place. Returns
    the halted VM for inspection; raises the first error encountered.

    Example:
        mem = [0] * 16
        run([1, 0, 0, 0, 99], mem)
        mem[0]   # 2
    """
    vm = IntcodeVM(program, memory, input_fn, output_fn)
    vm.run()
    return vm
