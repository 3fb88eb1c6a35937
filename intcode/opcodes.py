"""
Intcode VM - Opcode Table

Maps opcode numbers to (mnemonic, parameter count, effect function).

The parameter count is both the number of mode digits the decoder
extracts and how far the engine advances the position after the
instruction, unless the instruction jumped.

Effects are plain module-level functions taking the VM explicitly.
They resolve their own operands through vm.mval(i) / vm.set(i, value)
and return a StepResult. Failures are raised, never returned.

    code  mnemonic              params
    ----  --------------------  ------
      1   add                     3
      2   mult                    3
      3   input                   1
      4   output                  1
      5   jump-if-true            2
      6   jump-if-false           2
      7   less-than               3
      8   equals                  3
      9   adjust-relative-base    1
     99   halt                    0
"""

from enum import Enum
from types import MappingProxyType
from typing import Callable, NamedTuple

from .errors import MissingInputHook, MissingOutputHook


class StepResult(Enum):
    CONTINUE = 'CONTINUE'
    HALT = 'HALT'


class Opcode(NamedTuple):
    name: str
    code: int
    params: int
    effect: Callable

    @property
    def mnemonic(self) -> str:
        """Listing name, e.g. jump-if-true -> JIT."""
        return MNEMONICS[self.code]


# ──────────────────────────────────────────────
# Effects
# ──────────────────────────────────────────────

def op_add(vm) -> StepResult:
    vm.set(2, vm.mval(0) + vm.mval(1))
    return StepResult.CONTINUE


def op_mult(vm) -> StepResult:
    vm.set(2, vm.mval(0) * vm.mval(1))
    return StepResult.CONTINUE


def op_input(vm) -> StepResult:
    if vm.input_fn is None:
        raise MissingInputHook()
    vm.set(0, vm.input_fn())
    return StepResult.CONTINUE


def op_output(vm) -> StepResult:
    if vm.output_fn is None:
        raise MissingOutputHook()
    vm.output_fn(vm.mval(0))
    return StepResult.CONTINUE


def op_jump_if_true(vm) -> StepResult:
    if vm.mval(0) != 0:
        vm.jump(vm.mval(1))
    return StepResult.CONTINUE


def op_jump_if_false(vm) -> StepResult:
    if vm.mval(0) == 0:
        vm.jump(vm.mval(1))
    return StepResult.CONTINUE


def op_less_than(vm) -> StepResult:
    vm.set(2, 1 if vm.mval(0) < vm.mval(1) else 0)
    return StepResult.CONTINUE


def op_equals(vm) -> StepResult:
    vm.set(2, 1 if vm.mval(0) == vm.mval(1) else 0)
    return StepResult.CONTINUE


def op_adjust_relative_base(vm) -> StepResult:
    vm.relative_base += vm.mval(0)
    return StepResult.CONTINUE


def op_halt(vm) -> StepResult:
    return StepResult.HALT


# ──────────────────────────────────────────────
# Table
# ──────────────────────────────────────────────
# Read-only after import; safe to share between VMs and threads.

OPCODES = MappingProxyType({
    1:  Opcode('add',                  1,  3, op_add),
    2:  Opcode('mult',                 2,  3, op_mult),
    3:  Opcode('input',                3,  1, op_input),
    4:  Opcode('output',               4,  1, op_output),
    5:  Opcode('jump-if-true',         5,  2, op_jump_if_true),
    6:  Opcode('jump-if-false',        6,  2, op_jump_if_false),
    7:  Opcode('less-than',            7,  3, op_less_than),
    8:  Opcode('equals',               8,  3, op_equals),
    9:  Opcode('adjust-relative-base', 9,  1, op_adjust_relative_base),
    99: Opcode('halt',                 99, 0, op_halt),
})

MNEMONICS = MappingProxyType({
    1:  'ADD',
    2:  'MUL',
    3:  'IN',
    4:  'OUT',
    5:  'JIT',
    6:  'JIF',
    7:  'LT',
    8:  'EQ',
    9:  'ARB',
    99: 'HALT',
})

OPCODES_BY_NAME = MappingProxyType({op.name: op for op in OPCODES.values()})
