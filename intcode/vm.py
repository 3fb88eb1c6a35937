"""
Intcode VM - Execution Engine

Integrates:
  - Memory (memory.py)
  - Instruction decoder (decoder.py)
  - Operand resolver (operands.py)
  - Opcode table (opcodes.py)

Execution model, one step:
  1. If the previous instruction did not jump, advance the position by
     its parameter count. Clear the jump flag either way.
  2. Decode the word at the position.
  3. Advance the position by one, past the instruction word. Operands
     resolve relative to this position for the rest of the step.
  4. Run the opcode's effect. Input/output call the host hooks
     synchronously.

The advance for an instruction's parameters is deferred to the start of
the NEXT step, so a jump can simply overwrite the position and set the
flag. Observable behaviour is "advance by param count unless jumped".

Termination:
  - HALT:        opcode 99, run() returns StopReason.HALT
  - STEP_LIMIT:  run(max_steps=N) reached N steps first
  - any other outcome raises an IntcodeError subclass (or whatever a
    hook raised) and marks the VM failed; state stays inspectable
    afterwards but the VM cannot be stepped again
"""

import logging
from enum import Enum
from collections import deque
from typing import Callable, List, Optional, Sequence, Union

from .decoder import Instruction, decode_instruction
from .errors import IntcodeError, ProgramOverrun
from .memory import Memory
from .opcodes import StepResult
from .operands import read_param, write_param

log = logging.getLogger(__name__)

InputFn = Callable[[], int]
OutputFn = Callable[[int], None]


class StopReason(Enum):
    HALT = 'HALT'
    STEP_LIMIT = 'STEP_LIMIT'


class IntcodeVM:
    """Intcode virtual machine.

    Usage:
        out = []
        vm = IntcodeVM([3, 0, 4, 0, 99], input_fn=lambda: 42,
                       output_fn=out.append)
        vm.run()       # StopReason.HALT
        out            # [42]

    `memory` may be an int (words to allocate), a pre-sized Memory, or a
    caller-owned list of ints that is used in place; the program is
    copied into its prefix. When omitted,
    DEFAULT_MEMORY_SIZE words are allocated (or the program length if
    that is larger).
    """

    DEFAULT_MEMORY_SIZE = 4096
    DEFAULT_MAX_STEPS = 10_000_000
    TRACE_LIMIT = 10_000

    def __init__(self, program: Sequence[int],
                 memory: Union[None, int, Memory, List[int]] = None,
                 input_fn: Optional[InputFn] = None,
                 output_fn: Optional[OutputFn] = None):
        self.program: List[int] = list(program)

        if memory is None:
            memory = max(self.DEFAULT_MEMORY_SIZE, len(self.program))
        if isinstance(memory, int):
            memory = Memory(memory)
        elif not isinstance(memory, Memory):
            memory = Memory.wrap(memory)
        memory.load(self.program)
        self.mem: Memory = memory

        self.input_fn = input_fn
        self.output_fn = output_fn

        self.pos = 0
        self.ins: Optional[Instruction] = None
        self.jumped = False
        self.relative_base = 0

        self.halted = False
        self.failed = False
        self.steps = 0

        self._trace = False
        self._trace_output = deque(maxlen=self.TRACE_LIMIT)

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> StepResult:
        """Execute one instruction.

        Returns StepResult.HALT on opcode 99, else StepResult.CONTINUE.
        Raises on decode errors, missing hooks, bad addresses, and
        passes hook exceptions through untouched. Any of those leaves the
        VM failed: the faulting instruction is not retried or skipped.
        """
        if self.halted:
            raise IntcodeError("VM has already halted")
        if self.failed:
            raise IntcodeError("VM has failed")

        try:
            result = self._step()
        except Exception:
            self.failed = True
            raise

        if result is StepResult.HALT:
            self.halted = True
            log.debug("halt at %d after %d steps", self.pos - 1, self.steps)
        return result

    def _step(self) -> StepResult:
        if self.ins is not None and not self.jumped:
            self.pos += self.ins.params
        self.jumped = False

        word = self.mem.read(self.pos)
        ins = decode_instruction(word)
        self.ins = ins
        self.pos += 1

        if self._trace:
            self._trace_line(ins)

        result = ins.op.effect(self)
        self.steps += 1
        return result

    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """Run until halt, an error, or `max_steps` more steps.

        Raises:
            ProgramOverrun: the position left memory without a halt.
            IntcodeError: the VM already halted or failed.
        """
        if self.failed:
            raise IntcodeError("VM has failed")
        limit = None if max_steps is None else self.steps + max_steps

        try:
            while self.pos <= len(self.mem):
                if limit is not None and self.steps >= limit:
                    return StopReason.STEP_LIMIT
                if self.step() is StepResult.HALT:
                    return StopReason.HALT
        except Exception as e:
            log.debug("run stopped at %d after %d steps: %s",
                      self.pos, self.steps, e)
            raise

        self.failed = True
        raise ProgramOverrun(self.pos, len(self.mem))

    @property
    def position(self) -> int:
        return self.pos

    @property
    def memory(self) -> Memory:
        return self.mem

    # ══════════════════════════════════════════════
    # Operand access (used by opcode effects)
    # ══════════════════════════════════════════════

    def mval(self, i: int) -> int:
        """Value of parameter i under its addressing mode."""
        return read_param(self.mem, self.ins, self.pos,
                          self.relative_base, i)

    def set(self, i: int, value: int):
        """Write value to the address named by parameter i."""
        write_param(self.mem, self.ins, self.pos,
                    self.relative_base, i, value)

    def jump(self, pos: int):
        self.pos = pos
        self.jumped = True

    # ══════════════════════════════════════════════
    # Copy
    # ══════════════════════════════════════════════

    def copy(self) -> "IntcodeVM":
        """Independent VM with copied program and memory.

        Scalar state (position, current instruction, jump flag,
        relative base, step count) is carried over. The input/output
        hooks are shared, not duplicated; replace them on the copy if
        they hold per-run state.
        """
        vm = IntcodeVM.__new__(IntcodeVM)
        vm.program = list(self.program)
        vm.mem = self.mem.copy()
        vm.input_fn = self.input_fn
        vm.output_fn = self.output_fn
        vm.pos = self.pos
        vm.ins = self.ins
        vm.jumped = self.jumped
        vm.relative_base = self.relative_base
        vm.halted = self.halted
        vm.failed = self.failed
        vm.steps = self.steps
        vm._trace = self._trace
        vm._trace_output = deque(self._trace_output, maxlen=self.TRACE_LIMIT)
        return vm

    __copy__ = copy

    def __deepcopy__(self, memo) -> "IntcodeVM":
        # hooks stay shared
        return self.copy()

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Record one line per executed instruction (last TRACE_LIMIT kept)."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def _trace_line(self, ins: Instruction):
        raw = self.mem[self.pos:self.pos + ins.params]
        line = (f"{self.pos - 1:05d}: {ins.op.mnemonic:4s} "
                f"{','.join(str(r) for r in raw):24s} "
                f"rb={self.relative_base}")
        self._trace_output.append(line)
        log.debug(line)

    def __repr__(self) -> str:
        return (f"IntcodeVM(pos={self.pos}, relative_base={self.relative_base}, "
                f"steps={self.steps}, halted={self.halted}, failed={self.failed})")
