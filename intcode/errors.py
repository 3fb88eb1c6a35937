"""
Intcode VM - Exception Taxonomy

Every failure the engine can report derives from IntcodeError, so a host
can catch the whole family with one clause. Halt is NOT an exception;
see vm.StepResult.

    IntcodeError
      ├── UnknownOpcode          decoder: no table entry for the word
      ├── InvalidParameterMode   decoder/resolver: mode digit not 0/1/2
      ├── MissingHook
      │     ├── MissingInputHook
      │     └── MissingOutputHook
      ├── HookFailure            raised by hooks (hooks.InputExhausted)
      ├── MemoryAccessError      address outside the memory buffer
      ├── ProgramOverrun         execution ran off the end of memory
      └── ProgramFormatError     program text token is not an integer
"""

from typing import Optional


class IntcodeError(Exception):
    """Base class for all Intcode engine errors."""
    pass


class UnknownOpcode(IntcodeError):
    def __init__(self, opcode: int, word: int):
        self.opcode = opcode
        self.word = word
        super().__init__(f"unknown opcode {opcode} in instruction {word}")


class InvalidParameterMode(IntcodeError):
    def __init__(self, word: int, digit: int, message: Optional[str] = None):
        self.word = word
        self.digit = digit
        super().__init__(
            message or f"unknown param mode {digit} in instruction {word}")


class MissingHook(IntcodeError):
    pass


class MissingInputHook(MissingHook):
    def __init__(self):
        super().__init__("program wants input but no input func provided")


class MissingOutputHook(MissingHook):
    def __init__(self):
        super().__init__("program wants to output but no output func provided")


class HookFailure(IntcodeError):
    """Raised by input/output hooks. Propagates out of run() unchanged."""
    pass


class MemoryAccessError(IntcodeError):
    def __init__(self, address: int, size: int):
        self.address = address
        self.size = size
        super().__init__(
            f"address {address} outside memory of {size} words")


class ProgramOverrun(IntcodeError):
    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        super().__init__(
            f"got here with pos {position} and len(mem) {size}")


class ProgramFormatError(IntcodeError, ValueError):
    def __init__(self, token: str, index: int):
        self.token = token
        self.index = index
        super().__init__(f"token {index} is not an integer: {token!r}")
