"""
Decoder and operand resolver tests.

Instruction words are hand-packed: opcode in the low two digits, one
mode digit per parameter above that.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from intcode.decoder import decode_instruction, POSITION, IMMEDIATE, RELATIVE
from intcode.errors import UnknownOpcode, InvalidParameterMode
from intcode.memory import Memory
from intcode.opcodes import OPCODES, OPCODES_BY_NAME
from intcode.operands import read_param, write_address, write_param


class TestDecodeOpcode:
    def test_plain_add(self):
        ins = decode_instruction(1)
        assert ins.op.name == 'add'
        assert ins.modes == (POSITION, POSITION, POSITION)
        assert ins.params == 3
        assert ins.word == 1

    def test_mixed_modes(self):
        """1002 -> mult, modes position/immediate/position"""
        ins = decode_instruction(1002)
        assert ins.op.name == 'mult'
        assert ins.modes == (POSITION, IMMEDIATE, POSITION)

    def test_relative_write(self):
        """21101 -> add #, #, rb+"""
        ins = decode_instruction(21101)
        assert ins.modes == (IMMEDIATE, IMMEDIATE, RELATIVE)

    def test_mode_count_matches_params(self):
        for code, op in OPCODES.items():
            assert len(decode_instruction(code).modes) == op.params

    def test_halt_has_no_modes(self):
        ins = decode_instruction(99)
        assert ins.op.name == 'halt'
        assert ins.modes == ()

    def test_single_param_modes(self):
        assert decode_instruction(109).modes == (IMMEDIATE,)
        assert decode_instruction(204).modes == (RELATIVE,)
        assert decode_instruction(3).modes == (POSITION,)

    def test_table_names(self):
        names = {op.name for op in OPCODES.values()}
        assert names == {
            'add', 'mult', 'input', 'output', 'jump-if-true',
            'jump-if-false', 'less-than', 'equals',
            'adjust-relative-base', 'halt',
        }
        assert OPCODES_BY_NAME['equals'].code == 8

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            OPCODES[42] = OPCODES[1]


class TestDecodeErrors:
    def test_unknown_opcode(self):
        with pytest.raises(UnknownOpcode) as exc:
            decode_instruction(50)
        assert exc.value.opcode == 50
        assert exc.value.word == 50

    def test_zero_is_unknown(self):
        with pytest.raises(UnknownOpcode):
            decode_instruction(0)

    def test_stray_mode_digits_on_halt(self):
        """1399: halt takes no parameters, so the 13 prefix is invalid."""
        with pytest.raises(UnknownOpcode) as exc:
            decode_instruction(1399)
        assert exc.value.opcode == 99
        assert exc.value.word == 1399

    def test_stray_mode_digits_beyond_params(self):
        with pytest.raises(UnknownOpcode):
            decode_instruction(1000004)

    def test_negative_word(self):
        with pytest.raises(UnknownOpcode):
            decode_instruction(-1)

    def test_invalid_mode_digit(self):
        with pytest.raises(InvalidParameterMode) as exc:
            decode_instruction(301)
        assert exc.value.digit == 3
        assert exc.value.word == 301

    def test_invalid_mode_in_last_param(self):
        with pytest.raises(InvalidParameterMode) as exc:
            decode_instruction(91107)
        assert exc.value.digit == 9


class TestOperandResolver:
    """Parameters resolve relative to `base`, the word after the opcode."""

    def _mem(self):
        mem = Memory(32)
        mem.load([0, 5, 7, 9, 0, 111, 0, 222, 0, 333])
        return mem

    def test_position_read(self):
        mem = self._mem()
        ins = decode_instruction(1)
        assert read_param(mem, ins, 1, 0, 0) == 111   # mem[5]
        assert read_param(mem, ins, 1, 0, 1) == 222   # mem[7]

    def test_immediate_read(self):
        mem = self._mem()
        ins = decode_instruction(1101)
        assert read_param(mem, ins, 1, 0, 0) == 5
        assert read_param(mem, ins, 1, 0, 1) == 7

    def test_relative_read(self):
        mem = self._mem()
        ins = decode_instruction(2201)
        assert read_param(mem, ins, 1, 2, 0) == 222   # mem[2 + 5]
        assert read_param(mem, ins, 1, 2, 1) == 333   # mem[2 + 7]

    def test_relative_negative_offset(self):
        mem = Memory(16)
        mem.load([204, -3, 0, 0, 0, 0, 0, 42])
        ins = decode_instruction(204)
        assert read_param(mem, ins, 1, 10, 0) == 42

    def test_write_position(self):
        mem = self._mem()
        ins = decode_instruction(1)
        assert write_address(mem, ins, 1, 0, 2) == 9
        write_param(mem, ins, 1, 0, 2, -4)
        assert mem.read(9) == -4

    def test_write_relative(self):
        mem = self._mem()
        ins = decode_instruction(20001)
        write_param(mem, ins, 1, 10, 2, 77)
        assert mem.read(19) == 77

    def test_write_immediate_rejected(self):
        mem = self._mem()
        ins = decode_instruction(10001)
        with pytest.raises(InvalidParameterMode):
            write_param(mem, ins, 1, 0, 2, 1)
        assert mem.read(9) == 333
