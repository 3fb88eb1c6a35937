"""intcodekit CLI tests (invoked through main(argv))."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
import intcodekit


@pytest.fixture
def prog_file(tmp_path):
    def write(text):
        path = tmp_path / "prog.txt"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write


class TestRun:
    def test_outputs_printed(self, prog_file, capsys):
        path = prog_file("3,9,8,9,10,9,4,9,99,-1,8\n")
        assert intcodekit.main(["run", path, "-i", "8"]) == 0
        assert capsys.readouterr().out == "1\n"

    def test_multiple_inputs(self, prog_file, capsys):
        path = prog_file("3,0,3,1,4,0,4,1,99")
        assert intcodekit.main(["run", path, "-i", "5", "-i", "0x10"]) == 0
        assert capsys.readouterr().out.split() == ["5", "16"]

    def test_dump(self, prog_file, capsys):
        path = prog_file("1,0,0,0,99")
        assert intcodekit.main(["run", path, "--dump"]) == 0
        assert capsys.readouterr().out.strip() == "2,0,0,0,99"

    def test_step_limit(self, prog_file, capsys):
        path = prog_file("1105,1,0")
        assert intcodekit.main(["run", path, "--max-steps", "50"]) == intcodekit.EXIT_STEP_LIMIT
        assert "Step limit" in capsys.readouterr().err

    def test_input_exhausted(self, prog_file, capsys):
        path = prog_file("104,3,3,0,99")
        assert intcodekit.main(["run", path]) == intcodekit.EXIT_ERROR
        captured = capsys.readouterr()
        assert captured.out == "3\n"
        assert "InputExhausted" in captured.err

    def test_unknown_opcode(self, prog_file, capsys):
        path = prog_file("50")
        assert intcodekit.main(["run", path]) == intcodekit.EXIT_ERROR
        assert "UnknownOpcode" in capsys.readouterr().err

    def test_bad_program_text(self, prog_file, capsys):
        path = prog_file("1,two,3")
        assert intcodekit.main(["run", path]) == intcodekit.EXIT_ERROR
        assert "ProgramFormatError" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        missing = str(tmp_path / "nope.txt")
        assert intcodekit.main(["run", missing]) == intcodekit.EXIT_ERROR
        assert "File not found" in capsys.readouterr().err

    def test_trace(self, prog_file, capsys):
        path = prog_file("1,0,0,0,99")
        assert intcodekit.main(["run", path, "--trace"]) == 0
        assert "00000: ADD" in capsys.readouterr().err

    def test_log_file(self, prog_file, tmp_path):
        path = prog_file("99")
        log_path = tmp_path / "logs" / "run.log"
        assert intcodekit.main(["--log-file", str(log_path), "run", path]) == 0
        assert log_path.exists()
        assert "HALT after 1 steps" in log_path.read_text(encoding="utf-8")


class TestOtherCommands:
    def test_disasm(self, prog_file, capsys):
        path = prog_file("1002,4,3,4,33")
        assert intcodekit.main(["disasm", path]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert "MUL [4], #3, [4]" in lines[0]
        assert lines[1].endswith("DATA 33")

    def test_fmt(self, prog_file, capsys):
        path = prog_file(" 1, 2 ,\n3,\n")
        assert intcodekit.main(["fmt", path]) == 0
        assert capsys.readouterr().out == "1,2,3\n"

    def test_no_command(self, capsys):
        assert intcodekit.main([]) == 2

    def test_parse_int_arg(self):
        assert intcodekit.parse_int_arg("0x1F") == 31
        assert intcodekit.parse_int_arg("-7") == -7
        assert intcodekit.parse_int_arg(" 12 ") == 12
