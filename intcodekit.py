#!/usr/bin/env python3
"""
intcodekit - Intcode VM command line
====================================

    intcodekit run     - Run a program, print its outputs
    intcodekit disasm  - List a program as instructions
    intcodekit fmt     - Re-emit a program in normalized comma form

Usage:
    python intcodekit.py <command> [options]
    python intcodekit.py <command> --help

Examples:
    python intcodekit.py run day09.txt --input 1
    python intcodekit.py run day05.txt -i 5 --memory 65536 --trace -v
    python intcodekit.py run loop.txt --max-steps 100000
    python intcodekit.py disasm day02.txt
    python intcodekit.py fmt day02.txt

Exit codes:
    0  program halted
    1  engine or program-format error
    2  usage error
    3  --max-steps reached before halt
"""

import argparse
import logging
import sys

from intcode import (
    __version__, IntcodeVM, IntcodeError, StopReason,
    collect_output, disassemble, format_program, load_program, queue_input,
)
from intcode.log_setup import setup_logging

log = logging.getLogger("intcode.cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_STEP_LIMIT = 3


def parse_int_arg(value: str) -> int:
    """Parse an integer argument that may be hex (0x...) or decimal."""
    value = value.strip()
    if value.lower().startswith("0x") or value.lower().startswith("-0x"):
        return int(value, 16)
    return int(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intcodekit",
        description="Intcode VM toolkit - run, disassemble, format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"intcodekit {__version__}")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    parser.add_argument("--log-file", default=None,
                        help="Also write a DEBUG log to this file")
    sub = parser.add_subparsers(dest="command", metavar="command")

    # ── run ──────────────────────────────────────────────────────────────
    p_run = sub.add_parser("run", help="Run a program and print its outputs")
    p_run.add_argument("program", help="Program file (comma-separated ints)")
    p_run.add_argument("-i", "--input", action="append", type=parse_int_arg,
                       default=[], metavar="N",
                       help="Input value; repeat for several (consumed in order)")
    p_run.add_argument("--memory", type=parse_int_arg,
                       default=IntcodeVM.DEFAULT_MEMORY_SIZE, metavar="WORDS",
                       help=f"Memory size in words (default: {IntcodeVM.DEFAULT_MEMORY_SIZE})")
    p_run.add_argument("--max-steps", type=parse_int_arg,
                       default=IntcodeVM.DEFAULT_MAX_STEPS, metavar="N",
                       help=f"Stop after N instructions (default: {IntcodeVM.DEFAULT_MAX_STEPS})")
    p_run.add_argument("--trace", action="store_true",
                       help="Print an instruction trace to stderr after the run")
    p_run.add_argument("--dump", action="store_true",
                       help="Print the program-length memory prefix after the run")

    # ── disasm ───────────────────────────────────────────────────────────
    p_dis = sub.add_parser("disasm", help="Disassemble a program")
    p_dis.add_argument("program", help="Program file")

    # ── fmt ──────────────────────────────────────────────────────────────
    p_fmt = sub.add_parser("fmt", help="Normalize program text")
    p_fmt.add_argument("program", help="Program file")

    return parser


def cmd_run(args) -> int:
    program = load_program(args.program)
    output_fn, outputs = collect_output()
    vm = IntcodeVM(program, max(args.memory, len(program)),
                   input_fn=queue_input(args.input),
                   output_fn=output_fn)
    vm.enable_trace(args.trace)
    log.info("Loaded %s: %d words, memory %d words",
             args.program, len(program), len(vm.memory))

    try:
        reason = vm.run(max_steps=args.max_steps)
    finally:
        for value in outputs:
            print(value)
        if args.trace:
            print(vm.get_trace(), file=sys.stderr)

    log.info("%s after %d steps", reason.value, vm.steps)
    if args.dump:
        print(format_program(vm.memory[:len(program)]))

    if reason is StopReason.STEP_LIMIT:
        print(f"Step limit reached: {args.max_steps} steps, pos {vm.position}",
              file=sys.stderr)
        return EXIT_STEP_LIMIT
    return EXIT_OK


def cmd_disasm(args) -> int:
    for row in disassemble(load_program(args.program)):
        print(row.format())
    return EXIT_OK


def cmd_fmt(args) -> int:
    print(format_program(load_program(args.program)))
    return EXIT_OK


COMMANDS = {
    "run": cmd_run,
    "disasm": cmd_disasm,
    "fmt": cmd_fmt,
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    setup_logging(console_level=level, log_file=args.log_file)

    try:
        return COMMANDS[args.command](args)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return EXIT_ERROR
    except IntcodeError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
