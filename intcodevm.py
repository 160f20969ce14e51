#!/usr/bin/env python3
"""
intcodevm - Intcode program runner

Usage:
    python intcodevm.py <program.txt> [-i VALUE ...] [-c VALUE] [--stdin]
                        [--patch ADDR=VALUE ...] [--format lines|csv|json]
                        [--dump-memory] [-v] [-q] [--log-file PATH]

Inputs are consumed in order whenever the program asks for one.
  -i / --input      queue one value (repeatable)
  -c / --constant   answer every input request with the same value
  --stdin           read one value per line from standard input on demand

Exit codes:
    0  program halted normally
    1  program file missing or not valid Intcode text
    2  execution fault (bad opcode / mode, illegal operand)
    3  program asked for input that was not supplied

Examples:
    python intcodevm.py day05.txt -i 1
    python intcodevm.py day09.txt -c 2
    python intcodevm.py day13.txt --patch 0=2 --stdin
    python intcodevm.py quine.txt --format csv
"""

import argparse
import itertools
import json
import logging
import sys
from typing import List, Optional

from intcode_vm import __version__
from intcode_vm.emu import IntcodeComputer
from intcode_vm.errors import (
    LoadError, DecodeError, OperandError, InputExhausted,
)
from intcode_vm.log_setup import setup_logging

logger = logging.getLogger("intcode_vm.cli")

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_FAULT = 2
EXIT_NEEDS_INPUT = 3


def parse_int_arg(value: str) -> int:
    """Parse an integer argument that may be hex (0x...) or decimal, signed."""
    value = value.strip()
    sign = 1
    if value[:1] in ('-', '+'):
        sign = -1 if value[0] == '-' else 1
        value = value[1:]
    if value.startswith("0x") or value.startswith("0X"):
        digits, base = value[2:], 16
    else:
        digits, base = value, 10
    # int() would accept a second sign ("--5", "0x-5")
    if digits[:1] in ('-', '+'):
        raise ValueError(f"misplaced sign in integer argument {value!r}")
    return sign * int(digits, base)


def parse_patch_arg(value: str) -> tuple:
    """Parse ADDR=VALUE into (addr, value)."""
    addr, sep, val = value.partition('=')
    if not sep:
        raise argparse.ArgumentTypeError(f"expected ADDR=VALUE, got {value!r}")
    try:
        return parse_int_arg(addr), parse_int_arg(val)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected integers in {value!r}")


def _int_type(value: str) -> int:
    try:
        return parse_int_arg(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intcodevm",
        description="Run an Intcode program and print its outputs",
    )
    parser.add_argument("program", help="Program file (comma-separated integers)")
    feed = parser.add_mutually_exclusive_group()
    feed.add_argument("-i", "--input", dest="inputs", action="append",
                      type=_int_type, default=[],
                      help="Input value, repeat for more (consumed in order)")
    feed.add_argument("-c", "--constant", type=_int_type, default=None,
                      help="Answer every input request with this value")
    feed.add_argument("--stdin", action="store_true",
                      help="Read input values from stdin, one per line")
    parser.add_argument("--patch", action="append", type=parse_patch_arg,
                        default=[], metavar="ADDR=VALUE",
                        help="Write VALUE at ADDR before running (repeatable)")
    parser.add_argument("--format", choices=["lines", "csv", "json"],
                        default="lines", help="Output format (default: lines)")
    parser.add_argument("--dump-memory", action="store_true",
                        help="Print final memory as comma-separated text")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log errors")
    parser.add_argument("--log-file", default=None,
                        help="Also write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"intcodevm {__version__}")
    return parser


def _console_level(args) -> int:
    if args.quiet:
        return logging.ERROR
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    return logging.WARNING


def _stdin_values():
    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue
        try:
            yield parse_int_arg(line)
        except ValueError as e:
            raise LoadError(f"Input line is not an integer: {line!r}") from e


def _format_outputs(outputs: List[int], fmt: str) -> str:
    if fmt == "json":
        return json.dumps(outputs)
    if fmt == "csv":
        return ",".join(str(v) for v in outputs)
    return "\n".join(str(v) for v in outputs)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(console_level=_console_level(args), log_file=args.log_file)

    try:
        vm = IntcodeComputer.from_file(args.program)
    except LoadError as e:
        logger.error(f"Load error: {e}")
        return EXIT_LOAD_ERROR

    outputs: List[int] = []
    code = EXIT_OK
    try:
        for addr, value in args.patch:
            logger.info(f"Patching mem[{addr}] = {value}")
            vm.poke(addr, value)

        if args.constant is not None:
            values = itertools.repeat(args.constant)
        elif args.stdin:
            values = _stdin_values()
        else:
            values = iter(args.inputs)
        # outputs fills as the program runs, so a fault keeps earlier values
        vm.run_to_completion(values, outputs=outputs)
    except InputExhausted as e:
        logger.error(f"Program needs more input: {e}")
        code = EXIT_NEEDS_INPUT
    except (DecodeError, OperandError) as e:
        logger.error(f"Execution fault: {e}")
        code = EXIT_FAULT
    except LoadError as e:
        logger.error(f"Input error: {e}")
        code = EXIT_LOAD_ERROR

    if outputs:
        print(_format_outputs(outputs, args.format))
    if args.dump_memory:
        print(",".join(str(v) for v in vm.memory_snapshot()))

    if code == EXIT_OK:
        logger.info(f"Halted after {len(outputs)} outputs, {vm.regs.display()}")
    return code


if __name__ == "__main__":
    sys.exit(main())
