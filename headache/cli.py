#!/usr/bin/env python3
"""
headache — Brainfuck interpreter CLI

Usage:
    headache <program.b> [--debug] [--profile standard|zero-eof|legacy]
                         [--cell-bits 8|16|32] [--eof unchanged|zero|max|fault]
                         [--dump-tape] [--dump-window START LENGTH]
                         [--verbose] [--log-file PATH]

Program output goes to stdout. With --debug the rendered program and one
trace line per step are interleaved with it. Diagnostics go to stderr.

Exit codes:
    0    program ran to the end
    1    source file unreadable, or bad configuration
    2    runtime fault (unmatched bracket, invalid output value, ...)
    130  interrupted

Examples:
    headache hello.b
    headache echo.b --eof zero
    HEADACHE_CELL_BITS=32 headache wide.b --dump-tape
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import CELL_BITS_CHOICES, PROFILES, ConfigError, EngineConfig, EofPolicy
from .engine import Engine, EngineError
from .loader import LoadError, load_file
from .log_setup import setup_logging
from .streams import ConsoleIO

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="headache",
        description="An interpreter for Brainfuck",
        epilog="Profiles: " + ", ".join(f"{k} ({v['description']})" for k, v in PROFILES.items()),
    )
    parser.add_argument("input", help="Program source file")
    parser.add_argument("-d", "--debug", action="store_true",
                        help="Print the program and a trace line after every step")
    parser.add_argument("--profile", default="standard", choices=list(PROFILES),
                        help="Engine settings profile (default: standard)")
    parser.add_argument("--cell-bits", type=int, default=None, choices=CELL_BITS_CHOICES,
                        help="Cell width in bits (overrides profile)")
    parser.add_argument("--eof", default=None,
                        help="End-of-input policy: " + ", ".join(p.value for p in EofPolicy)
                             + " (also accepts 0 and -1)")
    parser.add_argument("--dump-tape", action="store_true",
                        help="Print written tape cells to stderr after the run")
    parser.add_argument("--dump-window", nargs=2, type=int, default=None,
                        metavar=("START", "LENGTH"),
                        help="Print LENGTH cells from START as a grid to stderr after the run")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log engine details to stderr")
    parser.add_argument("--log-file", default=None,
                        help="Also write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"headache {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )

    try:
        config = EngineConfig.resolve(args.profile, cell_bits=args.cell_bits, eof=args.eof)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        program = load_file(args.input)
    except LoadError as e:
        print(f"Could not read file: {e.path} ({e.reason})", file=sys.stderr)
        return 1

    log.debug("Profile %s -> %d-bit cells, eof=%s",
              args.profile, config.cell_bits, config.eof_policy.value)

    engine = Engine.with_program(program, io=ConsoleIO(), config=config)
    try:
        final = engine.run(trace=args.debug)
    except EngineError as e:
        sys.stdout.flush()
        print(f"\n{type(e).__name__}: {e}", file=sys.stderr)
        log.debug("Fault after %d steps, ptr=%d", engine.steps, engine.ptr, exc_info=True)
        return 2
    except KeyboardInterrupt:
        sys.stdout.flush()
        print(f"\nInterrupted after {engine.steps} steps", file=sys.stderr)
        return 130

    if args.dump_tape:
        print(f"[headache] {final.steps} steps, ptr={final.data_pointer}", file=sys.stderr)
        for addr, value in engine.tape.items():
            print(f"[headache] [{addr:+d}] = {value}", file=sys.stderr)
    if args.dump_window:
        start, length = args.dump_window
        print(engine.tape.dump(start, length), file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
