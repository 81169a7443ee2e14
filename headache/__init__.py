"""
headache — An interpreter for Brainfuck
=======================================
Runs eight-command Brainfuck programs on a sparse, unbounded tape.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌───────────────┐    ┌──────────────┐
    │  Source  │───>│  Loader  │───>│    Engine     │───>│  FinalState  │
    │  (text)  │    │(commands)│    │ tape/ptr/pc   │    │ (tape, ptr)  │
    └──────────┘    └──────────┘    └───────┬───────┘    └──────────────┘
                                            │
                                      streams (I/O)

    - commands.py: Command enum, parse and display tables
    - loader.py:   comment stripping, file loading
    - tape.py:     sparse default-zero cell storage with wraparound
    - streams.py:  console and in-memory I/O
    - engine.py:   dispatch loop and depth-counting bracket scan
    - config.py:   cell width, end-of-input policy, profiles
"""

__version__ = "0.2.0"

from .commands import Command, Program, to_command, render_program
from .config import (
    DEFAULT_CELL_BITS, DEFAULT_EOF_POLICY, EngineConfig, EofPolicy, ConfigError, PROFILES,
)
from .engine import (
    Engine, EngineError, ProgramCounterOutOfRange, UnmatchedBracket,
    DataPointerOverflow, InvalidOutputValue, EndOfInput, InvalidInput, StepResult, FinalState,
)
from .loader import LoadError, load_program, load_file
from .streams import BufferIO, ConsoleIO, ProgramIO
from .tape import Tape


def run_source(source: str, input_text: str = "", *, trace: bool = False,
               cell_bits: int = DEFAULT_CELL_BITS, eof_policy: EofPolicy = DEFAULT_EOF_POLICY):
    """Run Brainfuck source text against in-memory I/O.

    Full pipeline: load_program -> Engine -> run.

    Args:
        source: program text; non-command characters are ignored.
        input_text: lines fed to Input commands.
        trace: collect debug trace lines (in io.trace_lines).
        cell_bits: cell width, 8, 16 or 32.
        eof_policy: what Input does once input_text is used up.

    Returns:
        (output, final_state, io) - the program's output string, the
        FinalState of the run, and the BufferIO used.
    """
    io = BufferIO(input_text)
    config = EngineConfig(cell_bits=cell_bits, eof_policy=eof_policy)
    engine = Engine.with_program(load_program(source), io=io, config=config)
    final = engine.run(trace=trace)
    return io.output, final, io
