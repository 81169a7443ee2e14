"""
headache — Execution Engine

The engine owns the tape, the data pointer, the program counter and the
pending input buffer. It executes one command per step():

  1. Check the program counter is inside the program
  2. Dispatch the command at PC (pointer move, cell arithmetic, I/O, jump)
  3. Advance PC by one (jumps first place PC on the matching bracket)

Loops are matched by re-scanning the program on every taken jump, counting
nesting depth. There is no precomputed jump table, so a malformed program
is only discovered when a scan runs off one end; that raises
UnmatchedBracket instead of reading outside the program.

Termination is structural: run() stops when PC equals the program length.
There is no step limit. A program that loops forever runs forever.

Faults (all EngineError):
  ProgramCounterOutOfRange: step() called with PC outside the program
  UnmatchedBracket        : bracket scan ran past either end
  DataPointerOverflow     : pointer left the signed 64-bit address range
  InvalidOutputValue      : cell value is not a Unicode scalar value, or the
                            output stream cannot encode it
  EndOfInput              : input exhausted under EofPolicy.FAULT
  InvalidInput            : input stream bytes do not decode
"""

from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from .commands import Command, Program, render_program
from .config import EngineConfig, EofPolicy
from .streams import ConsoleIO, ProgramIO
from .tape import Tape

log = logging.getLogger(__name__)

ADDRESS_MIN = -(1 << 63)
ADDRESS_MAX = (1 << 63) - 1

UNICODE_MAX = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)


# ──────────────────────────────────────────────
# Faults
# ──────────────────────────────────────────────

class EngineError(Exception):
    """Base class for every runtime fault. Carries the PC it happened at."""

    def __init__(self, message: str, pc: int):
        self.pc = pc
        super().__init__(f"{message} (pc={pc})")


class ProgramCounterOutOfRange(EngineError):
    pass


class UnmatchedBracket(ProgramCounterOutOfRange):
    def __init__(self, command: Command, pc: int):
        self.command = command
        side = "end" if command is Command.JUMP_FORWARD else "start"
        super().__init__(
            f"No matching bracket for {command.value}; scan ran past the {side} of the program",
            pc,
        )


class DataPointerOverflow(EngineError):
    pass


class InvalidOutputValue(EngineError):
    def __init__(self, value: int, pc: int, reason: str = "is not a valid character"):
        self.value = value
        super().__init__(f"Cell value {value} {reason}", pc)


class EndOfInput(EngineError):
    pass


class InvalidInput(EngineError):
    pass


# ──────────────────────────────────────────────
# Results
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class StepResult:
    command: Command
    pc: int             # program counter after the step
    data_pointer: int
    cell: int           # current cell after the step
    steps: int
    output: Optional[str] = None

    def trace_line(self) -> str:
        return f"PC: {self.pc:3d} | CELL: {self.cell:3d} @ {self.data_pointer:3d}"


@dataclass(frozen=True)
class FinalState:
    data_pointer: int
    program_counter: int
    tape: Dict[int, int]
    steps: int

    def read(self, addr: int) -> int:
        return self.tape.get(addr, 0)


# ──────────────────────────────────────────────
# Engine
# ──────────────────────────────────────────────

class Engine:
    """Brainfuck execution engine.

    Usage:
        engine = Engine.with_program(load_program(",."), io=BufferIO("A\\n"))
        final = engine.run()
        engine.io.output  # "A"
    """

    def __init__(self, program: Sequence[Command], io: Optional[ProgramIO] = None,
                 config: Optional[EngineConfig] = None):
        self.program: Program = tuple(program)
        self.io = io if io is not None else ConsoleIO()
        self.config = config if config is not None else EngineConfig()

        self.ptr = 0
        self.pc = 0
        self.tape = Tape(self.config.cell_bits)
        self.steps = 0
        self._input: deque = deque()

    @classmethod
    def with_program(cls, program: Sequence[Command], io: Optional[ProgramIO] = None,
                     config: Optional[EngineConfig] = None) -> "Engine":
        return cls(program, io=io, config=config)

    # --- Helpers ---

    @property
    def cell(self) -> int:
        return self.tape.read(self.ptr)

    @property
    def finished(self) -> bool:
        return self.pc >= len(self.program)

    def _move(self, delta: int):
        ptr = self.ptr + delta
        if not ADDRESS_MIN <= ptr <= ADDRESS_MAX:
            raise DataPointerOverflow(f"Data pointer {ptr} outside the address range", self.pc)
        self.ptr = ptr

    def _scan_forward(self) -> int:
        """Index of the JumpBack matching the JumpForward at PC."""
        depth = 0
        i = self.pc
        while True:
            i += 1
            if i >= len(self.program):
                raise UnmatchedBracket(Command.JUMP_FORWARD, self.pc)
            cmd = self.program[i]
            if cmd is Command.JUMP_FORWARD:
                depth += 1
            elif cmd is Command.JUMP_BACK:
                if depth == 0:
                    return i
                depth -= 1

    def _scan_back(self) -> int:
        """Index of the JumpForward matching the JumpBack at PC."""
        depth = 0
        i = self.pc
        while True:
            i -= 1
            if i < 0:
                raise UnmatchedBracket(Command.JUMP_BACK, self.pc)
            cmd = self.program[i]
            if cmd is Command.JUMP_BACK:
                depth += 1
            elif cmd is Command.JUMP_FORWARD:
                if depth == 0:
                    return i
                depth -= 1

    def _output(self) -> str:
        value = self.cell
        if value > UNICODE_MAX or value in SURROGATES:
            raise InvalidOutputValue(value, self.pc)
        ch = chr(value)
        try:
            self.io.write_char(ch)
        except UnicodeEncodeError as e:
            raise InvalidOutputValue(
                value, self.pc, f"cannot be written in the output encoding ({e.encoding})"
            ) from e
        return ch

    def _refill_input(self) -> bool:
        """Read lines until one has characters. False at end of input."""
        while True:
            try:
                line = self.io.read_line()
            except UnicodeDecodeError as e:
                raise InvalidInput(f"Input is not valid {e.encoding}: {e.reason}", self.pc) from e
            if line is None:
                return False
            if line.endswith("\n"):
                line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
            if line:
                self._input.extend(line)
                return True

    def _input_char(self):
        if not self._input and not self._refill_input():
            policy = self.config.eof_policy
            log.debug("End of input at pc=%d, policy=%s", self.pc, policy.value)
            if policy is EofPolicy.FAULT:
                raise EndOfInput("Input exhausted", self.pc)
            if policy is EofPolicy.ZERO:
                self.tape.write(self.ptr, 0)
            elif policy is EofPolicy.MAX:
                self.tape.write(self.ptr, self.tape.cell_max)
            return
        self.tape.write(self.ptr, ord(self._input.popleft()))

    # --- Execution ---

    def step(self) -> StepResult:
        """Execute the command at PC and advance PC by one."""
        if not 0 <= self.pc < len(self.program):
            raise ProgramCounterOutOfRange(
                f"Program counter outside program of length {len(self.program)}", self.pc
            )

        cmd = self.program[self.pc]
        output = None

        if cmd is Command.MOVE_LEFT:
            self._move(-1)
        elif cmd is Command.MOVE_RIGHT:
            self._move(1)
        elif cmd is Command.ADD_ONE:
            self.tape.add(self.ptr, 1)
        elif cmd is Command.SUB_ONE:
            self.tape.add(self.ptr, -1)
        elif cmd is Command.OUTPUT:
            output = self._output()
        elif cmd is Command.INPUT:
            self._input_char()
        elif cmd is Command.JUMP_FORWARD:
            if self.cell == 0:
                self.pc = self._scan_forward()
        elif cmd is Command.JUMP_BACK:
            if self.cell != 0:
                self.pc = self._scan_back()

        self.pc += 1
        self.steps += 1
        return StepResult(cmd, self.pc, self.ptr, self.cell, self.steps, output)

    def run(self, trace: bool = False) -> FinalState:
        """Step until PC reaches the end of the program.

        With trace enabled, writes the rendered program once, then one
        line per executed step, through the engine's io.
        """
        log.debug("Run start: %d commands, %d-bit cells, eof=%s",
                  len(self.program), self.tape.cell_bits, self.config.eof_policy.value)
        if trace:
            self.io.write_line(render_program(self.program))

        while self.pc < len(self.program):
            result = self.step()
            if trace:
                self.io.write_line(result.trace_line())

        self.io.flush()
        log.debug("Run finished: %d steps, ptr=%d, %d cells written",
                  self.steps, self.ptr, len(self.tape))
        return self.final_state()

    def final_state(self) -> FinalState:
        return FinalState(
            data_pointer=self.ptr,
            program_counter=self.pc,
            tape=self.tape.snapshot(),
            steps=self.steps,
        )
