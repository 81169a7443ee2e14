"""
headache — Program I/O Streams

The engine never touches sys.stdin / sys.stdout directly. It talks to one of
these objects instead:

  write_char(ch)  : one Output command
  write_line(text): one debug trace line
  read_line()     : one line for the Input buffer, None at end of input
  flush()         : push pending output (called before every blocking read)

ConsoleIO wraps real text streams. BufferIO keeps everything in memory so a
run can be checked without a terminal.
"""

import io
import sys
from collections import deque
from typing import List, Optional, Protocol, TextIO


class ProgramIO(Protocol):
    """What the engine needs from an I/O object."""

    def write_char(self, ch: str): ...

    def write_line(self, text: str): ...

    def read_line(self) -> Optional[str]: ...

    def flush(self): ...


def _split_lines(text: str) -> List[str]:
    # Break on '\n' only, as TextIO.readline() does; '\r' and other separators stay put
    return io.StringIO(text, newline="\n").readlines()


class ConsoleIO:
    """Process console streams.

    Output is flushed after every character so prompts appear before the
    program blocks on input.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def write_char(self, ch: str):
        self.stdout.write(ch)
        self.stdout.flush()

    def write_line(self, text: str):
        self.stdout.write(text + "\n")

    def read_line(self) -> Optional[str]:
        self.flush()
        line = self.stdin.readline()
        # readline() returns '' only at end of input; a blank line is '\n'
        return line if line else None

    def flush(self):
        self.stdout.flush()


class BufferIO:
    """In-memory input source and output sink.

    Input text is split into lines up front. Program output and trace lines
    are collected separately so either can be inspected on its own.
    """

    def __init__(self, input_text: str = ""):
        self._lines: deque = deque(_split_lines(input_text))
        self._output: List[str] = []
        self.trace_lines: List[str] = []
        self.reads = 0

    def write_char(self, ch: str):
        self._output.append(ch)

    def write_line(self, text: str):
        self.trace_lines.append(text)

    def read_line(self) -> Optional[str]:
        if not self._lines:
            return None
        self.reads += 1
        return self._lines.popleft()

    def feed(self, text: str):
        """Queue more input lines (simulates the user typing)."""
        self._lines.extend(_split_lines(text))

    def flush(self):
        pass

    @property
    def output(self) -> str:
        """Everything written by Output commands so far."""
        return "".join(self._output)
