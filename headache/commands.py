"""
Command set for the headache interpreter.

Eight primitive operations, one source character each:

    <   MoveLeft      move the data pointer one cell left
    >   MoveRight     move the data pointer one cell right
    +   AddOne        increment the current cell
    -   SubOne        decrement the current cell
    .   Output        write the current cell as a character
    ,   Input         read one character into the current cell
    [   JumpForward   skip past the matching ] if the current cell is zero
    ]   JumpBack      return to the matching [ if the current cell is nonzero

Parsing and display use separate tables. PARSE_TABLE is the source alphabet;
DISPLAY_TABLE is only used for debug listings and keeps the historical
rendering of this tool, where Input shows as '.' and Output as ','.
"""

from __future__ import annotations
import enum
from typing import Dict, Iterable, Optional, Tuple


class Command(enum.Enum):
    MOVE_LEFT = "MoveLeft"
    MOVE_RIGHT = "MoveRight"
    ADD_ONE = "AddOne"
    SUB_ONE = "SubOne"
    OUTPUT = "Output"
    INPUT = "Input"
    JUMP_FORWARD = "JumpForward"
    JUMP_BACK = "JumpBack"

    def render(self) -> str:
        """One-character display form (debug output only)."""
        return DISPLAY_TABLE[self]

    def __str__(self):
        return self.render()


# A program is an immutable, ordered sequence of commands.
Program = Tuple[Command, ...]


# ──────────────────────────────────────────────
# Symbol tables
# ──────────────────────────────────────────────

PARSE_TABLE: Dict[str, Command] = {
    "<": Command.MOVE_LEFT,
    ">": Command.MOVE_RIGHT,
    "+": Command.ADD_ONE,
    "-": Command.SUB_ONE,
    ".": Command.OUTPUT,
    ",": Command.INPUT,
    "[": Command.JUMP_FORWARD,
    "]": Command.JUMP_BACK,
}

DISPLAY_TABLE: Dict[Command, str] = {
    Command.MOVE_LEFT: "<",
    Command.MOVE_RIGHT: ">",
    Command.ADD_ONE: "+",
    Command.SUB_ONE: "-",
    Command.INPUT: ".",
    Command.OUTPUT: ",",
    Command.JUMP_FORWARD: "[",
    Command.JUMP_BACK: "]",
}


def to_command(ch: str) -> Optional[Command]:
    """Map a source character to its command, or None for anything else."""
    return PARSE_TABLE.get(ch)


def render_program(program: Iterable[Command]) -> str:
    return "".join(cmd.render() for cmd in program)
