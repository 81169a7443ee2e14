"""
Loader — source text to command sequence.

Every character outside the eight-symbol command alphabet is a comment and is
dropped silently. No bracket balancing is checked here; a malformed program
is a runtime condition for the engine.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

from .commands import Program, to_command

log = logging.getLogger(__name__)


class LoadError(Exception):
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Could not read file {self.path}: {reason}")


def load_program(text: str) -> Program:
    """Filter source text down to its commands, preserving order."""
    commands = (to_command(ch) for ch in text)
    return tuple(cmd for cmd in commands if cmd is not None)


def load_file(path: Union[str, Path]) -> Program:
    """Read a UTF-8 source file and load it.

    Raises:
        LoadError: the file is missing, unreadable or not valid UTF-8.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise LoadError(path, reason) from e

    program = load_program(text)
    log.info("Loaded %s: %d source chars, %d commands", path, len(text), len(program))
    return program
