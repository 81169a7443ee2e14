"""
headache — Engine Configuration

Cell width and end-of-input behaviour are not fixed by the language, so they
are settings. Named profiles bundle them; the environment and explicit
values override the profile.

End of input (Input command, buffer empty, source exhausted):
  UNCHANGED: leave the current cell as it is
  ZERO     : store 0
  MAX      : store the all-ones value (the "-1" convention)
  FAULT    : raise EndOfInput
"""

from __future__ import annotations
import enum
import os
from dataclasses import dataclass
from typing import Mapping, Optional


class EofPolicy(enum.Enum):
    UNCHANGED = "unchanged"
    ZERO = "zero"
    MAX = "max"
    FAULT = "fault"


class ConfigError(ValueError):
    pass


DEFAULT_CELL_BITS = 8
CELL_BITS_CHOICES = (8, 16, 32)
DEFAULT_EOF_POLICY = EofPolicy.UNCHANGED

# Environment overrides (read by the CLI)
ENV_CELL_BITS = "HEADACHE_CELL_BITS"
ENV_EOF = "HEADACHE_EOF"

PROFILES = {
    "standard": {
        "cell_bits": 8,
        "eof_policy": EofPolicy.UNCHANGED,
        "description": "8-bit wrapping cells, end of input leaves the cell unchanged",
    },
    "zero-eof": {
        "cell_bits": 8,
        "eof_policy": EofPolicy.ZERO,
        "description": "8-bit wrapping cells, end of input stores 0",
    },
    "legacy": {
        "cell_bits": 32,
        "eof_policy": EofPolicy.FAULT,
        "description": "32-bit cells, end of input is a fault",
    },
}


def parse_eof_policy(value: str) -> EofPolicy:
    """Accept a policy name, or the conventional spellings '0' and '-1'."""
    value = value.strip().lower()
    aliases = {"0": EofPolicy.ZERO, "-1": EofPolicy.MAX}
    if value in aliases:
        return aliases[value]
    try:
        return EofPolicy(value)
    except ValueError:
        choices = ", ".join(p.value for p in EofPolicy)
        raise ConfigError(f"Unknown EOF policy {value!r} (expected one of: {choices})") from None


def parse_cell_bits(value) -> int:
    try:
        bits = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Cell width must be an integer, got {value!r}") from None
    if bits not in CELL_BITS_CHOICES:
        raise ConfigError(f"Unsupported cell width {bits} (expected one of {CELL_BITS_CHOICES})")
    return bits


@dataclass(frozen=True)
class EngineConfig:
    cell_bits: int = DEFAULT_CELL_BITS
    eof_policy: EofPolicy = DEFAULT_EOF_POLICY

    def __post_init__(self):
        parse_cell_bits(self.cell_bits)
        if not isinstance(self.eof_policy, EofPolicy):
            raise ConfigError(f"eof_policy must be an EofPolicy, got {self.eof_policy!r}")

    @classmethod
    def from_profile(cls, name: str = "standard") -> "EngineConfig":
        if name not in PROFILES:
            raise ConfigError(f"Unknown profile {name!r} (expected one of: {', '.join(PROFILES)})")
        profile = PROFILES[name]
        return cls(cell_bits=profile["cell_bits"], eof_policy=profile["eof_policy"])

    @classmethod
    def resolve(cls, profile: str = "standard", cell_bits=None,
                eof: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Build a config from profile < environment < explicit arguments."""
        environ = os.environ if environ is None else environ
        base = cls.from_profile(profile)

        bits = base.cell_bits
        policy = base.eof_policy
        if environ.get(ENV_CELL_BITS):
            bits = parse_cell_bits(environ[ENV_CELL_BITS])
        if environ.get(ENV_EOF):
            policy = parse_eof_policy(environ[ENV_EOF])
        if cell_bits is not None:
            bits = parse_cell_bits(cell_bits)
        if eof is not None:
            policy = parse_eof_policy(eof)
        return cls(cell_bits=bits, eof_policy=policy)
