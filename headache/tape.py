"""
headache — Sparse Tape

Memory model:
  - Addresses are signed integers, unbounded in both directions (within the
    64-bit address range the engine enforces on the data pointer).
  - Cells are unsigned, fixed-width (cell_bits), and wrap modulo 2**cell_bits.
  - Only written addresses are stored. Everything else reads as zero.

The tape is a plain dict keyed by address. Writing zero still stores the
cell, so "has been written" and "is nonzero" are different questions.
"""

from typing import Dict, Iterator, Tuple


class Tape:
    """Sparse cell storage with default-zero reads."""

    def __init__(self, cell_bits: int = 8):
        self.cell_bits = cell_bits
        self.modulus = 1 << cell_bits
        self.cell_max = self.modulus - 1
        self._cells: Dict[int, int] = {}

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        return self._cells.get(addr, 0)

    def write(self, addr: int, value: int):
        """Store value at addr, reduced modulo the cell width."""
        self._cells[addr] = value % self.modulus

    def add(self, addr: int, delta: int) -> int:
        """Add delta to the cell at addr with wraparound. Returns the new value."""
        value = (self.read(addr) + delta) % self.modulus
        self._cells[addr] = value
        return value

    # --- Inspection ---

    def __len__(self) -> int:
        return len(self._cells)

    def items(self) -> Iterator[Tuple[int, int]]:
        """Written (addr, value) pairs in address order."""
        for addr in sorted(self._cells):
            yield addr, self._cells[addr]

    def snapshot(self) -> Dict[int, int]:
        """Copy of every written cell, handed back to callers in FinalState."""
        return dict(self._cells)

    def dump(self, start: int, length: int = 16, cols: int = 8) -> str:
        """Produce a cell dump of [start, start + length) for debugging."""
        width = len(str(self.cell_max))
        lines = []
        for offset in range(0, length, cols):
            row = start + offset
            count = min(cols, length - offset)
            values = ' '.join(f'{self.read(row + i):{width}d}' for i in range(count))
            lines.append(f'{row:+6d}: {values}')
        return '\n'.join(lines)
