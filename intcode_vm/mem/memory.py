"""
Intcode VM - Growable Linear Memory

Memory model:
  - Zero-based, integer-indexed list of Python ints (arbitrary precision,
    so large products never truncate).
  - Reads past the end return 0 and do NOT grow the store.
  - Writes past the end grow the store, zero-filling every new cell.
  - Length never shrinks.
  - Negative addresses are always a fault (OperandError).
  - The initial image must hold plain ints; anything else is a LoadError.

The store is a dense list rather than a dict. Programs touch a handful
of cells past their image (scratch space, relative-base stack), so the
zero-filled gap stays small.
"""

from typing import Iterable, List

from ..errors import LoadError, OperandError


class Memory:
    """Growable, zero-defaulted memory addressed by non-negative index."""

    __slots__ = ('_cells',)

    def __init__(self, image: Iterable[int] = ()):
        self._cells: List[int] = list(image)
        for addr, value in enumerate(self._cells):
            if not isinstance(value, int) or isinstance(value, bool):
                raise LoadError(
                    f"Memory cell {addr} is not an integer: {value!r}")

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Memory(len={len(self._cells)})"

    @staticmethod
    def _check_addr(addr: int):
        if addr < 0:
            raise OperandError(f"Negative memory address {addr}", address=addr)

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        """Return the value at addr, or 0 if addr is past the end."""
        self._check_addr(addr)
        if addr < len(self._cells):
            return self._cells[addr]
        return 0

    def write(self, addr: int, value: int):
        """Store value at addr, growing the store first if needed."""
        self._check_addr(addr)
        self._grow_to(addr)
        self._cells[addr] = value

    def _grow_to(self, addr: int):
        missing = addr + 1 - len(self._cells)
        if missing > 0:
            self._cells.extend([0] * missing)

    # --- Bulk access ---

    def snapshot(self) -> List[int]:
        """Return a copy of the current contents (for diffing / dumping)."""
        return list(self._cells)

    def copy(self) -> 'Memory':
        clone = Memory.__new__(Memory)
        clone._cells = list(self._cells)
        return clone
