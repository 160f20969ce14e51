"""
Intcode VM - Register Set

The machine has exactly two registers:
  PC  - index of the next instruction word (never negative)
  RB  - relative base, signed offset for relative-mode operands.
        Starts at 0, changed only by opcode 9 (ADJUST_RB).
"""


class Registers:
    """Intcode register set."""

    __slots__ = ('PC', 'RB')

    def __init__(self, pc: int = 0, rb: int = 0):
        self.PC: int = pc   # Program counter
        self.RB: int = rb   # Relative base

    def copy(self) -> 'Registers':
        return Registers(self.PC, self.RB)

    def display(self) -> str:
        """Format register state for log messages."""
        return f"PC={self.PC} RB={self.RB}"
