"""
Intcode VM - Instruction Decoder / Opcode Table

An instruction word packs the opcode and one addressing-mode digit per
operand into a single decimal integer:

      ABCDE
    word = 1002  →  DE = 02 (MUL), C = 0, B = 1, A = 0 (leading zeros implied)

  opcode       = word % 100
  mode, arg 1  = hundreds digit
  mode, arg 2  = thousands digit
  mode, arg 3  = ten-thousands digit

Addressing modes:
  POSITION   (0)  operand is a memory address
  IMMEDIATE  (1)  operand is the literal value (never a write target)
  RELATIVE   (2)  operand + relative base is a memory address

Digits above the ten-thousands place are ignored, the same as unused
mode digits for instructions with fewer than three operands.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import DecodeError


# ──────────────────────────────────────────────
# Addressing modes
# ──────────────────────────────────────────────

class Mode(Enum):
    POSITION = 0
    IMMEDIATE = 1
    RELATIVE = 2


MODE_DIGITS = {mode.value: mode for mode in Mode}


# ──────────────────────────────────────────────
# Opcode table
# ──────────────────────────────────────────────
# Format: Opcode member -> numeric code; width lives in OPCODE_WIDTHS.

class Opcode(Enum):
    ADD = 1
    MUL = 2
    INPUT = 3
    OUTPUT = 4
    JUMP_IF_TRUE = 5
    JUMP_IF_FALSE = 6
    LESS_THAN = 7
    EQUALS = 8
    ADJUST_RB = 9
    HALT = 99


OPCODES = {op.value: op for op in Opcode}

# Total instruction width in cells (opcode word + operands)
OPCODE_WIDTHS = {
    Opcode.ADD:           4,
    Opcode.MUL:           4,
    Opcode.INPUT:         2,
    Opcode.OUTPUT:        2,
    Opcode.JUMP_IF_TRUE:  3,
    Opcode.JUMP_IF_FALSE: 3,
    Opcode.LESS_THAN:     4,
    Opcode.EQUALS:        4,
    Opcode.ADJUST_RB:     2,
    Opcode.HALT:          1,
}


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction word. Built fresh every step, never stored."""
    opcode: Opcode
    modes: tuple  # (mode1, mode2, mode3)

    @property
    def width(self) -> int:
        return OPCODE_WIDTHS[self.opcode]

    def mode(self, n: int) -> Mode:
        """Addressing mode of operand n (1-based)."""
        return self.modes[n - 1]


def decode_instruction(word: int, pc: Optional[int] = None) -> Instruction:
    """Decode an instruction word into opcode + three addressing modes.

    Raises DecodeError if the low two digits are not a known opcode or
    any of the three mode digits is not 0, 1 or 2. Negative words are
    never valid instructions.
    """
    where = f" at pc={pc}" if pc is not None else ""
    if word < 0:
        raise DecodeError(f"Negative instruction word {word}{where}",
                          pc=pc, word=word)

    code = word % 100
    opcode = OPCODES.get(code)
    if opcode is None:
        raise DecodeError(f"Unknown opcode {code:02d} in word {word}{where}",
                          pc=pc, word=word)

    modes = []
    for place in (100, 1000, 10000):
        digit = word // place % 10
        mode = MODE_DIGITS.get(digit)
        if mode is None:
            raise DecodeError(
                f"Unknown addressing mode {digit} in word {word}{where}",
                pc=pc, word=word)
        modes.append(mode)

    return Instruction(opcode, tuple(modes))
