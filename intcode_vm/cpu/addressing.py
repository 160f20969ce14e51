"""
Intcode VM - Operand Resolution

Turns a raw operand (the word stored after the opcode) into either a
value to read or an address to write, according to its addressing mode.

  mode        resolve_value                 resolve_address (write target)
  POSITION    mem[raw]                      raw
  IMMEDIATE   raw                           OperandError
  RELATIVE    mem[rb + raw]                 rb + raw

Negative effective addresses are rejected by Memory itself.
"""

from .decoder import Mode
from ..errors import OperandError


def effective_address(mode: Mode, raw: int, relative_base: int) -> int:
    """Address an operand refers to. Not defined for IMMEDIATE."""
    if mode is Mode.POSITION:
        return raw
    if mode is Mode.RELATIVE:
        return relative_base + raw
    raise OperandError(f"{mode.name} operand {raw} has no address")


def resolve_value(mode: Mode, raw: int, memory, relative_base: int) -> int:
    """Effective value of an operand."""
    if mode is Mode.IMMEDIATE:
        return raw
    return memory.read(effective_address(mode, raw, relative_base))


def resolve_address(mode: Mode, raw: int, relative_base: int) -> int:
    """Validated write address for an operand.

    Writes are deferred to the caller so an instruction can resolve
    every operand before touching memory. The address is checked here
    so a bad target faults before any state changes.
    """
    if mode is Mode.IMMEDIATE:
        raise OperandError(f"Write target cannot be immediate (raw operand {raw})")
    addr = effective_address(mode, raw, relative_base)
    if addr < 0:
        raise OperandError(f"Negative write address {addr}", address=addr)
    return addr
