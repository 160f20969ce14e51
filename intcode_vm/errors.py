"""
Intcode VM - Exception Hierarchy

Every failure the package raises derives from IntcodeError so callers
can catch the whole family in one place (the CLI does exactly that).

  LoadError       program text or image is not a sequence of integers
  DecodeError     word at pc is not a known opcode / mode digit
  OperandError    write through an immediate operand, or a negative
                  resolved address / jump target
  EngineFaulted   run() called on an instance that already faulted
  InputExhausted  run_to_completion() ran out of input values

WaitingForInput and Finished are ordinary run() results, not errors.
"""

from typing import List, Optional


class IntcodeError(Exception):
    """Base class for all Intcode VM errors."""
    pass


class LoadError(IntcodeError):
    """Raised when program text cannot be turned into an integer sequence."""
    pass


class DecodeError(IntcodeError):
    """Raised when an instruction word maps to no opcode or mode."""

    def __init__(self, message: str, pc: Optional[int] = None,
                 word: Optional[int] = None):
        super().__init__(message)
        self.pc = pc
        self.word = word


class OperandError(IntcodeError):
    """Raised for illegal operand use (immediate write target, negative address)."""

    def __init__(self, message: str, pc: Optional[int] = None,
                 address: Optional[int] = None):
        super().__init__(message)
        self.pc = pc
        self.address = address


class EngineFaulted(IntcodeError):
    """Raised when a previously faulted engine is asked to run again."""
    pass


class InputExhausted(IntcodeError):
    """Raised when the engine wants input and the supplied values ran out.

    The outputs produced before the stall are kept on the exception so
    the caller does not lose them.
    """

    def __init__(self, message: str, outputs: Optional[List[int]] = None):
        super().__init__(message)
        self.outputs = list(outputs or [])
