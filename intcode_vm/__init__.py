"""
Intcode VM
==========
A small virtual machine for Intcode programs: flat lists of signed
integers where each instruction word packs an opcode and per-operand
addressing modes.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌───────────────┐
    │ "1,0,.." │───>│  Loader  │───>│  Memory  │<──>│    Engine     │──> RunResult
    │  (text)  │    │ (ints)   │    │ (grows)  │    │ decode + exec │    FINISHED
    └──────────┘    └──────────┘    └──────────┘    └───────────────┘    WAITING_FOR_INPUT
                                                                         OUTPUT(v)

    - loader.py:         comma-separated text → list[int]
    - mem/memory.py:     zero-defaulted store that grows on write
    - cpu/decoder.py:    word → Opcode + three addressing Modes
    - cpu/addressing.py: operand → value / write address
    - emu.py:            IntcodeComputer, the suspend/resume state machine

The engine is driven one event at a time: call run(), look at what it
stopped on, supply an input value if it is waiting, call run() again.
"""

__version__ = "0.1.0"

from .errors import (
    IntcodeError, LoadError, DecodeError, OperandError,
    EngineFaulted, InputExhausted,
)
from .loader import parse_program, load_program_file
from .mem.memory import Memory
from .cpu.decoder import Mode, Opcode, Instruction, decode_instruction
from .emu import IntcodeComputer, RunResult, RunState, FINISHED, WAITING_FOR_INPUT


def run_program(text: str, inputs=()) -> list:
    """Parse program text, run it to completion, return all outputs.

    Convenience for one-shot programs. Raises InputExhausted if the
    program wants more input than given.
    """
    return IntcodeComputer.from_text(text).run_to_completion(inputs)
