"""
Intcode VM - Main Engine Class

This is the top-level class that integrates:
  - Registers (cpu/regs.py): PC + relative base
  - Memory (mem/memory.py): growable, zero-defaulted
  - Decoder (cpu/decoder.py): opcode + mode digits
  - Operand resolution (cpu/addressing.py)

Execution model - run(input) is a re-entrant state machine, not a
generator or a thread:
  1. Decode the word at PC
  2. Arithmetic / compare / jump / ADJUST_RB: execute, keep looping
  3. INPUT with a value in hand: store it, keep looping
     INPUT without a value: return WAITING_FOR_INPUT, PC untouched,
     so the very same instruction is retried on the next call
  4. OUTPUT: advance PC, return OUTPUT(value) immediately
  5. HALT, or PC at/after end of memory: return FINISHED (sticky)

Each call consumes at most one input value and yields at most one
event. A supplied value that is not consumed before the call returns
(because OUTPUT or HALT came first) is dropped.

A program that loops forever without I/O never returns; bounding that
is the caller's job.

Usage:
    vm = IntcodeComputer.from_text("3,9,8,9,10,9,4,9,99,-1,8")
    vm.run(None)          # RunResult(WAITING_FOR_INPUT)
    vm.run(8)             # RunResult(OUTPUT, 1)
    vm.run(None)          # RunResult(FINISHED)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .cpu.regs import Registers
from .cpu.decoder import Opcode, Instruction, decode_instruction
from .cpu.addressing import resolve_value, resolve_address
from .mem.memory import Memory
from .errors import (
    IntcodeError, DecodeError, OperandError, EngineFaulted, InputExhausted,
)
from .loader import parse_program, load_program_file

logger = logging.getLogger(__name__)


class RunState(Enum):
    FINISHED = 'FINISHED'
    WAITING_FOR_INPUT = 'WAITING_FOR_INPUT'
    OUTPUT = 'OUTPUT'


@dataclass(frozen=True)
class RunResult:
    """What a single run() call stopped on. value is set only for OUTPUT."""
    state: RunState
    value: Optional[int] = None

    @property
    def is_output(self) -> bool:
        return self.state is RunState.OUTPUT

    @property
    def is_waiting(self) -> bool:
        return self.state is RunState.WAITING_FOR_INPUT

    @property
    def is_finished(self) -> bool:
        return self.state is RunState.FINISHED

    @classmethod
    def output(cls, value: int) -> 'RunResult':
        return cls(RunState.OUTPUT, value)

    def __repr__(self) -> str:
        if self.state is RunState.OUTPUT:
            return f"RunResult(OUTPUT, {self.value})"
        return f"RunResult({self.state.value})"


FINISHED = RunResult(RunState.FINISHED)
WAITING_FOR_INPUT = RunResult(RunState.WAITING_FOR_INPUT)


class IntcodeComputer:
    """Intcode virtual machine.

    Mutated in place by run(). To explore divergent futures, fork with
    clone() (or copy.copy / copy.deepcopy); clones share nothing.
    """

    def __init__(self, program: Sequence[int] = ()):
        self.regs = Registers()
        self.mem = Memory(program)
        self._finished = False
        self._fault: Optional[IntcodeError] = None
        self._dispatch = self._build_dispatch()

    def _build_dispatch(self) -> dict:
        """Handlers for the instructions that never leave run()'s loop.
        INPUT, OUTPUT and HALT are handled inline in _run()."""
        return {
            Opcode.ADD:           self._op_add,
            Opcode.MUL:           self._op_mul,
            Opcode.JUMP_IF_TRUE:  self._op_jump_if_true,
            Opcode.JUMP_IF_FALSE: self._op_jump_if_false,
            Opcode.LESS_THAN:     self._op_less_than,
            Opcode.EQUALS:        self._op_equals,
            Opcode.ADJUST_RB:     self._op_adjust_rb,
        }

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    @classmethod
    def from_text(cls, text: str) -> 'IntcodeComputer':
        """Build an engine from comma-separated program text."""
        return cls(parse_program(text))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'IntcodeComputer':
        """Build an engine from a program file."""
        return cls(load_program_file(path))

    # ══════════════════════════════════════════════
    # Cloning
    # ══════════════════════════════════════════════

    def clone(self) -> 'IntcodeComputer':
        """Independent copy: memory, registers, finished/fault status."""
        other = IntcodeComputer.__new__(IntcodeComputer)
        other.regs = self.regs.copy()
        other.mem = self.mem.copy()
        other._finished = self._finished
        other._fault = self._fault
        other._dispatch = other._build_dispatch()
        return other

    def __copy__(self) -> 'IntcodeComputer':
        return self.clone()

    def __deepcopy__(self, memo) -> 'IntcodeComputer':
        return self.clone()

    # ══════════════════════════════════════════════
    # Inspection / patching
    # ══════════════════════════════════════════════

    @property
    def pc(self) -> int:
        return self.regs.PC

    @property
    def relative_base(self) -> int:
        return self.regs.RB

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def is_faulted(self) -> bool:
        return self._fault is not None

    def peek(self, addr: int) -> int:
        return self.mem.read(addr)

    def poke(self, addr: int, value: int):
        """Write directly into memory, e.g. to set a mode flag at address 0
        before the first run. Grows memory like any other write."""
        self.mem.write(addr, value)

    def memory_snapshot(self) -> List[int]:
        return self.mem.snapshot()

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def run(self, input_value: Optional[int] = None) -> RunResult:
        """Execute until the next event: OUTPUT, WAITING_FOR_INPUT or FINISHED.

        Raises DecodeError / OperandError on a malformed program. After
        that the instance is dead: every later call raises EngineFaulted.
        """
        if self._fault is not None:
            raise EngineFaulted(
                f"Engine faulted earlier at pc={self.regs.PC}: {self._fault}"
            ) from self._fault
        if self._finished:
            return FINISHED

        try:
            return self._run(input_value)
        except (DecodeError, OperandError) as e:
            if e.pc is None:
                e.pc = self.regs.PC
            self._fault = e
            logger.error(f"Fault at {self.regs.display()}: {e}")
            raise

    def _run(self, input_value: Optional[int]) -> RunResult:
        mem = self.mem
        regs = self.regs

        while regs.PC < len(mem):
            pc = regs.PC
            instr = decode_instruction(mem.read(pc), pc)
            opcode = instr.opcode

            if opcode is Opcode.INPUT:
                if input_value is None:
                    logger.debug(f"Waiting for input at {regs.display()}")
                    return WAITING_FOR_INPUT
                addr = self._address(instr, 1)
                mem.write(addr, input_value)
                input_value = None
                regs.PC = pc + 2

            elif opcode is Opcode.OUTPUT:
                value = self._value(instr, 1)
                regs.PC = pc + 2
                logger.debug(f"Output {value} at pc={pc}")
                return RunResult.output(value)

            elif opcode is Opcode.HALT:
                break

            else:
                self._dispatch[opcode](instr)

        self._finished = True
        logger.debug(f"Finished at {regs.display()}")
        return FINISHED

    def run_with_constant_input(self, value: int) -> Optional[int]:
        """Offer the same value every time input is wanted; return the
        first output, or None if the program finishes without one."""
        while True:
            result = self.run(value)
            if result.state is RunState.OUTPUT:
                return result.value
            if result.state is RunState.FINISHED:
                return None

    def run_to_completion(self, inputs: Iterable[int] = (),
                          outputs: Optional[List[int]] = None) -> List[int]:
        """Feed inputs in order whenever asked and collect all outputs
        until the program finishes.

        Outputs are appended to `outputs` as they are produced when a list
        is passed, so the caller still holds them if a fault is raised.

        Raises InputExhausted (with the outputs so far) if the program
        still wants input after the iterable is used up. The engine stays
        suspended on that INPUT and can be resumed by the caller.
        """
        pending = iter(inputs)
        if outputs is None:
            outputs = []
        result = self.run(None)
        while True:
            if result.state is RunState.FINISHED:
                return outputs
            if result.state is RunState.OUTPUT:
                outputs.append(result.value)
                result = self.run(None)
                continue
            value = next(pending, None)
            if value is None:
                raise InputExhausted(
                    f"Program wants input at pc={self.regs.PC} but no inputs remain",
                    outputs=outputs,
                )
            result = self.run(value)

    # ══════════════════════════════════════════════
    # Operand helpers
    # ══════════════════════════════════════════════

    def _raw(self, n: int) -> int:
        return self.mem.read(self.regs.PC + n)

    def _value(self, instr: Instruction, n: int) -> int:
        return resolve_value(instr.mode(n), self._raw(n), self.mem, self.regs.RB)

    def _address(self, instr: Instruction, n: int) -> int:
        return resolve_address(instr.mode(n), self._raw(n), self.regs.RB)

    def _binary(self, instr: Instruction):
        """Resolve (a, b, target_addr) before anything is written."""
        a = self._value(instr, 1)
        b = self._value(instr, 2)
        return a, b, self._address(instr, 3)

    def _jump(self, instr: Instruction, taken: bool, target: int):
        if not taken:
            self.regs.PC += instr.width
            return
        if target < 0:
            raise OperandError(f"Negative jump target {target}",
                               pc=self.regs.PC, address=target)
        self.regs.PC = target

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(instr). Each one advances or sets PC.

    def _op_add(self, instr: Instruction):
        a, b, addr = self._binary(instr)
        self.mem.write(addr, a + b)
        self.regs.PC += instr.width

    def _op_mul(self, instr: Instruction):
        a, b, addr = self._binary(instr)
        self.mem.write(addr, a * b)
        self.regs.PC += instr.width

    def _op_less_than(self, instr: Instruction):
        a, b, addr = self._binary(instr)
        self.mem.write(addr, 1 if a < b else 0)
        self.regs.PC += instr.width

    def _op_equals(self, instr: Instruction):
        a, b, addr = self._binary(instr)
        self.mem.write(addr, 1 if a == b else 0)
        self.regs.PC += instr.width

    def _op_jump_if_true(self, instr: Instruction):
        a = self._value(instr, 1)
        b = self._value(instr, 2)
        self._jump(instr, a != 0, b)

    def _op_jump_if_false(self, instr: Instruction):
        a = self._value(instr, 1)
        b = self._value(instr, 2)
        self._jump(instr, a == 0, b)

    def _op_adjust_rb(self, instr: Instruction):
        self.regs.RB += self._value(instr, 1)
        self.regs.PC += instr.width

    def __repr__(self) -> str:
        if self._fault is not None:
            status = 'faulted'
        elif self._finished:
            status = 'finished'
        else:
            status = 'runnable'
        return f"<IntcodeComputer {self.regs.display()} mem={len(self.mem)} {status}>"
