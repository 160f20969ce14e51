from .regs import Registers
from .decoder import Mode, Opcode, Instruction, decode_instruction, OPCODE_WIDTHS
from .addressing import resolve_value, resolve_address, effective_address
