"""
Brainrot Bytecode Format

Defines bytecode instructions and the compiled bytecode container.

File layout (little-endian):

    magic               b'BRBC'
    version             u16
    flags               u16
    constant count      u32
    constants           u8 tag, then f64 (number) or u32 length + UTF-8 (string)
    instruction count   u32
    instructions        INSTRUCTION_DTYPE records (u8 opcode, u32 operand)
"""

import logging
import struct
from enum import IntEnum
from dataclasses import dataclass, field
from typing import List, Any

import numpy as np

from .errors import FormatError

logger = logging.getLogger(__name__)


# The seven braincells, in slot order
GLOBAL_NAMES = ('aura', 'peak', 'goon', 'mog', 'npc', 'sigma', 'gyatt')
GLOBAL_COUNT = len(GLOBAL_NAMES)


class OpCode(IntEnum):
    """Brainrot VM opcodes."""
    
    HALT = 0x01
    LOAD_CONST = 0x02      # operand: constant index
    LOAD_GLOBAL = 0x03     # operand: slot
    STORE_GLOBAL = 0x04    # operand: slot
    ADD = 0x05
    SUB = 0x06
    MUL = 0x07
    DIV = 0x08
    PRINT = 0x09
    READ_INPUT = 0x0A      # operand: 1 if a prompt is on the stack, else 0
    JUMP = 0x0B            # operand: absolute instruction index
    JUMP_IF_FALSE = 0x0C   # operand: absolute instruction index


JUMP_OPCODES = (OpCode.JUMP, OpCode.JUMP_IF_FALSE)

# One fixed-width record per instruction
INSTRUCTION_DTYPE = np.dtype([
    ('opcode', '<u1'),
    ('operand', '<u4'),
])

# Placeholder operand for jumps awaiting a backpatch
UNPATCHED = 0xFFFFFFFF


@dataclass(frozen=True)
class Instruction:
    """A single VM instruction."""
    
    opcode: OpCode
    operand: int = 0
    
    def __str__(self) -> str:
        if self.opcode in (OpCode.HALT, OpCode.ADD, OpCode.SUB, OpCode.MUL,
                           OpCode.DIV, OpCode.PRINT):
            return self.opcode.name
        return f"{self.opcode.name} {self.operand}"


@dataclass
class Constant:
    """A constant value in the constant pool."""
    
    TYPE_NUMBER = 1
    TYPE_STRING = 2
    
    type: int
    value: Any
    
    @classmethod
    def number(cls, value: float) -> 'Constant':
        return cls(cls.TYPE_NUMBER, float(value))
    
    @classmethod
    def string(cls, value: str) -> 'Constant':
        return cls(cls.TYPE_STRING, value)


@dataclass
class Bytecode:
    """Container for compiled Brainrot bytecode."""
    
    # Magic number for file format
    MAGIC = b'BRBC'
    VERSION = 4
    
    constants: List[Constant] = field(default_factory=list)
    instructions: List[Instruction] = field(default_factory=list)
    
    def add_constant(self, constant: Constant) -> int:
        """Add a constant to the pool, returning its index."""
        # Check for existing identical constant
        for i, c in enumerate(self.constants):
            if c.type == constant.type and c.value == constant.value:
                return i
        
        index = len(self.constants)
        self.constants.append(constant)
        return index
    
    def emit(self, opcode: OpCode, operand: int = 0) -> int:
        """Emit an instruction, returning its index."""
        index = len(self.instructions)
        self.instructions.append(Instruction(opcode, operand))
        return index
    
    def emit_jump(self, opcode: OpCode) -> int:
        """Emit a jump instruction with placeholder target."""
        return self.emit(opcode, UNPATCHED)
    
    def patch_jump(self, index: int) -> None:
        """Point the jump at ``index`` to the next instruction to be emitted."""
        jump = self.instructions[index]
        if jump.opcode not in JUMP_OPCODES:
            raise ValueError(f"Instruction {index} is not a jump: {jump}")
        self.instructions[index] = Instruction(jump.opcode, self.current_offset())
    
    def current_offset(self) -> int:
        """Get the index of the next instruction."""
        return len(self.instructions)
    
    def serialize(self) -> bytes:
        """Serialize bytecode to binary format."""
        output = bytearray()
        
        # Header
        output.extend(self.MAGIC)
        output.extend(struct.pack('<H', self.VERSION))
        output.extend(struct.pack('<H', 0))  # Flags
        
        # Constant pool
        output.extend(struct.pack('<I', len(self.constants)))
        for const in self.constants:
            output.append(const.type)
            if const.type == Constant.TYPE_NUMBER:
                output.extend(struct.pack('<d', const.value))
            elif const.type == Constant.TYPE_STRING:
                encoded = const.value.encode('utf-8')
                output.extend(struct.pack('<I', len(encoded)))
                output.extend(encoded)
            else:
                raise ValueError(f"Unknown constant type: {const.type}")
        
        # Code
        records = np.array(
            [(int(instr.opcode), instr.operand) for instr in self.instructions],
            dtype=INSTRUCTION_DTYPE,
        )
        output.extend(struct.pack('<I', len(records)))
        output.extend(records.tobytes())
        
        logger.debug("serialized %d constants and %d instructions into %d bytes",
                     len(self.constants), len(self.instructions), len(output))
        return bytes(output)
    
    @classmethod
    def deserialize(cls, data: bytes) -> 'Bytecode':
        """
        Deserialize bytecode from binary format.
        
        Raises:
            FormatError: If the data is truncated, corrupt or from another version
        """
        reader = _Reader(data)
        
        # Header
        if reader.take(4, "magic") != cls.MAGIC:
            raise FormatError("bad magic number")
        
        version = reader.unpack('<H', "version")
        if version != cls.VERSION:
            raise FormatError(f"unsupported version {version} (expected {cls.VERSION})")
        reader.unpack('<H', "flags")
        
        bc = cls()
        
        # Read constants
        const_count = reader.unpack('<I', "constant count")
        for i in range(const_count):
            const_type = reader.unpack('<B', f"constant {i}")
            
            if const_type == Constant.TYPE_NUMBER:
                bc.constants.append(Constant.number(reader.unpack('<d', f"constant {i}")))
            elif const_type == Constant.TYPE_STRING:
                length = reader.unpack('<I', f"constant {i}")
                raw = reader.take(length, f"constant {i}")
                try:
                    bc.constants.append(Constant.string(raw.decode('utf-8')))
                except UnicodeDecodeError:
                    raise FormatError(f"constant {i} is not valid UTF-8")
            else:
                raise FormatError(f"unknown constant tag {const_type} at constant {i}")
        
        # Read code
        instr_count = reader.unpack('<I', "instruction count")
        raw = reader.take(instr_count * INSTRUCTION_DTYPE.itemsize, "instructions")
        records = np.frombuffer(raw, dtype=INSTRUCTION_DTYPE).tolist() if raw else []
        
        for i, (opcode, operand) in enumerate(records):
            try:
                op = OpCode(opcode)
            except ValueError:
                raise FormatError(f"unknown opcode 0x{opcode:02x} at instruction {i}")
            bc.instructions.append(Instruction(op, operand))
        
        if not reader.at_end():
            raise FormatError(f"{reader.remaining()} trailing bytes after instructions")
        
        bc.validate()
        logger.debug("loaded %d constants and %d instructions",
                     len(bc.constants), len(bc.instructions))
        return bc
    
    def validate(self) -> None:
        """Check every operand refers to something that exists."""
        count = len(self.instructions)
        for i, instr in enumerate(self.instructions):
            op, operand = instr.opcode, instr.operand
            if op == OpCode.LOAD_CONST and operand >= len(self.constants):
                raise FormatError(f"instruction {i} references missing constant {operand}")
            if op in (OpCode.LOAD_GLOBAL, OpCode.STORE_GLOBAL) and operand >= GLOBAL_COUNT:
                raise FormatError(f"instruction {i} references missing slot {operand}")
            if op in JUMP_OPCODES and operand >= count:
                raise FormatError(f"instruction {i} jumps out of range to {operand}")
            if op == OpCode.READ_INPUT and operand not in (0, 1):
                raise FormatError(f"instruction {i} has invalid prompt flag {operand}")
    
    def disassemble(self) -> str:
        """Disassemble bytecode to human-readable format."""
        lines = []
        lines.append("=== Brainrot Bytecode ===")
        lines.append("")
        
        # Constants
        lines.append("Constants:")
        for i, const in enumerate(self.constants):
            if const.type == Constant.TYPE_NUMBER:
                lines.append(f"  [{i:4d}] number: {const.value}")
            elif const.type == Constant.TYPE_STRING:
                lines.append(f"  [{i:4d}] string: {const.value!r}")
        lines.append("")
        
        # Code
        lines.append("Code:")
        for offset, instr in enumerate(self.instructions):
            lines.append(self._disassemble_instruction(offset, instr))
        
        return "\n".join(lines)
    
    def _disassemble_instruction(self, offset: int, instr: Instruction) -> str:
        """Disassemble a single instruction."""
        op, operand = instr.opcode, instr.operand
        name = op.name
        
        if op == OpCode.LOAD_CONST:
            const = self.constants[operand] if operand < len(self.constants) else None
            const_str = f" ; {const.value!r}" if const else ""
            return f"  {offset:04d}: {name:16s} {operand}{const_str}"
        
        elif op in (OpCode.LOAD_GLOBAL, OpCode.STORE_GLOBAL):
            slot_name = GLOBAL_NAMES[operand] if operand < GLOBAL_COUNT else "?"
            return f"  {offset:04d}: {name:16s} {operand} ; {slot_name}"
        
        elif op in JUMP_OPCODES:
            return f"  {offset:04d}: {name:16s} -> {operand:04d}"
        
        elif op == OpCode.READ_INPUT:
            return f"  {offset:04d}: {name:16s} {'prompt' if operand else 'no prompt'}"
        
        else:
            return f"  {offset:04d}: {name}"


class _Reader:
    """Bounds-checked cursor over a serialized container."""
    
    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0
    
    def take(self, size: int, what: str) -> bytes:
        if self.offset + size > len(self.data):
            raise FormatError(f"truncated {what}")
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk
    
    def unpack(self, fmt: str, what: str) -> Any:
        return struct.unpack(fmt, self.take(struct.calcsize(fmt), what))[0]
    
    def remaining(self) -> int:
        return len(self.data) - self.offset
    
    def at_end(self) -> bool:
        return self.offset >= len(self.data)
