"""
Brainrot Interpreter

Stack-based virtual machine for Brainrot bytecode. Each run owns a fresh
operand stack, a fresh set of seven global slots and an instruction pointer.
"""

import logging
import sys
from typing import List, Optional, TextIO

from brainrot.bytecode import Bytecode, OpCode, GLOBAL_COUNT
from brainrot.codegen import GLOBAL_SLOTS
from brainrot.errors import RuntimeError, StackUnderflowError

from .types import Value, ZERO

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Fetch-decode-execute loop over a Bytecode program.
    
    Example:
        vm = Interpreter(output_stream=io.StringIO())
        vm.run(bytecode)
    """
    
    def __init__(self, input_stream: Optional[TextIO] = None,
                 output_stream: Optional[TextIO] = None,
                 trace: bool = False):
        """
        Initialize the interpreter.
        
        Args:
            input_stream: Where TOUCHY reads lines from (default: sys.stdin)
            output_stream: Where SAY and prompts write to (default: sys.stdout)
            trace: Log every executed instruction at DEBUG level
        """
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.trace = trace
        self.stack: List[Value] = []
        self.globals: List[Value] = [ZERO] * GLOBAL_COUNT
        self.pc = 0
        self.bytecode: Optional[Bytecode] = None
    
    def run(self, bytecode: Bytecode) -> None:
        """
        Execute bytecode until HALT.
        
        Args:
            bytecode: Compiled bytecode
            
        Raises:
            DivisionByZeroError, TypeMismatchError: On the first failing instruction
        """
        self.bytecode = bytecode
        self.stack = []
        self.globals = [ZERO] * GLOBAL_COUNT
        self.pc = 0
        
        steps = 0
        while self.step():
            steps += 1
        
        logger.debug("halted after %d instructions", steps)
    
    def step(self) -> bool:
        """
        Execute one instruction.
        
        Returns:
            False once execution is complete, True otherwise
        """
        if self.bytecode is None:
            raise ValueError("No bytecode loaded; call run() first")
        if self.pc >= len(self.bytecode.instructions):
            return False
        
        pc = self.pc
        instr = self.bytecode.instructions[pc]
        if self.trace:
            logger.debug("%04d %-24s stack=%r", pc, instr, self.stack)
        
        try:
            return self._execute(instr.opcode, instr.operand)
        except RuntimeError as e:
            if e.pc is None:
                e.at(pc)
            raise
    
    def _execute(self, opcode: OpCode, operand: int) -> bool:
        self.pc += 1
        
        if opcode == OpCode.HALT:
            return False
        
        elif opcode == OpCode.LOAD_CONST:
            self.push(Value.from_constant(self.bytecode.constants[operand]))
        
        elif opcode == OpCode.LOAD_GLOBAL:
            self.push(self.globals[operand])
        
        elif opcode == OpCode.STORE_GLOBAL:
            self.globals[operand] = self.pop()
        
        # Arithmetic
        elif opcode == OpCode.ADD:
            b = self.pop()
            a = self.pop()
            self.push(a.add(b))
        
        elif opcode == OpCode.SUB:
            b = self.pop()
            a = self.pop()
            self.push(a.sub(b))
        
        elif opcode == OpCode.MUL:
            b = self.pop()
            a = self.pop()
            self.push(a.mul(b))
        
        elif opcode == OpCode.DIV:
            b = self.pop()
            a = self.pop()
            self.push(a.div(b))
        
        # I/O
        elif opcode == OpCode.PRINT:
            self.write(self.pop().to_text() + "\n")
        
        elif opcode == OpCode.READ_INPUT:
            if operand:
                self.write(self.pop().to_text())
                self.output.flush()
            self.push(Value.string(self.read_line()))
        
        # Control flow
        elif opcode == OpCode.JUMP:
            self.pc = operand
        
        elif opcode == OpCode.JUMP_IF_FALSE:
            if not self.pop().is_truthy():
                self.pc = operand
        
        else:
            raise RuntimeError(f"unknown opcode: {opcode!r}")
        
        return True
    
    # =========================================================================
    # Helpers
    # =========================================================================
    
    @property
    def input(self) -> TextIO:
        return self.input_stream if self.input_stream is not None else sys.stdin
    
    @property
    def output(self) -> TextIO:
        return self.output_stream if self.output_stream is not None else sys.stdout
    
    def push(self, value: Value) -> None:
        self.stack.append(value)
    
    def pop(self) -> Value:
        if not self.stack:
            raise StackUnderflowError()
        return self.stack.pop()
    
    def write(self, text: str) -> None:
        self.output.write(text)
    
    def read_line(self) -> str:
        """Read one line, without its line terminator. Empty at end of input."""
        line = self.input.readline()
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        return line
    
    def get_global(self, name: str) -> Value:
        """Current value of a braincell, by name."""
        return self.globals[GLOBAL_SLOTS[name]]
