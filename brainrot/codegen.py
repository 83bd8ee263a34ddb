"""
Brainrot Code Generator

Generates bytecode from an AST in a single depth-first walk. Forward jumps
are emitted with a placeholder target and backpatched once the target
instruction index is known.
"""

import logging
from typing import List

from .ast import *
from .tokens import BUILTIN_INPUT
from .bytecode import Bytecode, OpCode, Constant, GLOBAL_NAMES
from .errors import CompileError, UnknownVariableError

logger = logging.getLogger(__name__)


# Braincell name -> global slot
GLOBAL_SLOTS = {name: slot for slot, name in enumerate(GLOBAL_NAMES)}

BINARY_OPCODES = {
    BinaryOperator.ADD: OpCode.ADD,
    BinaryOperator.SUB: OpCode.SUB,
    BinaryOperator.MUL: OpCode.MUL,
    BinaryOperator.DIV: OpCode.DIV,
}


class CodeGenerator(ASTVisitor):
    """Generates bytecode from an AST."""
    
    def __init__(self):
        self.bytecode = Bytecode()
    
    def generate(self, program: Program) -> Bytecode:
        """
        Generate bytecode from a program AST.
        
        Raises:
            UnknownVariableError: If a name is not one of the seven braincells
        """
        self.bytecode = Bytecode()
        
        program.accept(self)
        self.bytecode.emit(OpCode.HALT)
        
        logger.debug("generated %d instructions and %d constants",
                     len(self.bytecode.instructions), len(self.bytecode.constants))
        return self.bytecode
    
    def resolve_global(self, name: str, token) -> int:
        """Map a braincell name to its slot."""
        try:
            return GLOBAL_SLOTS[name]
        except KeyError:
            raise UnknownVariableError(name, token.line, token.column) from None
    
    def emit_block(self, statements: List[Statement]) -> None:
        for stmt in statements:
            stmt.accept(self)
    
    # =========================================================================
    # Expression Visitors
    # =========================================================================
    
    def visit_number(self, node: NumberExpr) -> None:
        idx = self.bytecode.add_constant(Constant.number(node.value))
        self.bytecode.emit(OpCode.LOAD_CONST, idx)
    
    def visit_string(self, node: StringExpr) -> None:
        idx = self.bytecode.add_constant(Constant.string(node.value))
        self.bytecode.emit(OpCode.LOAD_CONST, idx)
    
    def visit_variable(self, node: VariableExpr) -> None:
        self.bytecode.emit(OpCode.LOAD_GLOBAL, self.resolve_global(node.name, node.token))
    
    def visit_binary(self, node: BinaryExpr) -> None:
        """Generate code for binary expression."""
        node.left.accept(self)
        node.right.accept(self)
        self.bytecode.emit(BINARY_OPCODES[node.operator])
    
    def visit_call(self, node: CallExpr) -> None:
        """Generate code for TOUCHY, pushing the prompt first when given."""
        if node.name != BUILTIN_INPUT:
            raise CompileError(f"unknown function: {node.name}",
                               node.token.line, node.token.column)
        
        if node.argument is not None:
            node.argument.accept(self)
            self.bytecode.emit(OpCode.READ_INPUT, 1)
        else:
            self.bytecode.emit(OpCode.READ_INPUT, 0)
    
    # =========================================================================
    # Statement Visitors
    # =========================================================================
    
    def visit_assign(self, node: AssignStmt) -> None:
        slot = self.resolve_global(node.name, node.token)
        node.value.accept(self)
        self.bytecode.emit(OpCode.STORE_GLOBAL, slot)
    
    def visit_print(self, node: PrintStmt) -> None:
        node.expression.accept(self)
        self.bytecode.emit(OpCode.PRINT)
    
    def visit_if(self, node: IfStmt) -> None:
        """Generate code for if statement."""
        node.condition.accept(self)
        
        # Jump to else (or past the statement) if false
        else_jump = self.bytecode.emit_jump(OpCode.JUMP_IF_FALSE)
        self.emit_block(node.then_block)
        
        if node.else_block is not None:
            # Jump over else
            end_jump = self.bytecode.emit_jump(OpCode.JUMP)
            self.bytecode.patch_jump(else_jump)
            self.emit_block(node.else_block)
            self.bytecode.patch_jump(end_jump)
        else:
            self.bytecode.patch_jump(else_jump)
    
    def visit_while(self, node: WhileStmt) -> None:
        """Generate code for while loop."""
        loop_top = self.bytecode.current_offset()
        
        node.condition.accept(self)
        exit_jump = self.bytecode.emit_jump(OpCode.JUMP_IF_FALSE)
        
        self.emit_block(node.body)
        self.bytecode.emit(OpCode.JUMP, loop_top)
        
        self.bytecode.patch_jump(exit_jump)
