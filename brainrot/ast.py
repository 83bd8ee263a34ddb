"""
Brainrot Abstract Syntax Tree

Defines AST node classes for the Brainrot language.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Any
from .tokens import Token


# =============================================================================
# Base Classes
# =============================================================================

class ASTNode(ABC):
    """Base class for all AST nodes."""
    
    @abstractmethod
    def accept(self, visitor: 'ASTVisitor') -> Any:
        """Accept a visitor for traversal."""
        pass


class Expression(ASTNode):
    """Base class for expression nodes."""
    pass


class Statement(ASTNode):
    """Base class for statement nodes."""
    pass


class BinaryOperator(Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'


# =============================================================================
# Expressions
# =============================================================================

@dataclass
class NumberExpr(Expression):
    """Numeric literal."""
    value: float
    token: Token
    
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_number(self)


@dataclass
class StringExpr(Expression):
    """String literal."""
    value: str
    token: Token
    
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_string(self)


@dataclass
class VariableExpr(Expression):
    """Reference to a global by name. Resolved to a slot by the code generator."""
    name: str
    token: Token
    
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_variable(self)


@dataclass
class BinaryExpr(Expression):
    """Binary operator expression."""
    left: Expression
    operator: BinaryOperator
    right: Expression
    token: Token
    
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary(self)


@dataclass
class CallExpr(Expression):
    """Built-in call, TOUCHY(prompt?)."""
    name: str
    argument: Optional[Expression]
    token: Token
    
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_call(self)


# =============================================================================
# Statements
# =============================================================================

@dataclass
class AssignStmt(Statement):
    """FANUMTAX <name> FR <expr>"""
    name: str
    value: Expression
    token: Token
    
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_assign(self)


@dataclass
class PrintStmt(Statement):
    """SAY <expr>"""
    expression: Expression
    token: Token
    
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_print(self)


@dataclass
class IfStmt(Statement):
    """ONGOD <cond> ... (NO CAP ...)? DEADASS"""
    condition: Expression
    then_block: List[Statement]
    else_block: Optional[List[Statement]]
    token: Token
    
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_if(self)


@dataclass
class WhileStmt(Statement):
    """SKIBIDI <cond> ... RIZZUP"""
    condition: Expression
    body: List[Statement]
    token: Token
    
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_while(self)


@dataclass
class Program(ASTNode):
    """Root node: the statements between LOCK IN and ITS OVER."""
    statements: List[Statement]
    
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_program(self)


# =============================================================================
# Visitor
# =============================================================================

class ASTVisitor(ABC):
    """Base class for AST visitors."""
    
    @abstractmethod
    def visit_number(self, node: NumberExpr) -> Any:
        pass
    
    @abstractmethod
    def visit_string(self, node: StringExpr) -> Any:
        pass
    
    @abstractmethod
    def visit_variable(self, node: VariableExpr) -> Any:
        pass
    
    @abstractmethod
    def visit_binary(self, node: BinaryExpr) -> Any:
        pass
    
    @abstractmethod
    def visit_call(self, node: CallExpr) -> Any:
        pass
    
    @abstractmethod
    def visit_assign(self, node: AssignStmt) -> Any:
        pass
    
    @abstractmethod
    def visit_print(self, node: PrintStmt) -> Any:
        pass
    
    @abstractmethod
    def visit_if(self, node: IfStmt) -> Any:
        pass
    
    @abstractmethod
    def visit_while(self, node: WhileStmt) -> Any:
        pass
    
    def visit_program(self, node: Program) -> Any:
        for stmt in node.statements:
            stmt.accept(self)


class ASTPrinter(ASTVisitor):
    """Renders an AST as an indented tree, one node per line."""
    
    def __init__(self):
        self.indent = 0
    
    def print(self, node: ASTNode) -> str:
        return node.accept(self)
    
    def _indent(self) -> str:
        return "  " * self.indent
    
    def _block(self, statements: List[Statement]) -> List[str]:
        self.indent += 1
        lines = [stmt.accept(self) for stmt in statements]
        self.indent -= 1
        return lines
    
    def visit_number(self, node: NumberExpr) -> str:
        return repr(node.value)
    
    def visit_string(self, node: StringExpr) -> str:
        return repr(node.value)
    
    def visit_variable(self, node: VariableExpr) -> str:
        return node.name
    
    def visit_binary(self, node: BinaryExpr) -> str:
        return f"({node.left.accept(self)} {node.operator.value} {node.right.accept(self)})"
    
    def visit_call(self, node: CallExpr) -> str:
        arg = node.argument.accept(self) if node.argument is not None else ""
        return f"{node.name}({arg})"
    
    def visit_assign(self, node: AssignStmt) -> str:
        return f"{self._indent()}assign {node.name} = {node.value.accept(self)}"
    
    def visit_print(self, node: PrintStmt) -> str:
        return f"{self._indent()}print {node.expression.accept(self)}"
    
    def visit_if(self, node: IfStmt) -> str:
        lines = [f"{self._indent()}if {node.condition.accept(self)}"]
        lines.extend(self._block(node.then_block))
        if node.else_block is not None:
            lines.append(f"{self._indent()}else")
            lines.extend(self._block(node.else_block))
        return "\n".join(lines)
    
    def visit_while(self, node: WhileStmt) -> str:
        lines = [f"{self._indent()}while {node.condition.accept(self)}"]
        lines.extend(self._block(node.body))
        return "\n".join(lines)
    
    def visit_program(self, node: Program) -> str:
        return "\n".join(["program"] + self._block(node.statements))
