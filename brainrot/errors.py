"""
Brainrot Errors

Defines exception classes for every stage of the pipeline: lexing,
parsing, compilation, bytecode loading and execution.
"""

from typing import Optional, Tuple


class BrainrotError(Exception):
    """Base exception for all Brainrot errors."""
    
    def __init__(self, message: str, line: Optional[int] = None, 
                 column: Optional[int] = None, filename: Optional[str] = None):
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename
        super().__init__(self._format_message())
    
    def _format_message(self) -> str:
        """Format the error message with location information."""
        parts = []
        
        if self.filename:
            parts.append(self.filename)
        
        if self.line is not None:
            if parts:
                parts.append(str(self.line))
            else:
                parts.append(f"line {self.line}")
            
            if self.column is not None:
                parts.append(str(self.column))
        
        if parts:
            return f"{':'.join(parts)}: {self.message}"
        return self.message
    
    def with_filename(self, filename: str) -> 'BrainrotError':
        """Attach a filename to the error and refresh its message."""
        self.filename = filename
        self.args = (self._format_message(),)
        return self


class LexError(BrainrotError):
    """Raised for invalid characters and unterminated strings."""
    pass


class ParseError(BrainrotError):
    """Raised when the token stream violates the grammar."""
    
    def __init__(self, expected: str, found: str, line: Optional[int] = None,
                 column: Optional[int] = None, filename: Optional[str] = None):
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected}, found {found}", line, column, filename)


class CompileError(BrainrotError):
    """Raised for semantic errors during compilation."""
    pass


class UnknownVariableError(CompileError):
    """Raised when a name is not one of the seven braincells."""
    
    def __init__(self, name: str, line: Optional[int] = None,
                 column: Optional[int] = None, filename: Optional[str] = None):
        self.name = name
        super().__init__(f"unknown variable: {name}", line, column, filename)


class FormatError(BrainrotError):
    """Raised when a bytecode container cannot be loaded."""
    
    def __init__(self, reason: str, filename: Optional[str] = None):
        self.reason = reason
        super().__init__(f"invalid bytecode: {reason}", filename=filename)


class RuntimeError(BrainrotError):
    """Raised for errors during bytecode execution."""
    
    def __init__(self, message: str, pc: Optional[int] = None):
        self.pc = pc
        super().__init__(message)
    
    def _format_message(self) -> str:
        message = super()._format_message()
        if self.pc is not None:
            message = f"{message} (at instruction {self.pc})"
        return message
    
    def at(self, pc: int) -> "RuntimeError":
        """Record the instruction the error was raised at."""
        self.pc = pc
        self.args = (self._format_message(),)
        return self


class DivisionByZeroError(RuntimeError):
    """Raised when the divisor is zero."""
    
    def __init__(self, pc: Optional[int] = None):
        super().__init__("division by zero", pc)


class TypeMismatchError(RuntimeError):
    """Raised when an arithmetic operator receives non-numeric operands."""
    
    def __init__(self, op: str, operand_kinds: Tuple[str, str], pc: Optional[int] = None):
        self.op = op
        self.operand_kinds = tuple(operand_kinds)
        left, right = self.operand_kinds
        super().__init__(
            f"{op} requires both operands to be numbers, got {left} and {right}", pc
        )


class StackUnderflowError(RuntimeError):
    """Raised when an instruction pops from an empty operand stack."""
    
    def __init__(self, pc: Optional[int] = None):
        super().__init__("stack underflow", pc)
