"""
Brainrot Compiler Package

A Python-based compiler for the Brainrot scripting language.
Compiles Brainrot source code to bytecode for execution on the stack VM.
"""

import logging
from typing import Optional

from .tokens import Token, TokenType
from .lexer import Lexer
from .ast import *
from .parser import Parser
from .bytecode import Bytecode, OpCode, Instruction, Constant
from .codegen import CodeGenerator
from .errors import (
    BrainrotError, LexError, ParseError, CompileError, UnknownVariableError,
    FormatError,
)

__version__ = "0.4.0"
__all__ = [
    "Token",
    "TokenType", 
    "Lexer",
    "Parser",
    "Bytecode",
    "OpCode",
    "Instruction",
    "Constant",
    "CodeGenerator",
    "BrainrotError",
    "LexError",
    "ParseError",
    "CompileError",
    "UnknownVariableError",
    "FormatError",
    "compile_source",
    "compile_file",
    "read_source",
    "compile_to_bytes",
]

logger = logging.getLogger(__name__)


def compile_source(source: str, filename: Optional[str] = None) -> Bytecode:
    """
    Compile Brainrot source code to bytecode.
    
    Args:
        source: Brainrot source code string
        filename: Optional filename for error messages
        
    Returns:
        Bytecode object ready for VM execution
        
    Raises:
        LexError, ParseError, CompileError: If compilation fails
    """
    try:
        lexer = Lexer(source)
        tokens = lexer.tokenize()
        
        parser = Parser(tokens)
        ast = parser.parse()
        
        codegen = CodeGenerator()
        bytecode = codegen.generate(ast)
    except BrainrotError as e:
        if filename and not e.filename:
            e.with_filename(filename)
        raise
    
    logger.debug("compiled %s", filename or "<source>")
    return bytecode


def compile_to_bytes(source: str, filename: Optional[str] = None) -> bytes:
    """Compile source code straight to a serialized bytecode container."""
    return compile_source(source, filename).serialize()


def compile_file(filepath: str) -> Bytecode:
    """
    Compile Brainrot source file to bytecode.
    
    Args:
        filepath: Path to .brainrot source file
        
    Returns:
        Bytecode object ready for VM execution
    """
    return compile_source(read_source(filepath), filename=filepath)


def read_source(filepath: str) -> str:
    """Read a source file, which must be UTF-8 encoded."""
    with open(filepath, 'rb') as f:
        data = f.read()
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise LexError(f"source is not valid UTF-8 (byte offset {e.start})",
                       filename=filepath) from e
