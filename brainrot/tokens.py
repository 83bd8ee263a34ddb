"""
Brainrot Token Definitions

Defines all token types and the Token class for lexical analysis.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """All token types in Brainrot."""
    
    # Literals
    NUMBER = auto()
    STRING = auto()
    IDENTIFIER = auto()
    
    # Keywords
    LOCK = auto()
    IN = auto()
    ITS = auto()
    OVER = auto()
    FANUMTAX = auto()      # assignment
    FR = auto()
    SAY = auto()           # print
    ONGOD = auto()         # if
    NO = auto()            # else (part 1)
    CAP = auto()           # else (part 2)
    DEADASS = auto()       # end if
    SKIBIDI = auto()       # while
    RIZZUP = auto()        # end while
    
    # Operators
    PLUS = auto()          # 💀
    MINUS = auto()         # 😭
    STAR = auto()          # 😏
    SLASH = auto()         # 🚡
    
    # Delimiters
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    
    # Special
    EOF = auto()


# Keyword mapping
KEYWORDS = {
    'LOCK': TokenType.LOCK,
    'IN': TokenType.IN,
    'ITS': TokenType.ITS,
    'OVER': TokenType.OVER,
    'FANUMTAX': TokenType.FANUMTAX,
    'FR': TokenType.FR,
    'SAY': TokenType.SAY,
    'ONGOD': TokenType.ONGOD,
    'NO': TokenType.NO,
    'CAP': TokenType.CAP,
    'DEADASS': TokenType.DEADASS,
    'SKIBIDI': TokenType.SKIBIDI,
    'RIZZUP': TokenType.RIZZUP,
}

# Operator glyphs, matched exactly against the source text
OPERATOR_GLYPHS = {
    '\U0001F480': TokenType.PLUS,   # 💀
    '\U0001F62D': TokenType.MINUS,  # 😭
    '\U0001F60F': TokenType.STAR,   # 😏
    '\U0001F6A1': TokenType.SLASH,  # 🚡
}

# Everything after this glyph up to the end of the line is ignored
COMMENT_GLYPH = '\U0001F595'  # 🖕

# Name of the only built-in function
BUILTIN_INPUT = 'TOUCHY'


@dataclass
class Token:
    """Represents a single token from the source code."""
    
    type: TokenType
    lexeme: str
    value: Any
    line: int
    column: int
    
    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.lexeme!r}, {self.value!r}, line={self.line})"
        return f"Token({self.type.name}, {self.lexeme!r}, line={self.line})"
    
    def describe(self) -> str:
        """Human-readable description used in error messages."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.STRING:
            return f"string {self.value!r}"
        if self.type == TokenType.NUMBER:
            return f"number {self.lexeme}"
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.lexeme}'"
        return f"'{self.lexeme}'"
