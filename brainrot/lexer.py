"""
Brainrot Lexer

Tokenizes Brainrot source code into a stream of tokens.
"""

import logging
from typing import List

from .tokens import Token, TokenType, KEYWORDS, OPERATOR_GLYPHS, COMMENT_GLYPH
from .errors import LexError

logger = logging.getLogger(__name__)

DIGITS = '0123456789'


class Lexer:
    """Lexical analyzer for Brainrot source code."""
    
    def __init__(self, source: str):
        """
        Initialize the lexer.
        
        Args:
            source: Brainrot source code to tokenize
        """
        self.source = source
        self.tokens: List[Token] = []
        self.start = 0      # Start of current token
        self.current = 0    # Current position
        self.line = 1       # Current line number
        self.line_start = 0 # Position of current line start
    
    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.
        
        Returns:
            List of tokens, always terminated by an EOF token
            
        Raises:
            LexError: On an invalid character or unterminated string
        """
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()
        
        self.start = self.current
        self.add_token(TokenType.EOF)
        logger.debug("tokenized %d characters into %d tokens",
                     len(self.source), len(self.tokens))
        return self.tokens
    
    def scan_token(self) -> None:
        """Scan the next token."""
        c = self.advance()
        
        # Newline
        if c == '\n':
            self.newline()
            return
        
        # Skip whitespace
        if c.isspace():
            return
        
        # Comments
        if c == COMMENT_GLYPH:
            while self.peek() != '\n' and not self.is_at_end():
                self.advance()
            return
        
        if c in OPERATOR_GLYPHS:
            self.add_token(OPERATOR_GLYPHS[c])
        elif c == '(':
            self.add_token(TokenType.LPAREN)
        elif c == ')':
            self.add_token(TokenType.RPAREN)
        elif c == '"':
            self.string()
        elif c in DIGITS:
            self.number()
        elif c.isascii() and c.isalpha():
            self.identifier()
        else:
            raise LexError(f"unexpected character: {c!r}", self.line, self.column_of(self.start))
    
    def advance(self) -> str:
        """Consume and return the current character."""
        c = self.source[self.current]
        self.current += 1
        return c
    
    def peek(self) -> str:
        """Return the current character without consuming it."""
        if self.is_at_end():
            return '\0'
        return self.source[self.current]
    
    def is_at_end(self) -> bool:
        """Check if we've reached the end of the source."""
        return self.current >= len(self.source)
    
    def newline(self) -> None:
        self.line += 1
        self.line_start = self.current
    
    def column_of(self, position: int) -> int:
        return position - self.line_start + 1
    
    def add_token(self, type: TokenType, value: object = None) -> None:
        """Add a token to the token list."""
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(type, lexeme, value, self.line, self.column_of(self.start)))
    
    def string(self) -> None:
        """Scan a string literal. Characters are taken literally."""
        line = self.line
        column = self.column_of(self.start)
        
        while self.peek() != '"' and not self.is_at_end():
            if self.advance() == '\n':
                self.newline()
        
        if self.is_at_end():
            raise LexError("unterminated string", line, column)
        
        # Consume closing quote
        self.advance()
        
        value = self.source[self.start + 1:self.current - 1]
        self.tokens.append(Token(TokenType.STRING, self.source[self.start:self.current],
                                 value, line, column))
    
    def number(self) -> None:
        """Scan a number literal: digits with an optional single decimal point."""
        while self.peek() in DIGITS:
            self.advance()
        
        # Fractional part
        if self.peek() == '.':
            self.advance()  # Consume '.'
            while self.peek() in DIGITS:
                self.advance()
        
        value = float(self.source[self.start:self.current])
        self.add_token(TokenType.NUMBER, value)
    
    def identifier(self) -> None:
        """Scan an identifier or keyword."""
        while self.peek().isascii() and self.peek().isalnum():
            self.advance()
        
        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))


def tokenize(source: str) -> List[Token]:
    """Tokenize source text in one call."""
    return Lexer(source).tokenize()
