"""
Brainrot Parser

Recursive descent parser that produces an AST from tokens.

Grammar:
    program   := LOCK IN statement* ITS OVER
    statement := assign | print | if | while
    assign    := FANUMTAX IDENTIFIER FR expr
    print     := SAY expr
    if        := ONGOD expr statement* (NO CAP statement*)? DEADASS
    while     := SKIBIDI expr statement* RIZZUP
    expr      := term ((💀 | 😭) term)*
    term      := atom ((😏 | 🚡) atom)*
    atom      := NUMBER | STRING | IDENTIFIER | call
    call      := TOUCHY '(' expr? ')'
"""

import logging
from typing import List

from .tokens import Token, TokenType, BUILTIN_INPUT
from .ast import *
from .errors import ParseError

logger = logging.getLogger(__name__)


# Tokens that can begin a statement
STATEMENT_STARTS = (
    TokenType.FANUMTAX,
    TokenType.SAY,
    TokenType.ONGOD,
    TokenType.SKIBIDI,
)

BINARY_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
}


class Parser:
    """Recursive descent parser for Brainrot."""
    
    def __init__(self, tokens: List[Token]):
        """
        Initialize the parser.
        
        Args:
            tokens: List of tokens from the lexer, ending with EOF
        """
        self.tokens = tokens
        self.current = 0
    
    def parse(self) -> Program:
        """
        Parse the token stream into an AST.
        
        Returns:
            Program AST node
            
        Raises:
            ParseError: On the first grammar violation
        """
        self.consume(TokenType.LOCK, "'LOCK IN'")
        self.consume(TokenType.IN, "'IN' after 'LOCK'")
        
        statements = self.block()
        
        self.consume(TokenType.ITS, "a statement or 'ITS OVER'")
        self.consume(TokenType.OVER, "'OVER' after 'ITS'")
        self.consume(TokenType.EOF, "end of input after 'ITS OVER'")
        
        logger.debug("parsed %d top-level statements", len(statements))
        return Program(statements)
    
    # =========================================================================
    # Statements
    # =========================================================================
    
    def block(self) -> List[Statement]:
        """Parse statements until a token that cannot start one."""
        statements = []
        while self.peek().type in STATEMENT_STARTS:
            statements.append(self.statement())
        return statements
    
    def statement(self) -> Statement:
        """Parse a statement."""
        if self.match(TokenType.FANUMTAX):
            return self.assign_statement()
        if self.match(TokenType.SAY):
            return PrintStmt(self.expression(), self.previous())
        if self.match(TokenType.ONGOD):
            return self.if_statement()
        if self.match(TokenType.SKIBIDI):
            return self.while_statement()
        
        raise self.error("a statement")
    
    def assign_statement(self) -> AssignStmt:
        keyword = self.previous()
        name = self.consume(TokenType.IDENTIFIER, "variable name after 'FANUMTAX'")
        self.consume(TokenType.FR, "'FR' after variable name")
        value = self.expression()
        return AssignStmt(name.lexeme, value, keyword)
    
    def if_statement(self) -> IfStmt:
        """Parse an if statement with an optional NO CAP branch."""
        keyword = self.previous()
        condition = self.expression()
        then_block = self.block()
        
        else_block = None
        if self.match(TokenType.NO):
            self.consume(TokenType.CAP, "'CAP' after 'NO'")
            else_block = self.block()
            self.consume(TokenType.DEADASS, "'DEADASS' to close 'ONGOD'")
        else:
            self.consume(TokenType.DEADASS, "'NO CAP' or 'DEADASS' to close 'ONGOD'")
        
        return IfStmt(condition, then_block, else_block, keyword)
    
    def while_statement(self) -> WhileStmt:
        """Parse a while loop."""
        keyword = self.previous()
        condition = self.expression()
        body = self.block()
        self.consume(TokenType.RIZZUP, "'RIZZUP' to close 'SKIBIDI'")
        return WhileStmt(condition, body, keyword)
    
    # =========================================================================
    # Expressions
    # =========================================================================
    
    def expression(self) -> Expression:
        """Parse addition/subtraction."""
        expr = self.term()
        
        while self.match(TokenType.PLUS, TokenType.MINUS):
            operator = self.previous()
            right = self.term()
            expr = BinaryExpr(expr, BINARY_OPERATORS[operator.type], right, operator)
        
        return expr
    
    def term(self) -> Expression:
        """Parse multiplication/division."""
        expr = self.atom()
        
        while self.match(TokenType.STAR, TokenType.SLASH):
            operator = self.previous()
            right = self.atom()
            expr = BinaryExpr(expr, BINARY_OPERATORS[operator.type], right, operator)
        
        return expr
    
    def atom(self) -> Expression:
        """Parse literals, variable references and TOUCHY calls."""
        if self.match(TokenType.NUMBER):
            return NumberExpr(self.previous().value, self.previous())
        if self.match(TokenType.STRING):
            return StringExpr(self.previous().value, self.previous())
        
        if self.match(TokenType.IDENTIFIER):
            token = self.previous()
            if token.lexeme == BUILTIN_INPUT:
                return self.finish_call(token)
            return VariableExpr(token.lexeme, token)
        
        raise self.error("an expression")
    
    def finish_call(self, name: Token) -> CallExpr:
        """Parse the parenthesised, optional prompt of a TOUCHY call."""
        self.consume(TokenType.LPAREN, f"'(' after '{name.lexeme}'")
        
        argument = None
        if not self.check(TokenType.RPAREN):
            argument = self.expression()
        
        self.consume(TokenType.RPAREN, "')' after argument")
        return CallExpr(name.lexeme, argument, name)
    
    # =========================================================================
    # Helper Methods
    # =========================================================================
    
    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types and advance."""
        for type in types:
            if self.check(type):
                self.advance()
                return True
        return False
    
    def check(self, type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self.peek().type == type
    
    def advance(self) -> Token:
        """Consume and return the current token."""
        if not self.is_at_end():
            self.current += 1
        return self.previous()
    
    def is_at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self.peek().type == TokenType.EOF
    
    def peek(self) -> Token:
        """Return the current token."""
        return self.tokens[self.current]
    
    def previous(self) -> Token:
        """Return the previous token."""
        return self.tokens[self.current - 1]
    
    def consume(self, type: TokenType, expected: str) -> Token:
        """Consume a token of the expected type or raise an error."""
        if self.check(type):
            return self.advance()
        raise self.error(expected)
    
    def error(self, expected: str) -> ParseError:
        token = self.peek()
        return ParseError(expected, token.describe(), token.line, token.column)


def parse(tokens: List[Token]) -> Program:
    """Parse a token list in one call."""
    return Parser(tokens).parse()
