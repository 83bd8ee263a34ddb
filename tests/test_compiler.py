"""
Brainrot Compiler Tests

Tests for the Brainrot compiler: lexer, parser, and code generator.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from brainrot import compile_source, CodeGenerator, OpCode
from brainrot.ast import (
    AssignStmt, BinaryExpr, BinaryOperator, CallExpr, IfStmt, NumberExpr,
    PrintStmt, StringExpr, VariableExpr, WhileStmt, ASTPrinter,
)
from brainrot.bytecode import Instruction, Constant
from brainrot.tokens import TokenType
from brainrot.errors import LexError, ParseError, UnknownVariableError
from brainrot.lexer import tokenize
from brainrot.parser import parse as parse_tokens


def parse(source):
    return parse_tokens(tokenize(source))


def parse_body(body):
    return parse(f"LOCK IN {body} ITS OVER").statements


def ops(bytecode):
    return [instr.opcode for instr in bytecode.instructions]


# =============================================================================
# Lexer Tests
# =============================================================================

class TestLexerBasics:
    """Basic lexer functionality tests."""
    
    def test_empty_source(self):
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
    
    def test_whitespace_only(self):
        tokens = tokenize("   \t\n  \r\n")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
    
    def test_positions(self):
        tokens = tokenize("LOCK IN\n  SAY 1")
        say = tokens[2]
        assert say.type == TokenType.SAY
        assert (say.line, say.column) == (2, 3)
    
    def test_comment_runs_to_end_of_line(self):
        tokens = tokenize("SAY 1 🖕 SAY 2\nSAY 3")
        types = [t.type for t in tokens]
        assert types == [TokenType.SAY, TokenType.NUMBER,
                         TokenType.SAY, TokenType.NUMBER, TokenType.EOF]
        assert tokens[3].value == 3.0


class TestLexerNumbers:
    """Number literal tokenization tests."""
    
    def test_integer(self):
        tokens = tokenize("42")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == 42.0
    
    def test_float(self):
        tokens = tokenize("3.14")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == 3.14
    
    def test_single_decimal_point_only(self):
        with pytest.raises(LexError) as exc:
            tokenize("1.5.2")
        assert exc.value.column == 4
    
    def test_no_negative_literals(self):
        tokens = tokenize("😭5")
        assert tokens[0].type == TokenType.MINUS
        assert tokens[1].value == 5.0


class TestLexerStrings:
    """String literal tokenization tests."""
    
    def test_double_quote_string(self):
        tokens = tokenize('"hello"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "hello"
    
    def test_backslashes_are_literal(self):
        tokens = tokenize(r'"a\nb"')
        assert tokens[0].value == "a\\nb"
    
    def test_empty_string(self):
        assert tokenize('""')[0].value == ""
    
    def test_glyphs_inside_string_are_text(self):
        tokens = tokenize('"💀 LOCK 🖕"')
        assert len(tokens) == 2
        assert tokens[0].value == "💀 LOCK 🖕"
    
    def test_unterminated_string(self):
        with pytest.raises(LexError) as exc:
            tokenize('SAY "oops')
        assert "unterminated string" in str(exc.value)
        assert exc.value.line == 1
        assert exc.value.column == 5


class TestLexerKeywords:
    """Keyword tokenization tests."""
    
    @pytest.mark.parametrize("keyword,expected_type", [
        ("LOCK", TokenType.LOCK),
        ("IN", TokenType.IN),
        ("ITS", TokenType.ITS),
        ("OVER", TokenType.OVER),
        ("FANUMTAX", TokenType.FANUMTAX),
        ("FR", TokenType.FR),
        ("SAY", TokenType.SAY),
        ("ONGOD", TokenType.ONGOD),
        ("NO", TokenType.NO),
        ("CAP", TokenType.CAP),
        ("DEADASS", TokenType.DEADASS),
        ("SKIBIDI", TokenType.SKIBIDI),
        ("RIZZUP", TokenType.RIZZUP),
    ])
    def test_keywords(self, keyword, expected_type):
        tokens = tokenize(keyword)
        assert tokens[0].type == expected_type
    
    def test_keywords_are_case_sensitive(self):
        assert tokenize("say")[0].type == TokenType.IDENTIFIER
    
    def test_identifiers_may_contain_digits(self):
        tokens = tokenize("aura2")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].lexeme == "aura2"
    
    def test_touchy_is_an_identifier(self):
        assert tokenize("TOUCHY")[0].type == TokenType.IDENTIFIER

    @pytest.mark.parametrize("source,column", [
        ("aura²", 5),
        ("café", 4),
        ("éaura", 1),
    ])
    def test_identifiers_are_ascii_only(self, source, column):
        with pytest.raises(LexError) as exc:
            tokenize(source)
        assert exc.value.column == column


class TestLexerOperators:
    """Operator tokenization tests."""
    
    @pytest.mark.parametrize("op,expected_type", [
        ("💀", TokenType.PLUS),
        ("😭", TokenType.MINUS),
        ("😏", TokenType.STAR),
        ("🚡", TokenType.SLASH),
        ("(", TokenType.LPAREN),
        (")", TokenType.RPAREN),
    ])
    def test_operators(self, op, expected_type):
        tokens = tokenize(op)
        assert tokens[0].type == expected_type
    
    def test_operators_need_no_spaces(self):
        types = [t.type for t in tokenize("1💀2😏3")]
        assert types == [TokenType.NUMBER, TokenType.PLUS, TokenType.NUMBER,
                         TokenType.STAR, TokenType.NUMBER, TokenType.EOF]
    
    @pytest.mark.parametrize("char", ["+", "-", "*", "/", "=", "😀", "$"])
    def test_invalid_character(self, char):
        with pytest.raises(LexError) as exc:
            tokenize(f"SAY 1 {char} 2")
        assert exc.value.column == 7


# =============================================================================
# Parser Tests
# =============================================================================

class TestParserProgram:
    """Program wrapper tests."""
    
    def test_empty_program(self):
        assert parse("LOCK IN ITS OVER").statements == []
    
    def test_missing_lock_in(self):
        with pytest.raises(ParseError) as exc:
            parse('SAY "hi" ITS OVER')
        assert exc.value.expected == "'LOCK IN'"
    
    def test_missing_its_over(self):
        with pytest.raises(ParseError) as exc:
            parse('LOCK IN SAY "hi"')
        assert exc.value.found == "end of input"
    
    def test_missing_over(self):
        with pytest.raises(ParseError):
            parse("LOCK IN ITS")
    
    def test_trailing_tokens(self):
        with pytest.raises(ParseError) as exc:
            parse('LOCK IN ITS OVER SAY "late"')
        assert "ITS OVER" in exc.value.expected


class TestParserStatements:
    """Statement parsing tests."""
    
    def test_assign(self):
        [stmt] = parse_body("FANUMTAX aura FR 1")
        assert isinstance(stmt, AssignStmt)
        assert stmt.name == "aura"
        assert isinstance(stmt.value, NumberExpr)
    
    def test_assign_missing_fr(self):
        with pytest.raises(ParseError) as exc:
            parse_body("FANUMTAX aura 1")
        assert exc.value.expected == "'FR' after variable name"
        assert exc.value.found == "number 1"
    
    def test_assign_to_keyword(self):
        with pytest.raises(ParseError):
            parse_body("FANUMTAX SAY FR 1")
    
    def test_print(self):
        [stmt] = parse_body('SAY "hi"')
        assert isinstance(stmt, PrintStmt)
        assert isinstance(stmt.expression, StringExpr)
        assert stmt.expression.value == "hi"
    
    def test_if_without_else(self):
        [stmt] = parse_body("ONGOD aura SAY 1 SAY 2 DEADASS")
        assert isinstance(stmt, IfStmt)
        assert len(stmt.then_block) == 2
        assert stmt.else_block is None
    
    def test_if_with_else(self):
        [stmt] = parse_body("ONGOD aura SAY 1 NO CAP SAY 2 DEADASS")
        assert len(stmt.then_block) == 1
        assert len(stmt.else_block) == 1
    
    def test_if_with_empty_else(self):
        [stmt] = parse_body("ONGOD aura NO CAP DEADASS")
        assert stmt.then_block == []
        assert stmt.else_block == []
    
    def test_missing_deadass(self):
        with pytest.raises(ParseError) as exc:
            parse_body("ONGOD aura SAY 1")
        assert "DEADASS" in exc.value.expected
    
    def test_no_without_cap(self):
        with pytest.raises(ParseError) as exc:
            parse_body("ONGOD aura SAY 1 NO SAY 2 DEADASS")
        assert exc.value.expected == "'CAP' after 'NO'"
    
    def test_while(self):
        [stmt] = parse_body("SKIBIDI aura FANUMTAX aura FR aura 😭 1 RIZZUP")
        assert isinstance(stmt, WhileStmt)
        assert len(stmt.body) == 1
    
    def test_missing_rizzup(self):
        with pytest.raises(ParseError) as exc:
            parse_body("SKIBIDI aura SAY 1")
        assert "RIZZUP" in exc.value.expected
    
    def test_nested_blocks(self):
        [stmt] = parse_body(
            "SKIBIDI aura ONGOD peak SAY 1 NO CAP SAY 2 DEADASS RIZZUP")
        assert isinstance(stmt.body[0], IfStmt)
    
    def test_error_position(self):
        with pytest.raises(ParseError) as exc:
            parse("LOCK IN\nSAY\nITS OVER")
        assert exc.value.line == 3
        assert exc.value.column == 1


class TestParserExpressions:
    """Expression parsing tests."""
    
    def expr(self, source):
        [stmt] = parse_body(f"SAY {source}")
        return stmt.expression
    
    def test_precedence(self):
        expr = self.expr("1 💀 2 😏 3")
        assert expr.operator == BinaryOperator.ADD
        assert expr.right.operator == BinaryOperator.MUL
    
    def test_left_associative(self):
        expr = self.expr("8 😭 4 😭 2")
        assert expr.operator == BinaryOperator.SUB
        assert isinstance(expr.left, BinaryExpr)
        assert expr.right.value == 2.0
    
    def test_division_tier(self):
        expr = self.expr("8 🚡 4 😏 2")
        assert expr.operator == BinaryOperator.MUL
        assert expr.left.operator == BinaryOperator.DIV
    
    def test_variable(self):
        expr = self.expr("sigma")
        assert isinstance(expr, VariableExpr)
        assert expr.name == "sigma"
    
    def test_unknown_identifier_is_parsed(self):
        # name validity is checked by the code generator
        assert self.expr("rizz").name == "rizz"
    
    def test_touchy_without_prompt(self):
        expr = self.expr("TOUCHY()")
        assert isinstance(expr, CallExpr)
        assert expr.argument is None
    
    def test_touchy_with_prompt(self):
        expr = self.expr('TOUCHY("name: " 💀 aura)')
        assert isinstance(expr.argument, BinaryExpr)
    
    def test_touchy_requires_parens(self):
        with pytest.raises(ParseError):
            parse_body("SAY TOUCHY")
    
    def test_unclosed_touchy(self):
        with pytest.raises(ParseError) as exc:
            parse_body('SAY TOUCHY("x"')
        assert exc.value.expected == "')' after argument"
    
    def test_operator_without_operand(self):
        with pytest.raises(ParseError) as exc:
            parse_body("SAY 1 💀")
        assert exc.value.expected == "an expression"
    
    def test_parenthesised_grouping_is_not_supported(self):
        with pytest.raises(ParseError):
            parse_body("SAY (1)")


class TestASTPrinter:
    
    def test_print_tree(self):
        program = parse('LOCK IN ONGOD aura SAY 1 💀 2 NO CAP SAY "x" DEADASS ITS OVER')
        assert ASTPrinter().print(program) == "\n".join([
            "program",
            "  if aura",
            "    print (1.0 + 2.0)",
            "  else",
            "    print 'x'",
        ])


# =============================================================================
# Code Generator Tests
# =============================================================================

class TestCodeGen:
    """Bytecode emission tests."""
    
    def test_ends_with_halt(self):
        bc = compile_source("LOCK IN ITS OVER")
        assert bc.instructions == [Instruction(OpCode.HALT)]
    
    def test_print_literal(self):
        bc = compile_source('LOCK IN SAY "hi" ITS OVER')
        assert bc.constants == [Constant.string("hi")]
        assert bc.instructions == [
            Instruction(OpCode.LOAD_CONST, 0),
            Instruction(OpCode.PRINT),
            Instruction(OpCode.HALT),
        ]
    
    @pytest.mark.parametrize("name,slot", [
        ("aura", 0), ("peak", 1), ("goon", 2), ("mog", 3),
        ("npc", 4), ("sigma", 5), ("gyatt", 6),
    ])
    def test_global_slots(self, name, slot):
        bc = compile_source(f"LOCK IN FANUMTAX {name} FR {name} ITS OVER")
        assert bc.instructions[:2] == [
            Instruction(OpCode.LOAD_GLOBAL, slot),
            Instruction(OpCode.STORE_GLOBAL, slot),
        ]
    
    def test_postfix_order(self):
        bc = compile_source("LOCK IN SAY 1 💀 2 😏 3 ITS OVER")
        assert ops(bc) == [
            OpCode.LOAD_CONST, OpCode.LOAD_CONST, OpCode.LOAD_CONST,
            OpCode.MUL, OpCode.ADD, OpCode.PRINT, OpCode.HALT,
        ]
    
    def test_constants_are_deduplicated(self):
        bc = compile_source('LOCK IN SAY 1 SAY 1 SAY "1" ITS OVER')
        assert bc.constants == [Constant.number(1.0), Constant.string("1")]
    
    def test_if_without_else(self):
        bc = compile_source("LOCK IN ONGOD aura SAY 1 DEADASS ITS OVER")
        assert bc.instructions == [
            Instruction(OpCode.LOAD_GLOBAL, 0),
            Instruction(OpCode.JUMP_IF_FALSE, 4),
            Instruction(OpCode.LOAD_CONST, 0),
            Instruction(OpCode.PRINT),
            Instruction(OpCode.HALT),
        ]
    
    def test_if_with_else(self):
        bc = compile_source("LOCK IN ONGOD aura SAY 1 NO CAP SAY 2 DEADASS ITS OVER")
        assert bc.instructions == [
            Instruction(OpCode.LOAD_GLOBAL, 0),
            Instruction(OpCode.JUMP_IF_FALSE, 5),
            Instruction(OpCode.LOAD_CONST, 0),
            Instruction(OpCode.PRINT),
            Instruction(OpCode.JUMP, 7),
            Instruction(OpCode.LOAD_CONST, 1),
            Instruction(OpCode.PRINT),
            Instruction(OpCode.HALT),
        ]
    
    def test_while(self):
        bc = compile_source("LOCK IN SAY 0 SKIBIDI aura SAY 1 RIZZUP ITS OVER")
        assert bc.instructions == [
            Instruction(OpCode.LOAD_CONST, 0),
            Instruction(OpCode.PRINT),
            Instruction(OpCode.LOAD_GLOBAL, 0),     # loop top
            Instruction(OpCode.JUMP_IF_FALSE, 7),
            Instruction(OpCode.LOAD_CONST, 1),
            Instruction(OpCode.PRINT),
            Instruction(OpCode.JUMP, 2),
            Instruction(OpCode.HALT),
        ]
    
    def test_touchy(self):
        bc = compile_source('LOCK IN FANUMTAX aura FR TOUCHY() SAY TOUCHY("? ") ITS OVER')
        assert bc.instructions == [
            Instruction(OpCode.READ_INPUT, 0),
            Instruction(OpCode.STORE_GLOBAL, 0),
            Instruction(OpCode.LOAD_CONST, 0),
            Instruction(OpCode.READ_INPUT, 1),
            Instruction(OpCode.PRINT),
            Instruction(OpCode.HALT),
        ]
    
    def test_generator_is_reusable(self):
        codegen = CodeGenerator()
        first = codegen.generate(parse("LOCK IN SAY 1 ITS OVER"))
        second = codegen.generate(parse("LOCK IN SAY 2 ITS OVER"))
        assert first.constants == [Constant.number(1.0)]
        assert second.constants == [Constant.number(2.0)]


class TestCompileErrors:
    """Semantic error tests."""
    
    def test_assign_unknown_variable(self):
        with pytest.raises(UnknownVariableError) as exc:
            compile_source("LOCK IN FANUMTAX rizz FR 1 ITS OVER")
        assert exc.value.name == "rizz"
    
    def test_read_unknown_variable(self):
        with pytest.raises(UnknownVariableError) as exc:
            compile_source("LOCK IN SAY 1 💀 skibidi ITS OVER")
        assert exc.value.name == "skibidi"
        assert exc.value.column == 17
    
    def test_names_are_case_sensitive(self):
        with pytest.raises(UnknownVariableError):
            compile_source("LOCK IN SAY AURA ITS OVER")
    
    def test_filename_in_message(self):
        with pytest.raises(UnknownVariableError) as exc:
            compile_source("LOCK IN\nSAY rizz ITS OVER", filename="main.brainrot")
        assert str(exc.value) == "main.brainrot:2:5: unknown variable: rizz"
    
    def test_lex_error_aborts_compilation(self):
        with pytest.raises(LexError):
            compile_source('LOCK IN SAY "open ITS OVER')
