"""
Kaleidoscope Front End
======================

This package turns Kaleidoscope source text into an abstract syntax tree.

Pipeline
--------
    Characters → Lexer → Tokens → Parser (+ PrecedenceTable) → AST

Usage
-----
>>> from kaleidoscope.frontend import parse_source, format_expression
>>> result = parse_source("1+2*3")
>>> format_expression(result.node)
'(1 + (2 * 3))'

>>> from kaleidoscope.frontend import parse_program
>>> summary = parse_program("extern sin(x)\\ndef f(x) sin(x)*2")
>>> [item.name for item in summary.items]
['sin', 'f']

Language
--------
- One data type: 64-bit float
- Expressions: numbers, variables, calls, binary operators
- Declarations: ``def`` (function with body), ``extern`` (prototype)
- Comments: ``#`` to end of line
"""

from kaleidoscope.frontend.ast import (
    ASTPrinter,
    BinaryExpression,
    CallExpression,
    Expression,
    FunctionNode,
    NumberLiteral,
    PrototypeNode,
    VariableExpression,
    format_expression,
    walk,
)
from kaleidoscope.frontend.config import FrontendConfig
from kaleidoscope.frontend.driver import ProgramSummary, TopLevelDriver, parse_program
from kaleidoscope.frontend.errors import (
    DiagnosticReporter,
    FrontendError,
    LexicalError,
    MalformedNumberError,
    ParseError,
    PrototypeError,
)
from kaleidoscope.frontend.lexer import Lexer, Token, TokenType
from kaleidoscope.frontend.parser import ANONYMOUS_FUNCTION_NAME, Parser, parse_source
from kaleidoscope.frontend.precedence import (
    DEFAULT_BINOP_PRECEDENCE,
    NOT_AN_OPERATOR,
    PrecedenceTable,
)
from kaleidoscope.frontend.result import ParseResult

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    # Precedence
    "PrecedenceTable",
    "DEFAULT_BINOP_PRECEDENCE",
    "NOT_AN_OPERATOR",
    # AST
    "Expression",
    "NumberLiteral",
    "VariableExpression",
    "BinaryExpression",
    "CallExpression",
    "PrototypeNode",
    "FunctionNode",
    "ASTPrinter",
    "format_expression",
    "walk",
    # Parser
    "Parser",
    "ParseResult",
    "parse_source",
    "ANONYMOUS_FUNCTION_NAME",
    # Driver
    "TopLevelDriver",
    "ProgramSummary",
    "parse_program",
    # Configuration
    "FrontendConfig",
    # Errors
    "FrontendError",
    "LexicalError",
    "MalformedNumberError",
    "ParseError",
    "PrototypeError",
    "DiagnosticReporter",
]
