"""
Kaleidoscope - Front End for a Minimal Expression Language
==========================================================

This package provides the lexer, operator-precedence parser and AST for
Kaleidoscope, a tiny language used for compiler-construction
experiments. Everything has a single numeric type (a 64-bit float);
programs are made of function definitions, extern declarations and
top-level expressions.

Main Components
---------------
- **frontend.lexer**: character stream to tokens, on demand
- **frontend.precedence**: configurable binary operator table
- **frontend.parser**: recursive descent / precedence climbing parser
- **frontend.ast**: the closed set of AST node types
- **frontend.driver**: parses a whole source text, recovering after errors
- **cli**: the ``kparse`` command-line tool

Quick Start
-----------
    >>> from kaleidoscope import parse_source, format_expression
    >>> format_expression(parse_source("a+b*c").node)
    '(a + (b * c))'

Or from the command line:
    $ kparse --ast program.ks
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from kaleidoscope.errors import KaleidoscopeError, SourceLocation
from kaleidoscope.frontend import (
    ASTPrinter,
    BinaryExpression,
    CallExpression,
    DiagnosticReporter,
    FrontendConfig,
    FrontendError,
    FunctionNode,
    Lexer,
    MalformedNumberError,
    NumberLiteral,
    ParseError,
    ParseResult,
    Parser,
    PrecedenceTable,
    ProgramSummary,
    PrototypeError,
    PrototypeNode,
    Token,
    TokenType,
    VariableExpression,
    format_expression,
    parse_program,
    parse_source,
)

__all__ = [
    "__version__",
    # Errors
    "KaleidoscopeError",
    "SourceLocation",
    "FrontendError",
    "MalformedNumberError",
    "ParseError",
    "PrototypeError",
    "DiagnosticReporter",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    # Parser
    "Parser",
    "ParseResult",
    "PrecedenceTable",
    "FrontendConfig",
    "parse_source",
    "parse_program",
    "ProgramSummary",
    # AST
    "NumberLiteral",
    "VariableExpression",
    "BinaryExpression",
    "CallExpression",
    "PrototypeNode",
    "FunctionNode",
    "ASTPrinter",
    "format_expression",
]
