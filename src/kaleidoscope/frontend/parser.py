"""
Kaleidoscope Recursive Descent Parser
=====================================

This module implements the parser for the Kaleidoscope language. It
pulls tokens from a Lexer one at a time (one token of lookahead) and
builds the AST defined in kaleidoscope.frontend.ast.

Grammar (Simplified EBNF)
-------------------------
toplevel        ::= definition | external | expression
definition      ::= 'def' prototype expression
external        ::= 'extern' prototype
prototype       ::= IDENTIFIER '(' IDENTIFIER* ')'

expression      ::= primary binoprhs
binoprhs        ::= (BINOP primary)*
primary         ::= identifierexpr | numberexpr | parenexpr
identifierexpr  ::= IDENTIFIER | IDENTIFIER '(' (expression (',' expression)*)? ')'
numberexpr      ::= NUMBER
parenexpr       ::= '(' expression ')'

Binary Operators
----------------
``binoprhs`` is parsed by precedence climbing. Which characters are
operators, and how tightly they bind, comes from the session's
PrecedenceTable rather than from the grammar. Operators of equal
precedence associate to the left: ``1-2-3`` is ``(1-2)-3``.

Failure Handling
----------------
Each public ``parse_*`` method returns a ParseResult. The first syntax
error stops the parse: no further tokens are consumed, one line
``Error: <message>`` goes to the diagnostic stream, and the result
carries the error. The parser never skips ahead to resynchronise;
recovering is up to the caller (see kaleidoscope.frontend.driver).

Example Usage
-------------
>>> from kaleidoscope.frontend.parser import Parser
>>> parser = Parser.from_source("foo(1, 2*x)")
>>> result = parser.parse_expression()
>>> result.node
CallExpression(callee='foo', arguments=(NumberLiteral(value=1.0), BinaryExpression(operator='*', left=NumberLiteral(value=2.0), right=VariableExpression(name='x'))))
"""

import logging
from typing import Callable, Optional, TextIO, TypeVar, Union

from kaleidoscope.frontend.ast import (
    BinaryExpression,
    CallExpression,
    Expression,
    FunctionNode,
    NumberLiteral,
    PrototypeNode,
    VariableExpression,
)
from kaleidoscope.frontend.config import FrontendConfig
from kaleidoscope.frontend.errors import (
    DiagnosticReporter,
    FrontendError,
    ParseError,
    PrototypeError,
)
from kaleidoscope.frontend.lexer import Lexer, Token, TokenType
from kaleidoscope.frontend.precedence import PrecedenceTable
from kaleidoscope.frontend.result import ParseResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Name given to the prototype wrapping a bare top-level expression
ANONYMOUS_FUNCTION_NAME = "__anon_expr"


class Parser:
    """
    Recursive descent parser for Kaleidoscope.

    A Parser owns the state of one parse session: the current token, the
    lexer it reads from, and the precedence table it consults. Sessions
    share nothing, so separate parsers can run on separate threads.

    Attributes:
        lexer: Token source
        precedence: Binary operator precedence table
        diagnostics: Receives one report per failed parse
    """

    def __init__(
        self,
        lexer: Lexer,
        precedence: Optional[PrecedenceTable] = None,
        diagnostics: Optional[DiagnosticReporter] = None,
    ):
        """
        Initialize the parser.

        The first token is read lazily, on first access to ``current``,
        so constructing a parser over interactive input does not block.

        Args:
            lexer: The lexer to pull tokens from
            precedence: Operator table (defaults to a fresh default table)
            diagnostics: Diagnostic reporter (defaults to one on stderr)
        """
        self.lexer = lexer
        self.precedence = precedence if precedence is not None else PrecedenceTable()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticReporter()
        self._current: Optional[Token] = None

    @classmethod
    def from_source(
        cls,
        source: Union[str, TextIO],
        config: Optional[FrontendConfig] = None,
        diagnostics: Optional[DiagnosticReporter] = None,
    ) -> "Parser":
        """Build a lexer and parser for ``source`` from a configuration."""
        config = config or FrontendConfig()
        lexer = Lexer(source, config.filename, strict_numbers=config.strict_numbers)
        return cls(lexer, config.build_precedence_table(), diagnostics)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    @property
    def current(self) -> Token:
        """The token the parser is looking at."""
        if self._current is None:
            self._current = self.lexer.next_token()
        return self._current

    def next_token(self) -> Token:
        """Skip the current token and make the following one current."""
        if self._current is None:
            self.lexer.next_token()  # the pending first token is the one skipped
        self._current = self.lexer.next_token()
        return self._current

    def _token_precedence(self) -> int:
        """Precedence of the current token, or NOT_AN_OPERATOR."""
        return self.precedence.lookup(self.current)

    def _error(self, message: str, error_class: type[ParseError] = ParseError) -> ParseError:
        """Create a syntax error located at the current token."""
        token = self.current
        return error_class(
            message,
            token.location,
            hint=f"found {token.describe()}",
            source_line=self.lexer.current_line_text(),
        )

    def _run(self, parse_fn: Callable[..., T], *args) -> ParseResult[T]:
        """Run an internal parse method and turn an error into a failed result."""
        try:
            return ParseResult.success(parse_fn(*args))
        except FrontendError as error:
            self.diagnostics.report(error)
            if isinstance(error, PrototypeError):
                logger.debug("Prototype failure: %s", error.message)
            return ParseResult.failure(error)
        except RecursionError:
            error = self._error("Expression nested too deeply")
            self.diagnostics.report(error)
            return ParseResult.failure(error)

    # =========================================================================
    # Public Parse Operations
    # =========================================================================

    def parse_expression(self) -> ParseResult[Expression]:
        """expression ::= primary binoprhs"""
        return self._run(self._parse_expression)

    def parse_primary(self) -> ParseResult[Expression]:
        """primary ::= identifierexpr | numberexpr | parenexpr"""
        return self._run(self._parse_primary)

    def parse_number_expr(self) -> ParseResult[NumberLiteral]:
        """numberexpr ::= NUMBER"""
        return self._run(self._parse_number_expr)

    def parse_paren_expr(self) -> ParseResult[Expression]:
        """parenexpr ::= '(' expression ')'"""
        return self._run(self._parse_paren_expr)

    def parse_identifier_expr(self) -> ParseResult[Expression]:
        """identifierexpr ::= IDENTIFIER | IDENTIFIER '(' args ')'"""
        return self._run(self._parse_identifier_expr)

    def parse_binop_rhs(self, min_prec: int, lhs: Expression) -> ParseResult[Expression]:
        """
        Parse ``(BINOP primary)*`` following ``lhs``.

        Only operators binding at least as tightly as ``min_prec`` are
        consumed.

        Raises:
            ValueError: If min_prec is negative
        """
        if min_prec < 0:
            raise ValueError(f"min_prec must be >= 0, got {min_prec}")
        return self._run(self._parse_binop_rhs, min_prec, lhs)

    def parse_prototype(self) -> ParseResult[PrototypeNode]:
        """prototype ::= IDENTIFIER '(' IDENTIFIER* ')'"""
        return self._run(self._parse_prototype)

    def parse_definition(self) -> ParseResult[FunctionNode]:
        """definition ::= 'def' prototype expression"""
        return self._run(self._parse_definition)

    def parse_extern(self) -> ParseResult[PrototypeNode]:
        """external ::= 'extern' prototype"""
        return self._run(self._parse_extern)

    def parse_top_level_expr(self) -> ParseResult[FunctionNode]:
        """toplevelexpr ::= expression, wrapped in an anonymous function"""
        return self._run(self._parse_top_level_expr)

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_expression(self) -> Expression:
        lhs = self._parse_primary()
        return self._parse_binop_rhs(0, lhs)

    def _parse_primary(self) -> Expression:
        token = self.current

        if token.type == TokenType.IDENTIFIER:
            return self._parse_identifier_expr()

        if token.type == TokenType.NUMBER:
            return self._parse_number_expr()

        if token.is_char("("):
            return self._parse_paren_expr()

        raise self._error("Unknown token when expecting an expression")

    def _parse_number_expr(self) -> NumberLiteral:
        token = self.current
        if token.type != TokenType.NUMBER:
            raise self._error("Expected a number")
        node = NumberLiteral(token.value, token.location)
        self.next_token()  # consume the number
        return node

    def _parse_paren_expr(self) -> Expression:
        if not self.current.is_char("("):
            raise self._error("expected '('")
        self.next_token()  # eat (
        expr = self._parse_expression()

        if not self.current.is_char(")"):
            raise self._error("expected ')'")
        self.next_token()  # eat )

        return expr

    def _parse_identifier_expr(self) -> Expression:
        token = self.current
        name = token.value
        self.next_token()  # eat identifier

        # Simple variable reference
        if not self.current.is_char("("):
            return VariableExpression(name, token.location)

        # Call
        self.next_token()  # eat (
        arguments = []
        if not self.current.is_char(")"):
            while True:
                arguments.append(self._parse_expression())

                if self.current.is_char(")"):
                    break

                if not self.current.is_char(","):
                    raise self._error("Expected ')' or ',' in argument list")
                self.next_token()  # eat ,

        self.next_token()  # eat )

        return CallExpression(name, tuple(arguments), token.location)

    def _parse_binop_rhs(self, min_prec: int, lhs: Expression) -> Expression:
        """
        Precedence climbing.

        Loops over operators at or above ``min_prec``. When the operator
        after the right operand binds tighter than the current one, that
        operand becomes the left side of a recursive climb; otherwise the
        pair is folded into ``lhs`` immediately, which makes equal
        precedence associate to the left.
        """
        while True:
            token_prec = self._token_precedence()

            # Not an operator, or one that binds less tightly: we're done
            if token_prec < min_prec:
                return lhs

            op_token = self.current
            self.next_token()  # eat binop

            rhs = self._parse_primary()

            next_prec = self._token_precedence()
            if token_prec < next_prec:
                rhs = self._parse_binop_rhs(token_prec + 1, rhs)

            lhs = BinaryExpression(op_token.value, lhs, rhs, lhs.location)

    # =========================================================================
    # Declaration Parsing
    # =========================================================================

    def _parse_prototype(self) -> PrototypeNode:
        token = self.current
        if token.type != TokenType.IDENTIFIER:
            raise self._error("Expected function name in prototype", PrototypeError)

        name = token.value
        self.next_token()  # eat name

        if not self.current.is_char("("):
            raise self._error("Expected '(' in prototype", PrototypeError)

        params = []
        while self.next_token().type == TokenType.IDENTIFIER:
            params.append(self.current.value)

        if not self.current.is_char(")"):
            raise self._error("Expected ')' in prototype", PrototypeError)
        self.next_token()  # eat )

        return PrototypeNode(name, tuple(params), token.location)

    def _parse_definition(self) -> FunctionNode:
        if self.current.type != TokenType.DEF:
            raise self._error("Expected 'def'")
        location = self.current.location
        self.next_token()  # eat def

        prototype = self._parse_prototype()
        body = self._parse_expression()

        logger.debug("Parsed definition of '%s'", prototype.name)
        return FunctionNode(prototype, body, location)

    def _parse_extern(self) -> PrototypeNode:
        if self.current.type != TokenType.EXTERN:
            raise self._error("Expected 'extern'")
        self.next_token()  # eat extern
        prototype = self._parse_prototype()

        logger.debug("Parsed extern '%s'", prototype.name)
        return prototype

    def _parse_top_level_expr(self) -> FunctionNode:
        location = self.current.location
        body = self._parse_expression()

        prototype = PrototypeNode(ANONYMOUS_FUNCTION_NAME, (), location)
        logger.debug("Parsed top-level expression")
        return FunctionNode(prototype, body, location)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: Union[str, TextIO],
    config: Optional[FrontendConfig] = None,
    diagnostics: Optional[DiagnosticReporter] = None,
) -> ParseResult[Expression]:
    """
    Parse the first expression in ``source``.

    Anything after that expression is left unread.

    Args:
        source: Source text or text stream
        config: Session configuration (defaults if None)
        diagnostics: Diagnostic reporter (stderr if None)

    Returns:
        ParseResult holding the expression or the first error
    """
    parser = Parser.from_source(source, config, diagnostics)
    return parser.parse_expression()
