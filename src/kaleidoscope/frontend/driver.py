"""
Top-Level Driver
================

Parses a whole source text as a sequence of top-level constructs:

    def name(params) body      -> FunctionNode
    extern name(params)        -> PrototypeNode
    expression                 -> FunctionNode named "__anon_expr"
    ;                          -> ignored

The parser stops at the first error of each construct. The driver then
skips a single token and carries on with the next construct, so one
mistake does not hide everything that follows it.

Example:
    summary = parse_program("def add(a b) a+b\\nadd(1, 2)")
    [item.name for item in summary.items]   # ["add", "__anon_expr"]
"""

from dataclasses import dataclass, field
import logging
from typing import Iterator, Optional, TextIO, Union

from kaleidoscope.frontend.ast import FunctionNode, PrototypeNode
from kaleidoscope.frontend.config import FrontendConfig
from kaleidoscope.frontend.errors import DiagnosticReporter, FrontendError
from kaleidoscope.frontend.lexer import TokenType
from kaleidoscope.frontend.parser import Parser
from kaleidoscope.frontend.result import ParseResult

logger = logging.getLogger(__name__)

TopLevelItem = Union[FunctionNode, PrototypeNode]


@dataclass
class ProgramSummary:
    """
    Result of parsing a whole source text.

    Attributes:
        items: Successfully parsed constructs, in source order
        errors: One error per failed construct, in source order
    """
    items: list[TopLevelItem] = field(default_factory=list)
    errors: list[FrontendError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def definitions(self) -> list[FunctionNode]:
        return [item for item in self.items if isinstance(item, FunctionNode)]

    @property
    def externs(self) -> list[PrototypeNode]:
        return [item for item in self.items if isinstance(item, PrototypeNode)]


class TopLevelDriver:
    """
    Feeds top-level constructs from one parser, recovering after errors.

    Usage:
        driver = TopLevelDriver(Parser.from_source(text))
        for result in driver.results():
            ...
    """

    def __init__(self, parser: Parser):
        self.parser = parser

    def results(self) -> Iterator[ParseResult[TopLevelItem]]:
        """
        Yield one ParseResult per top-level construct until end of input.
        """
        parser = self.parser
        while True:
            try:
                token = parser.current
            except FrontendError as error:
                # Lexical error before a construct even starts. The lexer
                # has already consumed the bad literal, so nothing to skip.
                parser.diagnostics.report(error)
                yield ParseResult.failure(error)
                continue

            if token.type == TokenType.EOF:
                return

            if token.is_char(";"):
                parser.next_token()  # ignore top-level semicolons
                continue

            if token.type == TokenType.DEF:
                result = parser.parse_definition()
            elif token.type == TokenType.EXTERN:
                result = parser.parse_extern()
            else:
                result = parser.parse_top_level_expr()

            yield result

            if not result.ok:
                self._skip_token()

    def run(self) -> ProgramSummary:
        """Parse everything and collect the outcome."""
        summary = ProgramSummary()
        for result in self.results():
            if result.ok:
                summary.items.append(result.node)
            else:
                summary.errors.append(result.error)

        logger.debug(
            "Parsed %d top-level items with %d errors",
            len(summary.items),
            len(summary.errors),
        )
        return summary

    def _skip_token(self) -> None:
        """Skip one token for error recovery."""
        try:
            self.parser.next_token()
        except FrontendError as error:
            # The malformed literal itself has been consumed by now
            logger.debug("Skipped malformed token: %s", error.message)


def parse_program(
    source: Union[str, TextIO],
    config: Optional[FrontendConfig] = None,
    diagnostics: Optional[DiagnosticReporter] = None,
) -> ProgramSummary:
    """
    Parse every top-level construct in ``source``.

    Args:
        source: Source text or text stream
        config: Session configuration (defaults if None)
        diagnostics: Diagnostic reporter (stderr if None)

    Returns:
        ProgramSummary with parsed items and errors
    """
    parser = Parser.from_source(source, config, diagnostics)
    return TopLevelDriver(parser).run()
