"""
Front-End Error Hierarchy and Diagnostics
=========================================

This module defines the exceptions raised by the lexer and parser, and
the DiagnosticReporter that turns them into diagnostic lines.

Exception Hierarchy
-------------------
FrontendError (base for all front-end errors)
├── LexicalError - errors detected while tokenizing
│   └── MalformedNumberError - bad numeric literal (strict mode only)
└── ParseError - syntax errors detected by the parser
    └── PrototypeError - malformed function prototype

Two Renderings
--------------
Every error has two textual forms:

- ``str(error)`` is the detailed form used in logs and by the CLI:

      demo.ks:3:7: error: expected ')'
      hint: found ';'

- ``error.diagnostic`` is the one-line form written to the diagnostic
  stream, always ``Error: <message>``.
"""

import logging
import sys
from typing import List, Optional, TextIO

from kaleidoscope.errors import KaleidoscopeError, SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Base Front-End Exception
# =============================================================================

class FrontendError(KaleidoscopeError):
    """
    Base exception for all lexer and parser errors.

    Attributes:
        message: The error description (exactly what the diagnostic shows)
        location: Where in the source the error occurred
        hint: A suggestion or extra context (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            demo.ks:1:5: error: Expected ')' in prototype
                def foo(a,
                        ^
            hint: found ','
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    @property
    def diagnostic(self) -> str:
        """The single diagnostic line for this error."""
        return f"Error: {self.message}"


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(FrontendError):
    """
    Error detected while converting characters into tokens.

    The lexer is permissive by default and never raises; these errors
    only appear when a stricter mode is requested.
    """
    pass


class MalformedNumberError(LexicalError):
    """
    Numeric literal that is not entirely a valid number.

    Only raised when the lexer runs with ``strict_numbers=True``. In the
    default permissive mode "1.2.3" silently lexes as 1.2.
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"Malformed number literal '{text}'",
            location=location,
            hint="a number is digits with at most one '.'",
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class ParseError(FrontendError):
    """
    Syntax error detected by the parser.

    Examples:
        - Unknown token where an expression was expected
        - Unterminated parenthesis
        - Malformed call argument list
    """
    pass


class PrototypeError(ParseError):
    """
    Malformed function prototype (missing name, '(' or ')').
    """
    pass


# =============================================================================
# Diagnostic Reporting
# =============================================================================

class DiagnosticReporter:
    """
    Writes one diagnostic line per error and keeps them for later review.

    Example:
        reporter = DiagnosticReporter(stream=io.StringIO())
        parser = Parser(Lexer("(1+2"), diagnostics=reporter)
        parser.parse_expression()
        reporter.errors[0].message   # "expected ')'"

    Attributes:
        errors: Every error reported so far, in order
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Args:
            stream: Destination for diagnostic lines. None means the
                current ``sys.stderr`` at the time of each report.
        """
        self._stream = stream
        self.errors: List[FrontendError] = []

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def report(self, error: FrontendError) -> None:
        """Write the error's diagnostic line and record it."""
        self.errors.append(error)
        self.stream.write(error.diagnostic + "\n")
        logger.debug("%s", error)

    def has_errors(self) -> bool:
        """Return True if any errors have been reported."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of reported errors."""
        return len(self.errors)

    def clear(self) -> None:
        """Forget all reported errors."""
        self.errors.clear()
