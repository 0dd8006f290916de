"""
Kaleidoscope Error Hierarchy
============================

This module defines the root of the exception hierarchy for the whole
Kaleidoscope package. All exceptions inherit from KaleidoscopeError,
allowing callers to catch every package-related error with a single
except clause if desired.

Exception Hierarchy
-------------------
KaleidoscopeError (base)
└── FrontendError (lexer and parser, see kaleidoscope.frontend.errors)
    ├── LexicalError
    │   └── MalformedNumberError
    └── ParseError
        └── PrototypeError

Source Locations
----------------
Every token and AST node may carry a SourceLocation so that errors can
point at the offending character:

    filename:line:column: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class KaleidoscopeError(Exception):
    """
    Base exception for all Kaleidoscope errors.

    All exceptions in the package inherit from this class:

        try:
            parse_program(source)
        except KaleidoscopeError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
