"""
Kaleidoscope Lexer (Tokenizer)
==============================

This module implements the lexer for the Kaleidoscope language. It reads
a character stream one character at a time and produces tokens on
demand, so the parser never needs the whole input up front.

Token Categories
----------------
- Keywords: def, extern
- Identifiers: [A-Za-z][A-Za-z0-9]*
- Numbers: a maximal run of digits and '.', always a float
- Characters: any other non-space character, returned as itself
- End of input: EOF, repeatable

Comments
--------
``#`` starts a comment that runs to the end of the line.

Number Literals
---------------
The digit/dot run is converted using its longest valid prefix, so
malformed text degrades silently:

| Text    | Value |
|---------|-------|
| 42      | 42.0  |
| 3.25    | 3.25  |
| .5      | 0.5   |
| 1.2.3   | 1.2   |
| .       | 0.0   |

With ``strict_numbers=True`` the last two raise MalformedNumberError.

Example Usage
-------------
>>> from kaleidoscope.frontend.lexer import Lexer
>>> for token in Lexer("def f(x) x*2").tokenize():
...     print(token)
Token(DEF, 'def', 1:1)
Token(IDENTIFIER, 'f', 1:5)
Token(CHAR, '(', 1:6)
Token(IDENTIFIER, 'x', 1:7)
Token(CHAR, ')', 1:8)
Token(IDENTIFIER, 'x', 1:10)
Token(CHAR, '*', 1:11)
Token(NUMBER, 2.0, 1:12)
Token(EOF, 1:13)
"""

from dataclasses import dataclass
from enum import Enum, auto
from io import StringIO
from typing import Iterator, Optional, TextIO, Union
import re
import string

from kaleidoscope.errors import SourceLocation
from kaleidoscope.frontend.errors import MalformedNumberError


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the Kaleidoscope language.

    Operators and punctuation are not enumerated: they are all CHAR
    tokens whose value is the character itself.
    """

    EOF = auto()            # End of input
    DEF = auto()            # def
    EXTERN = auto()         # extern
    IDENTIFIER = auto()     # Variable/function names
    NUMBER = auto()         # Numeric literals (float)
    CHAR = auto()           # Any other single character


KEYWORDS: dict[str, TokenType] = {
    "def": TokenType.DEF,
    "extern": TokenType.EXTERN,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from Kaleidoscope source.

    Attributes:
        type: The TokenType classification
        value: Identifier/keyword text, float for numbers, the character
            for CHAR tokens, None for EOF
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: Union[str, float, None]
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_char(self, char: str) -> bool:
        """Return True if this is the punctuation token for ``char``."""
        return self.type == TokenType.CHAR and self.value == char

    def describe(self) -> str:
        """Short human-readable description used in error hints."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.value}'"
        if self.type == TokenType.NUMBER:
            return f"number {self.value}"
        return f"'{self.value}'"


# =============================================================================
# Number Conversion
# =============================================================================

_NUMBER_PREFIX = re.compile(r"\d*(?:\.\d*)?")


def convert_number_prefix(text: str) -> tuple[float, int]:
    """
    Convert the longest numeric prefix of ``text`` to a float.

    Returns:
        (value, consumed) where consumed is the number of characters
        that took part in the conversion. Nothing convertible gives
        (0.0, 0).
    """
    prefix = _NUMBER_PREFIX.match(text).group()
    if prefix in ("", "."):
        return 0.0, 0
    return float(prefix), len(prefix)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Kaleidoscope source, one token per ``next_token()`` call.

    The lexer holds exactly one pending character between calls. It
    starts as a space so the first call skips straight into real
    content. Reading stops once the stream is exhausted, so EOF can be
    requested any number of times.

    Usage:
        lexer = Lexer(source_text, filename)
        token = lexer.next_token()

    Attributes:
        filename: Name of the source (for locations)
        strict_numbers: Reject malformed numeric literals instead of
            truncating them
    """

    IDENT_START = frozenset(string.ascii_letters)
    IDENT_CHARS = frozenset(string.ascii_letters + string.digits)
    NUMBER_CHARS = frozenset(string.digits + ".")
    WHITESPACE = frozenset(string.whitespace)
    LINE_ENDS = frozenset("\n\r")

    def __init__(
        self,
        source: Union[str, TextIO],
        filename: str = "<input>",
        strict_numbers: bool = False,
    ):
        """
        Initialize the lexer.

        Args:
            source: Source text, or any text stream supporting read(1)
            filename: Name used in token locations
            strict_numbers: Raise MalformedNumberError for numeric runs
                that are not entirely a valid literal
        """
        self._stream: TextIO = StringIO(source) if isinstance(source, str) else source
        self.filename = filename
        self.strict_numbers = strict_numbers

        # Pending character and its position. The initial space sits at
        # column 0 so the first real character lands on column 1.
        self._last_char = " "
        self._line = 1
        self._column = 0

        # Characters read so far on the current line, for error context
        self._line_chars: list[str] = []

    def next_token(self) -> Token:
        """
        Return the next token from the input.

        Raises:
            MalformedNumberError: Only in strict mode
        """
        self._skip_whitespace_and_comments()

        start_line = self._line
        start_column = self._column
        char = self._last_char

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char in self.NUMBER_CHARS:
            return self._scan_number(start_line, start_column)

        # Don't consume the end of input
        if char == "":
            return self._make_token(TokenType.EOF, None, start_line, start_column)

        self._advance()
        return self._make_token(TokenType.CHAR, char, start_line, start_column)

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens until the end of input.

        Yields:
            Token objects, ending with a single EOF token
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _advance(self) -> None:
        """Replace the pending character with the next one from the stream."""
        if self._last_char == "":
            return

        previous = self._last_char
        self._last_char = self._stream.read(1)

        if previous == "\n":
            self._line += 1
            self._column = 1
            self._line_chars = []
        else:
            self._column += 1

        if self._last_char:
            self._line_chars.append(self._last_char)

    def _skip_whitespace_and_comments(self) -> None:
        """Skip whitespace and '#' comments."""
        while True:
            while self._last_char in self.WHITESPACE:
                self._advance()

            if self._last_char != "#":
                return

            # Comment until end of line
            while self._last_char != "" and self._last_char not in self.LINE_ENDS:
                self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """Scan an identifier or keyword (maximal match)."""
        chars = []
        while self._last_char in self.IDENT_CHARS:
            chars.append(self._last_char)
            self._advance()

        name = "".join(chars)
        token_type = KEYWORDS.get(name, TokenType.IDENTIFIER)
        return self._make_token(token_type, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """Scan a run of digits and dots and convert it to a float."""
        chars = []
        while self._last_char in self.NUMBER_CHARS:
            chars.append(self._last_char)
            self._advance()

        text = "".join(chars)
        value, consumed = convert_number_prefix(text)

        if self.strict_numbers and consumed != len(text):
            raise MalformedNumberError(
                text,
                SourceLocation(self.filename, start_line, start_column),
                self.current_line_text(),
            )

        return self._make_token(TokenType.NUMBER, value, start_line, start_column)

    def _make_token(
        self,
        token_type: TokenType,
        value: Union[str, float, None],
        line: int,
        column: int,
    ) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=line,
            column=max(column, 1),
            filename=self.filename,
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def current_line_text(self) -> Optional[str]:
        """Text of the current line read so far, for error context."""
        text = "".join(self._line_chars).rstrip("\r\n")
        return text or None
