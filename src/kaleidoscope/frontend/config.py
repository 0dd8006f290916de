"""
Front-End Configuration
=======================

Configuration for one parse session. Values can come from:
- Default values (defined here)
- Environment variables (FrontendConfig.from_env)
- Command-line options (kparse)

Environment Variables
---------------------
KALEIDOSCOPE_STRICT_NUMBERS
    "1", "true", "yes" or "on" rejects malformed numeric literals.
KALEIDOSCOPE_PRECEDENCE
    Space-separated ``op:precedence`` pairs added to (or replacing
    entries of) the default table, e.g. ``"/:40 >:10"``.
"""

from dataclasses import dataclass, field
import logging
import os

from kaleidoscope.frontend.precedence import (
    DEFAULT_BINOP_PRECEDENCE,
    PrecedenceTable,
    validate_operator,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class FrontendConfig:
    """
    Configuration for a lexer/parser session.

    Attributes:
        filename: Name used in token and error locations
        strict_numbers: Treat malformed numeric literals ("1.2.3") as
            lexical errors instead of truncating them
        binop_precedence: Binary operators and their precedence
    """
    filename: str = "<input>"
    strict_numbers: bool = False
    binop_precedence: dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_BINOP_PRECEDENCE)
    )

    @classmethod
    def from_env(cls) -> "FrontendConfig":
        """
        Create a FrontendConfig from environment variables.

        Invalid values are logged and ignored.
        """
        config = cls()

        if strict := os.environ.get("KALEIDOSCOPE_STRICT_NUMBERS"):
            config.strict_numbers = strict.strip().lower() in _TRUE_VALUES

        if precedence := os.environ.get("KALEIDOSCOPE_PRECEDENCE"):
            for entry in precedence.split():
                op, _, value = entry.rpartition(":")
                try:
                    config.set_precedence(op, int(value))
                except ValueError:
                    logger.warning("Ignoring invalid precedence entry %r", entry)

        return config

    def set_precedence(self, op: str, precedence: int) -> None:
        """
        Add or replace one operator, validating it like PrecedenceTable.

        Raises:
            ValueError: For an invalid operator or precedence
        """
        validate_operator(op, precedence)
        self.binop_precedence[op] = precedence

    def build_precedence_table(self) -> PrecedenceTable:
        """Fresh table for a new session."""
        return PrecedenceTable(self.binop_precedence)
