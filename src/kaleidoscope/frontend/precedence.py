"""
Binary Operator Precedence Table
================================

Kaleidoscope does not hard-code its binary operators. Any single ASCII
character can act as a binary operator once it is registered here with
a positive precedence; higher numbers bind tighter.

Default Table
-------------
| Operator | Precedence |
|----------|------------|
| <        | 10         |
| +        | 20         |
| -        | 20         |
| *        | 40         |

Each parse session owns its own table, so registering an operator in one
session never affects another.
"""

from typing import Iterator, Mapping, Optional

from kaleidoscope.frontend.lexer import Token, TokenType


# Sentinel for "not a binary operator". Lower than any valid minimum
# precedence, which ends the precedence-climbing loop.
NOT_AN_OPERATOR = -1

DEFAULT_BINOP_PRECEDENCE: dict[str, int] = {
    "<": 10,
    "+": 20,
    "-": 20,
    "*": 40,
}


def validate_operator(op: str, precedence: int) -> None:
    """
    Check that ``op`` can be registered with ``precedence``.

    Raises:
        ValueError: If op is not a single ASCII character or the
            precedence is not a positive integer
    """
    if not isinstance(op, str) or len(op) != 1 or not op.isascii():
        raise ValueError(f"operator must be a single ASCII character, got {op!r}")
    if isinstance(precedence, bool) or not isinstance(precedence, int) or precedence <= 0:
        raise ValueError(f"precedence for {op!r} must be a positive integer, got {precedence!r}")


class PrecedenceTable:
    """
    Mutable mapping from operator character to precedence.

    Example:
        table = PrecedenceTable()
        table.register("/", 40)
        table.lookup(token)    # 40 for a '/' CHAR token, -1 otherwise
    """

    def __init__(self, entries: Optional[Mapping[str, int]] = None):
        """
        Args:
            entries: Initial operators. None means a copy of
                DEFAULT_BINOP_PRECEDENCE.
        """
        self._table: dict[str, int] = {}
        if entries is None:
            entries = DEFAULT_BINOP_PRECEDENCE
        for op, precedence in entries.items():
            self.register(op, precedence)

    def register(self, op: str, precedence: int) -> None:
        """
        Register or replace a binary operator.

        Raises:
            ValueError: If op is not a single ASCII character or the
                precedence is not a positive integer
        """
        validate_operator(op, precedence)
        self._table[op] = precedence

    def unregister(self, op: str) -> None:
        """Remove an operator; unknown operators are ignored."""
        self._table.pop(op, None)

    def lookup(self, token: Token) -> int:
        """
        Precedence of ``token`` as a binary operator.

        Returns NOT_AN_OPERATOR unless the token is a CHAR token for a
        registered ASCII character with a precedence above zero.
        """
        if token.type != TokenType.CHAR:
            return NOT_AN_OPERATOR
        char = token.value
        if not char.isascii():
            return NOT_AN_OPERATOR
        precedence = self._table.get(char, 0)
        if precedence <= 0:
            return NOT_AN_OPERATOR
        return precedence

    def as_dict(self) -> dict[str, int]:
        """Copy of the current entries."""
        return dict(self._table)

    def copy(self) -> "PrecedenceTable":
        return PrecedenceTable(self._table)

    def __contains__(self, op: object) -> bool:
        return op in self._table

    def __getitem__(self, op: str) -> int:
        return self._table[op]

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __repr__(self) -> str:
        entries = ", ".join(f"{op!r}: {prec}" for op, prec in sorted(self._table.items(), key=lambda e: e[1]))
        return f"PrecedenceTable({{{entries}}})"
