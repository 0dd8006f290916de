"""
Parse Results
=============

Every public parser operation returns a ParseResult instead of a bare
node or None. A result holds either the node that was built or the
error that stopped the parse, never both, so a failed parse cannot be
mistaken for a valid tree further down the pipeline.

Example:
    result = parser.parse_expression()
    if result.ok:
        use(result.node)
    else:
        print(result.error.message)
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from kaleidoscope.frontend.errors import FrontendError

T = TypeVar("T")


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """
    Outcome of a parse operation.

    Attributes:
        node: The parsed node (None on failure)
        error: The error that stopped the parse (None on success)
    """
    node: Optional[T] = None
    error: Optional[FrontendError] = None

    def __post_init__(self):
        if (self.node is None) == (self.error is None):
            raise ValueError("ParseResult needs exactly one of node or error")

    @classmethod
    def success(cls, node: T) -> "ParseResult[T]":
        return cls(node=node)

    @classmethod
    def failure(cls, error: FrontendError) -> "ParseResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        """
        Return the node, or raise the stored error.

        Raises:
            FrontendError: If the parse failed
        """
        if self.error is not None:
            raise self.error
        return self.node
