"""
Kaleidoscope Abstract Syntax Tree (AST) Definitions
===================================================

This module defines the AST produced by the parser.

Node Set
--------
Expression (closed union)
├── NumberLiteral - numeric constant (always a float)
├── VariableExpression - reference to a named value
├── BinaryExpression - ``left op right``
└── CallExpression - ``callee(arg, ...)``

PrototypeNode - function name and parameter names
FunctionNode - prototype plus body expression

Design Notes
------------
- The expression set is closed: consumers dispatch with ``match`` and
  treat anything else as a bug, never as an extension point.
- All nodes are frozen dataclasses and sequences are tuples, so a tree
  cannot be mutated or have a subtree re-parented after construction.
- Each node may carry its source location. Locations never take part in
  equality, so ``NumberLiteral(1.0)`` equals a parsed ``1``.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from kaleidoscope.errors import SourceLocation


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class NumberLiteral:
    """
    Numeric literal expression, like ``1.0``.

    Attributes:
        value: The numeric value
    """
    value: float
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class VariableExpression:
    """
    Reference to a variable, like ``a``.

    Attributes:
        name: The variable name
    """
    name: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class BinaryExpression:
    """
    Binary operation expression (left op right).

    Attributes:
        operator: The operator character, like '+'
        left: Left operand expression
        right: Right operand expression
    """
    operator: str
    left: "Expression"
    right: "Expression"
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class CallExpression:
    """
    Function call expression.

    Attributes:
        callee: Name of the function to call
        arguments: Argument expressions, in order
    """
    callee: str
    arguments: tuple["Expression", ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


Expression = Union[NumberLiteral, VariableExpression, BinaryExpression, CallExpression]


# =============================================================================
# Declaration Nodes
# =============================================================================

@dataclass(frozen=True)
class PrototypeNode:
    """
    The "prototype" for a function: its name and parameter names, and
    thus implicitly the number of arguments it takes.

    Duplicate parameter names are kept as written.

    Attributes:
        name: Function name
        params: Parameter names, in order
    """
    name: str
    params: tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def arity(self) -> int:
        return len(self.params)


@dataclass(frozen=True)
class FunctionNode:
    """
    A function definition.

    Attributes:
        prototype: The function's prototype
        body: The body expression
    """
    prototype: PrototypeNode
    body: Expression
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> str:
        return self.prototype.name


Node = Union[NumberLiteral, VariableExpression, BinaryExpression, CallExpression, PrototypeNode, FunctionNode]


# =============================================================================
# Traversal
# =============================================================================

def iter_children(node: Node) -> Iterator[Node]:
    """Yield the direct children of a node, left to right."""
    match node:
        case NumberLiteral() | VariableExpression() | PrototypeNode():
            return
        case BinaryExpression(left=left, right=right):
            yield left
            yield right
        case CallExpression(arguments=arguments):
            yield from arguments
        case FunctionNode(prototype=prototype, body=body):
            yield prototype
            yield body
        case _:
            raise TypeError(f"not an AST node: {node!r}")


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in pre-order."""
    yield node
    for child in iter_children(node):
        yield from walk(child)


# =============================================================================
# AST Pretty Printer
# =============================================================================

def format_number(value: float) -> str:
    """Render 3.0 as '3' and 2.5 as '2.5'."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_expression(expr: Expression) -> str:
    """
    Render an expression on one line with explicit grouping.

    Example:
        format_expression(parsed("1+2*3"))   # "(1 + (2 * 3))"
    """
    match expr:
        case NumberLiteral(value=value):
            return format_number(value)
        case VariableExpression(name=name):
            return name
        case BinaryExpression(operator=op, left=left, right=right):
            return f"({format_expression(left)} {op} {format_expression(right)})"
        case CallExpression(callee=callee, arguments=arguments):
            args = ", ".join(format_expression(a) for a in arguments)
            return f"{callee}({args})"
        case _:
            raise TypeError(f"not an expression node: {expr!r}")


class ASTPrinter:
    """
    Pretty printer for AST debugging.

    Produces an indented tree, one node per line.

    Usage:
        printer = ASTPrinter()
        print(printer.print(function_node))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: Node) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self._visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _visit_children(self, node: Node) -> None:
        self.indent_level += 1
        for child in iter_children(node):
            self._visit(child)
        self.indent_level -= 1

    def _visit(self, node: Node) -> None:
        match node:
            case NumberLiteral(value=value):
                self._emit(f"Number {format_number(value)}")
            case VariableExpression(name=name):
                self._emit(f"Variable {name}")
            case BinaryExpression(operator=op):
                self._emit(f"Binary '{op}'")
                self._visit_children(node)
            case CallExpression(callee=callee, arguments=arguments):
                self._emit(f"Call {callee} ({len(arguments)} args)")
                self._visit_children(node)
            case PrototypeNode(name=name, params=params):
                self._emit(f"Prototype {name}({', '.join(params)})")
            case FunctionNode():
                self._emit("Function")
                self._visit_children(node)
            case _:
                raise TypeError(f"not an AST node: {node!r}")
