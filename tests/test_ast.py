# =============================================================================
# test_ast.py - AST Node and Printer Tests
# =============================================================================

import dataclasses

import pytest
from kaleidoscope.errors import SourceLocation
from kaleidoscope.frontend.ast import (
    ASTPrinter,
    BinaryExpression,
    CallExpression,
    FunctionNode,
    NumberLiteral,
    PrototypeNode,
    VariableExpression,
    format_expression,
    format_number,
    iter_children,
    walk,
)


def sample_function() -> FunctionNode:
    """def f(x) x + g(1, x*2)"""
    return FunctionNode(
        PrototypeNode("f", ("x",)),
        BinaryExpression(
            "+",
            VariableExpression("x"),
            CallExpression(
                "g",
                (NumberLiteral(1.0), BinaryExpression("*", VariableExpression("x"), NumberLiteral(2.0))),
            ),
        ),
    )


class TestNodes:
    """Value semantics of AST nodes."""

    def test_nodes_are_frozen(self):
        node = NumberLiteral(1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.value = 2.0

    def test_location_ignored_in_equality(self):
        here = SourceLocation("<input>", 3, 4)
        assert VariableExpression("x", here) == VariableExpression("x")

    def test_prototype_arity(self):
        assert PrototypeNode("f", ("a", "b")).arity == 2

    def test_function_name(self):
        assert sample_function().name == "f"


class TestTraversal:
    """iter_children and walk."""

    def test_leaf_has_no_children(self):
        assert list(iter_children(NumberLiteral(1.0))) == []

    def test_walk_preorder(self):
        kinds = [type(node).__name__ for node in walk(sample_function())]
        assert kinds == [
            "FunctionNode",
            "PrototypeNode",
            "BinaryExpression",
            "VariableExpression",
            "CallExpression",
            "NumberLiteral",
            "BinaryExpression",
            "VariableExpression",
            "NumberLiteral",
        ]

    def test_not_a_node(self):
        with pytest.raises(TypeError):
            list(iter_children("x"))


class TestFormatting:
    """One-line expressions and the indented printer."""

    @pytest.mark.parametrize("value,text", [
        (3.0, "3"),
        (2.5, "2.5"),
        (0.0, "0"),
    ])
    def test_format_number(self, value, text):
        assert format_number(value) == text

    def test_format_expression(self):
        assert format_expression(sample_function().body) == "(x + g(1, (x * 2)))"

    def test_format_rejects_declarations(self):
        with pytest.raises(TypeError):
            format_expression(PrototypeNode("f"))

    def test_printer(self):
        assert ASTPrinter().print(sample_function()) == "\n".join([
            "Function",
            "  Prototype f(x)",
            "  Binary '+'",
            "    Variable x",
            "    Call g (2 args)",
            "      Number 1",
            "      Binary '*'",
            "        Variable x",
            "        Number 2",
        ])

    def test_printer_reusable(self):
        """Printing twice gives the same text."""
        printer = ASTPrinter()
        node = PrototypeNode("sin", ("x",))
        assert printer.print(node) == printer.print(node) == "Prototype sin(x)"
