"""Test evaluation tree nodes."""
from pydantic import ValidationError
import pytest

from arithmetic_repl.core.nodes import BinaryOp, Literal


def test_literal_holds_float() -> None:
    """Literal values are stored as floats."""
    node = Literal(value=3)
    assert node.value == 3.0
    assert isinstance(node.value, float)


def test_binary_op_valid() -> None:
    """A BinaryOp owns its two children."""
    left, right = Literal(value=1.0), Literal(value=2.0)
    node = BinaryOp(operator="+", left=left, right=right)
    assert node.left == left
    assert node.right == right


def test_binary_op_invalid_operator() -> None:
    """Only the four arithmetic operators are accepted."""
    with pytest.raises(ValidationError):
        BinaryOp(operator="^", left=Literal(value=1.0), right=Literal(value=2.0))


def test_binary_op_invalid_child() -> None:
    """Children must be tree nodes."""
    with pytest.raises(ValidationError):
        BinaryOp(operator="+", left="1", right=Literal(value=2.0))


def test_nodes_are_immutable() -> None:
    """Trees cannot be mutated after construction."""
    node = BinaryOp(operator="*", left=Literal(value=2.0), right=Literal(value=3.0))
    with pytest.raises(ValidationError):
        node.operator = "+"
    with pytest.raises(ValidationError):
        node.left.value = 5.0


@pytest.mark.parametrize("node,expected", [
    (Literal(value=42.0), "42"),
    (Literal(value=0.5), "0.5"),
    (
        BinaryOp(
            operator="-",
            left=BinaryOp(operator="-", left=Literal(value=8.0), right=Literal(value=4.0)),
            right=Literal(value=2.0),
        ),
        "((8 - 4) - 2)",
    ),
])
def test_str_renders_fully_parenthesized(node, expected) -> None:
    """str() shows the tree shape as parenthesized infix."""
    assert str(node) == expected


def test_str_renders_deep_tree() -> None:
    """Rendering does not depend on the recursion limit."""
    node = Literal(value=1.0)
    for _ in range(5000):
        node = BinaryOp(operator="+", left=node, right=Literal(value=1.0))
    rendered = str(node)
    assert rendered.startswith("(" * 5000 + "1 + 1)")
    assert rendered.endswith(" + 1)")
