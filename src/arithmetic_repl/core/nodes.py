"""Evaluation tree nodes."""
import typing
from typing import Callable, List, Tuple, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field


Operator = typing.Literal["+", "-", "*", "/"]

T = TypeVar("T")


class Literal(BaseModel):
    """Leaf holding a numeric constant parsed from the input."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(..., description="Parsed numeric value")

    def __str__(self) -> str:
        return f"{self.value:g}"


class BinaryOp(BaseModel):
    """
    Internal node applying ``operator`` to two sub-trees.

    Children are handed over by the parser when it pops them off the operand
    stack, so every node has exactly one parent.
    """

    model_config = ConfigDict(frozen=True)

    operator: Operator = Field(..., description="Arithmetic operator symbol")
    left: "ExpressionNode" = Field(..., description="Left operand sub-tree")
    right: "ExpressionNode" = Field(..., description="Right operand sub-tree")

    def __str__(self) -> str:
        return fold_tree(
            self,
            on_literal=str,
            on_binary=lambda node, left, right: f"({left} {node.operator} {right})",
        )


ExpressionNode = Union[Literal, BinaryOp]

BinaryOp.model_rebuild()


def fold_tree(
    root: ExpressionNode,
    on_literal: Callable[[Literal], T],
    on_binary: Callable[[BinaryOp, T, T], T],
) -> T:
    """
    Reduce a tree bottom-up without recursion.

    Long expressions such as ``1 + 1 + ... + 1`` produce trees as deep as
    they are long, so the walk keeps its own stack. Leaves are visited left
    to right and ``on_binary`` runs for a node only after both of its
    sub-trees are reduced.

    :param ExpressionNode root: Tree to reduce
    :param on_literal: Called with each leaf
    :param on_binary: Called with a node and the reduced left and right sub-trees

    :return: Reduced value of the root
    """
    results: List[T] = []
    # (node, children already reduced)
    pending: List[Tuple[ExpressionNode, bool]] = [(root, False)]

    while pending:
        node, reduced = pending.pop()
        if isinstance(node, Literal):
            results.append(on_literal(node))
        elif reduced:
            right = results.pop()
            left = results.pop()
            results.append(on_binary(node, left, right))
        else:
            pending.append((node, True))
            pending.append((node.right, False))
            pending.append((node.left, False))

    return results.pop()
