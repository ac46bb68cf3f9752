"""Evaluate expression trees."""
import operator
from typing import Callable, Dict

from arithmetic_repl.common.errors import DivisionByZeroError, EvalError
from arithmetic_repl.core.nodes import BinaryOp, ExpressionNode, Literal, fold_tree


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn = Callable[[float, float], float]

OPERATIONS: Dict[str, OperatorFn] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


class Evaluator:
    """
    Compute the value of an evaluation tree.

    Sub-trees are evaluated left before right with an explicit stack, so
    arbitrarily long expressions do not hit the recursion limit. There are no
    side effects: the same tree always gives the same value or the same error.
    """

    @staticmethod
    def evaluate(node: ExpressionNode) -> float:
        """
        Evaluate a tree produced by the parser.

        :param ExpressionNode node: Root of the tree

        :return: Computed result as float
        :rtype: float
        :raises DivisionByZeroError: If a division has a right operand equal to zero
        """
        if not isinstance(node, (Literal, BinaryOp)):
            raise EvalError(f"Unsupported node type: {type(node).__name__}")

        return fold_tree(node, on_literal=lambda leaf: leaf.value, on_binary=Evaluator._apply)

    @staticmethod
    def _apply(node: BinaryOp, left: float, right: float) -> float:
        """Apply the operator of ``node`` to its evaluated operands."""
        if node.operator == "/" and right == 0.0:
            raise DivisionByZeroError()
        return OPERATIONS[node.operator](left, right)


evaluate = Evaluator.evaluate
