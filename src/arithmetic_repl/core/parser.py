"""Parse arithmetic text into an evaluation tree."""
import string
from typing import Iterator, List

from arithmetic_repl.common.errors import ParseError
from arithmetic_repl.common.logger import logger
from arithmetic_repl.core.nodes import BinaryOp, ExpressionNode, Literal
from arithmetic_repl.core.precedence import CLOSE_PAREN, OPEN_PAREN, is_operator, precedence


DECIMAL_POINT = "."


class ExpressionParser:
    """
    Build evaluation trees from infix arithmetic expressions.

    Algorithm (two-stack Shunting-yard):
        - The operand stack holds completed sub-trees.
        - The operator stack holds pending operators and open-parenthesis markers.
        - Whenever an operator may be applied, it is popped together with two
          operands and the resulting BinaryOp is pushed back as a new operand.

    Operators of equal precedence are applied left to right, so
    ``8 - 4 - 2`` is read as ``(8 - 4) - 2``. Numbers (or parenthesized
    groups) and operators must alternate; there is no unary minus.

    Examples:
        - ``2 + 3 * 4`` -> ``(2 + (3 * 4))``
        - ``(2 + 3) * 4`` -> ``((2 + 3) * 4)``
    """

    @staticmethod
    def _scan(expr: str) -> Iterator[str]:
        """
        Yield number, operator and parenthesis tokens from left to right.

        A number starts with a digit and runs over every following digit or
        decimal point. Whitespace is skipped.

        :param str expr: Arithmetic expression as a string

        :return: Iterator over tokens
        :rtype: Iterator[str]
        :raises ParseError: On an unknown character or a number with several decimal points
        """
        i = 0
        n = len(expr)
        while i < n:
            ch = expr[i]

            if ch.isspace():
                i += 1
                continue

            if ch in string.digits:
                start = i
                while i < n and (expr[i] in string.digits or expr[i] == DECIMAL_POINT):
                    i += 1
                number = expr[start:i]
                if number.count(DECIMAL_POINT) > 1:
                    raise ParseError(f"Malformed number {number!r} at position {start}")
                yield number
                continue

            if ch in (OPEN_PAREN, CLOSE_PAREN) or is_operator(ch):
                yield ch
                i += 1
                continue

            raise ParseError(f"Unexpected character {ch!r} at position {i}")

    @staticmethod
    def tokenize(expr: str) -> List[str]:
        """
        Split an arithmetic expression into tokens.

        Whitespace between tokens is optional (e.g. "3+4*2" and "3 + 4 * 2"
        give the same tokens).

        :param str expr: Arithmetic expression as a string

        :return: List of tokens
        :rtype: List[str]
        :raises ParseError: If the text contains a character that is not part of the grammar
        """
        return list(ExpressionParser._scan(expr))

    @staticmethod
    def _is_number(token: str) -> bool:
        """
        Determine if a token represents a numeric literal.

        :param str token: Token string

        :return: True if the token is a number, else False
        :rtype: bool
        """
        return bool(token) and token[0] in string.digits

    @staticmethod
    def _fold(operands: List[ExpressionNode], operators: List[str]) -> None:
        """
        Apply the operator on top of the operator stack.

        The operator is popped along with two operands (right first, then left)
        and the combined BinaryOp is pushed back onto the operand stack.

        :param list operands: Operand stack
        :param list operators: Operator stack, its top must be an operator

        :raises ParseError: If fewer than two operands are available
        """
        op = operators.pop()
        if len(operands) < 2:
            raise ParseError(f"Operator {op!r} is missing an operand")
        right = operands.pop()
        left = operands.pop()
        operands.append(BinaryOp(operator=op, left=left, right=right))

    @staticmethod
    def parse(expr: str) -> ExpressionNode:
        """
        Parse an arithmetic expression into an evaluation tree.

        :param str expr: Arithmetic expression string

        :return: Root of the evaluation tree
        :rtype: ExpressionNode
        :raises ParseError: If the expression is empty or malformed
        """
        if not expr.strip():
            raise ParseError("Empty expression")

        # Both stacks live only for this call
        operands: List[ExpressionNode] = []
        operators: List[str] = []
        # Operands and binary operators must alternate
        expect_operand = True

        for token in ExpressionParser._scan(expr):
            if ExpressionParser._is_number(token):
                if not expect_operand:
                    raise ParseError(f"Missing operator before {token!r} in expression: {expr!r}")
                operands.append(Literal(value=float(token)))
                expect_operand = False

            elif token == OPEN_PAREN:
                if not expect_operand:
                    raise ParseError(f"Missing operator before '(' in expression: {expr!r}")
                operators.append(token)

            elif token == CLOSE_PAREN:
                while operators and operators[-1] != OPEN_PAREN:
                    ExpressionParser._fold(operands, operators)
                if not operators:
                    raise ParseError(f"Unmatched ')' in expression: {expr!r}")
                operators.pop()
                if expect_operand:
                    raise ParseError(f"Empty parentheses in expression: {expr!r}")

            else:
                if expect_operand:
                    raise ParseError(f"Operator {token!r} is missing an operand")
                expect_operand = True
                # Equal precedence folds the pending operator first (left-associative)
                while (
                    operators
                    and operators[-1] != OPEN_PAREN
                    and precedence(operators[-1]) >= precedence(token)
                ):
                    ExpressionParser._fold(operands, operators)
                operators.append(token)

        if expect_operand:
            raise ParseError(f"Unexpected end of expression: {expr!r}")

        while operators:
            if operators[-1] == OPEN_PAREN:
                raise ParseError(f"Unmatched '(' in expression: {expr!r}")
            ExpressionParser._fold(operands, operators)

        if len(operands) != 1:
            raise ParseError(f"Unbalanced expression: {expr!r}")

        tree = operands.pop()
        logger.debug("Parsed %r into %s", expr, tree)
        return tree


parse = ExpressionParser.parse
