"""Operator precedence table."""
from types import MappingProxyType
from typing import Mapping


OPEN_PAREN = "("
CLOSE_PAREN = ")"

# Higher rank binds tighter
PRECEDENCE: Mapping[str, int] = MappingProxyType({
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
})


def precedence(token: str) -> int:
    """
    Return the precedence rank of an operator-stack token.

    Anything outside the table (the open-parenthesis marker included) ranks 0,
    below every real operator.

    :param str token: Operator character or marker

    :return: Precedence rank
    :rtype: int
    """
    return PRECEDENCE.get(token, 0)


def is_operator(char: str) -> bool:
    """Whether ``char`` is one of the four arithmetic operators."""
    return char in PRECEDENCE
