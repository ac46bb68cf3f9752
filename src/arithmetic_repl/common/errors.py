"""Errors raised while parsing and evaluating expressions."""


class CalculatorError(ValueError):
    """Base class for every error the calculator reports to the user."""


class ParseError(CalculatorError):
    """Input text cannot be turned into a well-formed evaluation tree."""


class EvalError(CalculatorError):
    """A well-formed tree cannot be evaluated."""


class DivisionByZeroError(EvalError):
    """The right operand of a division evaluated to zero."""

    def __init__(self, message: str = "Division by zero") -> None:
        super().__init__(message)
