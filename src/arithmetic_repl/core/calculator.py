"""Parse-then-evaluate boundary returning explicit result values."""
from arithmetic_repl.common.errors import DivisionByZeroError, ParseError
from arithmetic_repl.common.logger import logger
from arithmetic_repl.common.models import CalculationRequest, CalculationResult
from arithmetic_repl.core.evaluator import Evaluator
from arithmetic_repl.core.parser import ExpressionParser


def calculate(expression: str) -> CalculationResult:
    """
    Parse and evaluate a single expression.

    Parse and evaluation failures are returned as a result carrying the error
    message and the failing stage, never raised. The tree built for the
    expression is dropped once it has been evaluated.

    :param str expression: Arithmetic expression to evaluate

    :return: Value or error for the expression
    :rtype: CalculationResult
    """
    request = CalculationRequest(expression=expression)
    logger.info(f"🏁 Calculating: {request.expression!r}")

    try:
        tree = ExpressionParser.parse(request.expression)
    except ParseError as exc:
        logger.warning(f"❌ Invalid arithmetic expression {request.expression!r}: {exc}")
        return CalculationResult(expression=request.expression, error=str(exc), error_kind="parse")

    try:
        value = Evaluator.evaluate(tree)
    except DivisionByZeroError as exc:
        logger.warning(f"❌ Could not evaluate {request.expression!r}: {exc}")
        return CalculationResult(
            expression=request.expression,
            error=str(exc),
            error_kind="division_by_zero",
        )

    logger.info("✅ %s = %s", tree, value)
    return CalculationResult(expression=request.expression, result=value)
