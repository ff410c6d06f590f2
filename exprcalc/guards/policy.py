"""Input guards applied before an expression is evaluated."""
import logging
from typing import Optional, Tuple
from exprcalc.config import MAX_EXPRESSION_LENGTH

logger = logging.getLogger(__name__)

# Error kind reported when a guard refuses an expression
EXPRESSION_TOO_LONG = "expression_too_long"


def check_empty_input(expression: str) -> bool:
    """
    Check whether there is anything to evaluate.

    Only the empty string counts as empty; whitespace-only input is handed
    to the evaluator, which reports it as a missing number.

    Args:
        expression: Raw text from the caller

    Returns:
        True if the expression is empty
    """
    if expression == "":
        logger.debug("Empty expression, nothing to evaluate")
        return True
    return False


def check_expression_length(
    expression: str,
    max_length: Optional[int] = None
) -> Tuple[bool, Optional[str]]:
    """
    Reject expressions longer than the configured limit.

    Args:
        expression: Raw text from the caller
        max_length: Override for MAX_EXPRESSION_LENGTH

    Returns:
        (is_valid, error_message) tuple
    """
    limit = MAX_EXPRESSION_LENGTH if max_length is None else max_length
    if len(expression) > limit:
        error_msg = (
            f"Expression too long ({len(expression)} characters, limit {limit})")
        logger.warning(error_msg)
        return False, error_msg
    logger.debug(f"Expression length ok: {len(expression)} <= {limit}")
    return True, None


def apply_guards(
    expression: str,
    max_length: Optional[int] = None
) -> Tuple[bool, Optional[str]]:
    """
    Apply all guards to an expression.

    Args:
        expression: Raw text from the caller
        max_length: Override for MAX_EXPRESSION_LENGTH

    Returns:
        (passed, refusal_message) tuple
        - passed: True if the expression should be evaluated
        - refusal_message: Error message if a guard failed, None for empty input
    """
    logger.debug(f"Applying guards to expression: '{expression[:100]}'")

    if check_empty_input(expression):
        return False, None

    is_valid, error = check_expression_length(expression, max_length)
    if not is_valid:
        return False, error

    logger.debug("All guard checks passed")
    return True, None
