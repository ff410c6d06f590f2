# exprcalc/tools/formatter.py

from exprcalc.config import RESULT_LABEL, RESULT_PRECISION


def format_result(value: float, precision: int = RESULT_PRECISION) -> str:
    """
    Render a value in fixed-point notation without trailing zeros.
    Examples:
        >>> format_result(3.0)
        '3'
        >>> format_result(0.1)
        '0.1'
    """
    text = f"{value:.{precision}f}"
    # inf/nan and zero-precision output carry no fractional part
    if "." not in text:
        return text
    text = text.rstrip("0")
    if text.endswith("."):
        text = text[:-1]
    return text


def format_display(value: float) -> str:
    """Prefix the formatted value with the result label."""
    return f"{RESULT_LABEL}{format_result(value)}"
