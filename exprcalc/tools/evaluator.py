# exprcalc/tools/evaluator.py
"""
Recursive-descent evaluator for arithmetic expressions.

Grammar (loosest binding first):
    expression = term (('+' | '-') term)*
    term       = factor (('*' | '/') factor)*
    factor     = '-' factor | '+' factor | '(' expression ')' | number
    number     = ['+' | '-'] ('.' digit+ | digit+ ('.' digit*)?)

Values are computed while scanning; no tree is built. Every rule returns a
(value, error) pair and the first error ends the evaluation.
"""
import math
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from exprcalc.config import MAX_NESTING_DEPTH

# ASCII whitespace, same set as C isspace()
_BLANKS = " \t\n\v\f\r"
_DIGITS = "0123456789"

# A parenthesis level costs up to four frames: _factor, _nested, _expression, _term
_FRAMES_PER_LEVEL = 4
# Frames left for the caller of evaluate()
_FRAME_RESERVE = 200


class ErrorKind(str, Enum):
    EXPECTED_NUMBER = "expected_number"
    INVALID_NUMBER_FORMAT = "invalid_number_format"
    MISSING_CLOSE_PAREN = "missing_close_paren"
    DIVISION_BY_ZERO = "division_by_zero"
    UNEXPECTED_CHARACTER = "unexpected_character"
    NESTING_TOO_DEEP = "nesting_too_deep"


class ExpressionError(ValueError):
    """An evaluation failure with the offset where it was detected."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        position: Optional[int] = None,
        character: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.position = position
        self.character = character

    def to_dict(self):
        return {
            "kind": self.kind.value,
            "message": self.message,
            "position": self.position,
            "character": self.character,
        }


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of one evaluation: a value or an error, never both."""
    value: Optional[float] = None
    error: Optional[ExpressionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


Outcome = Tuple[Optional[float], Optional[ExpressionError]]


class _Cursor:
    """Scan state owned by a single evaluate() call."""

    def __init__(self, text: str, max_depth: int) -> None:
        self._text = text
        self._pos = 0
        self._depth = 0
        self._max_depth = max_depth

    # -- scanning primitives -------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._text)

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._text[self._pos] in _BLANKS:
            self._pos += 1

    def _match(self, expected: str) -> bool:
        self._skip_whitespace()
        if not self._at_end() and self._text[self._pos] == expected:
            self._pos += 1
            return True
        return False

    def _fail(self, kind: ErrorKind, message: str,
              position: Optional[int] = None) -> Outcome:
        if position is None:
            position = self._pos
        return None, ExpressionError(kind, message, position=position)

    def nesting_error(self) -> Outcome:
        return self._fail(
            ErrorKind.NESTING_TOO_DEEP,
            f"Expression nested too deeply (limit {self._max_depth})")

    def _nested(self, rule: Callable[[], Outcome]) -> Outcome:
        if self._depth >= self._max_depth:
            return self.nesting_error()
        self._depth += 1
        outcome = rule()
        self._depth -= 1
        return outcome

    # -- grammar -------------------------------------------------------------

    def parse(self) -> Outcome:
        value, error = self._expression()
        if error is not None:
            return None, error

        self._skip_whitespace()
        if self._pos != len(self._text):
            char = self._text[self._pos] if not self._at_end() else "end"
            return None, ExpressionError(
                ErrorKind.UNEXPECTED_CHARACTER,
                f"Unexpected character at position {self._pos}: '{char}'",
                position=self._pos,
                character=char,
            )
        return value, None

    def _expression(self) -> Outcome:
        lhs, error = self._term()
        if error is not None:
            return None, error
        while True:
            if self._match("+"):
                rhs, error = self._term()
                if error is not None:
                    return None, error
                lhs += rhs
            elif self._match("-"):
                rhs, error = self._term()
                if error is not None:
                    return None, error
                lhs -= rhs
            else:
                return lhs, None

    def _term(self) -> Outcome:
        lhs, error = self._factor()
        if error is not None:
            return None, error
        while True:
            if self._match("*"):
                rhs, error = self._factor()
                if error is not None:
                    return None, error
                lhs *= rhs
            elif self._match("/"):
                operator_pos = self._pos - 1
                rhs, error = self._factor()
                if error is not None:
                    return None, error
                if rhs == 0.0:
                    return self._fail(ErrorKind.DIVISION_BY_ZERO,
                                      "Division by zero", operator_pos)
                lhs /= rhs
            else:
                return lhs, None

    def _factor(self) -> Outcome:
        if self._match("-"):
            value, error = self._nested(self._factor)
            if error is not None:
                return None, error
            return -value, None
        if self._match("+"):
            return self._nested(self._factor)

        if self._match("("):
            value, error = self._nested(self._expression)
            if error is not None:
                return None, error
            if not self._match(")"):
                return self._fail(ErrorKind.MISSING_CLOSE_PAREN, "Missing ')'")
            return value, None

        return self._number()

    def _number(self) -> Outcome:
        self._skip_whitespace()
        start = self._pos
        seen_point = False

        # Sign is accepted here as well as in _factor
        if not self._match("+"):
            self._match("-")

        while not self._at_end():
            char = self._text[self._pos]
            if char in _DIGITS:
                self._pos += 1
            elif char == "." and not seen_point:
                seen_point = True
                self._pos += 1
            else:
                break

        token = self._text[start:self._pos]
        if not token:
            return self._fail(ErrorKind.EXPECTED_NUMBER, "Expected number", start)
        if token == ".":
            return self._fail(ErrorKind.INVALID_NUMBER_FORMAT,
                              "Invalid number format", start)
        try:
            value = float(token)
        except ValueError:
            return self._fail(ErrorKind.INVALID_NUMBER_FORMAT,
                              "Invalid number format", start)
        if math.isinf(value):
            return self._fail(ErrorKind.INVALID_NUMBER_FORMAT,
                              "Invalid number format", start)
        return value, None


def max_nesting_depth() -> int:
    """Deepest nesting the interpreter's recursion limit can hold."""
    return max(1, (sys.getrecursionlimit() - _FRAME_RESERVE) // _FRAMES_PER_LEVEL)


def evaluate(text: str, max_depth: Optional[int] = None) -> EvaluationResult:
    """
    Evaluate an arithmetic expression.
    Supports +, -, *, /, unary signs, parentheses and decimal literals.
    Examples:
        >>> evaluate("2 + 3 * 4").value
        14.0
        >>> evaluate("1 / 0").error.message
        'Division by zero'
    """
    if max_depth is None:
        max_depth = MAX_NESTING_DEPTH
    max_depth = min(max_depth, max_nesting_depth())

    cursor = _Cursor(text, max_depth)
    try:
        value, error = cursor.parse()
    except RecursionError:
        # caller already deep in the stack; report it like the depth guard
        value, error = cursor.nesting_error()
    if error is not None:
        return EvaluationResult(error=error)
    return EvaluationResult(value=value)


def calculate(text: str) -> float:
    """Evaluate text and return the value, raising ExpressionError on failure."""
    result = evaluate(text)
    if not result.ok:
        raise result.error
    return result.value


if __name__ == "__main__":
    while True:
        expr = input("Enter expression (or 'q' to quit): ")
        if expr.lower() == "q":
            break
        try:
            print("=", calculate(expr))
        except ExpressionError as err:
            print("Error:", err)
