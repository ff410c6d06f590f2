from typing import TypedDict, Optional


class CalcState(TypedDict):
    expression: str
    value: Optional[float]
    error: Optional[str]
    error_kind: Optional[str]
    error_position: Optional[int]
    formatted: Optional[str]
    display: str
    is_error: bool


def build_initial_state(expression: str) -> CalcState:
    state = CalcState(
        expression=expression,
        value=None,
        error=None,
        error_kind=None,
        error_position=None,
        formatted=None,
        display="",
        is_error=False)
    return state
