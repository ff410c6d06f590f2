from enum import Enum
import logging
import time
from exprcalc.config import RESULT_LABEL
from exprcalc.graph.state import CalcState, build_initial_state
from exprcalc.guards.policy import EXPRESSION_TOO_LONG, apply_guards
from exprcalc.observability.telemetry import log_evaluation, log_node_entry, log_node_exit
from exprcalc.tools.evaluator import evaluate
from exprcalc.tools.formatter import format_display, format_result

logger = logging.getLogger(__name__)


class NodeName(str, Enum):
    INITIALIZE = "initialize"
    GUARD = "guard"
    EVALUATE = "evaluate"
    FORMAT = "format"
    ERROR = "error"
    FINALIZE = "finalize"


def initialize_node(state: CalcState) -> CalcState:
    """Initialize the state."""
    state = build_initial_state(state["expression"])
    return state


def guard_node(state: CalcState) -> CalcState:
    """Run input guards; clear the display for empty input."""
    log_node_entry(NodeName.GUARD.value, state)
    expression = state["expression"]

    passed, refusal_msg = apply_guards(expression)
    if not passed:
        if refusal_msg:
            logger.warning(f"Expression refused by guard: {refusal_msg}")
            state["error"] = refusal_msg
            state["error_kind"] = EXPRESSION_TOO_LONG
            state["is_error"] = True
        else:
            state["display"] = RESULT_LABEL
    log_node_exit(NodeName.GUARD.value, state)
    return state


def evaluate_node(state: CalcState) -> CalcState:
    """Evaluate the expression and record the value or the error."""
    log_node_entry(NodeName.EVALUATE.value, state)
    expression = state["expression"]

    start_time = time.perf_counter()
    result = evaluate(expression)
    duration_ms = (time.perf_counter() - start_time) * 1000

    if result.ok:
        state["value"] = result.value
        log_evaluation(expression, result.value, None, duration_ms)
    else:
        state["error"] = result.error.message
        state["error_kind"] = result.error.kind.value
        state["error_position"] = result.error.position
        state["is_error"] = True
        log_evaluation(expression, None, result.error.message, duration_ms)
    log_node_exit(NodeName.EVALUATE.value, state)
    return state


def format_node(state: CalcState) -> CalcState:
    """Render the value for display."""
    log_node_entry(NodeName.FORMAT.value, state)
    state["formatted"] = format_result(state["value"])
    state["display"] = format_display(state["value"])
    log_node_exit(NodeName.FORMAT.value, state)
    return state


def error_node(state: CalcState) -> CalcState:
    """Surface the error message verbatim."""
    log_node_entry(NodeName.ERROR.value, state)
    logger.warning(
        f"Evaluation failed ({state['error_kind']}): {state['error']}")
    state["display"] = state["error"]
    log_node_exit(NodeName.ERROR.value, state)
    return state


def finalize_node(state: CalcState) -> CalcState:
    """Finalize the response."""
    if state["is_error"]:
        logger.debug(f"Finished with error: {state['display']}")
    else:
        logger.debug(f"Finished: {state['display']}")
    return state


def route_after_guard(state: CalcState) -> str:
    """Pick the node that follows the guards."""
    if state["is_error"]:
        return NodeName.ERROR.value
    if state["expression"] == "":
        return NodeName.FINALIZE.value
    return NodeName.EVALUATE.value


def route_after_evaluate(state: CalcState) -> str:
    """Send failures to the error node and values to the formatter."""
    if state["is_error"]:
        return NodeName.ERROR.value
    return NodeName.FORMAT.value
