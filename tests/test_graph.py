"""Tests for the compiled calculator graph."""
import pytest
from exprcalc.config import RESULT_LABEL
from exprcalc.graph.state import build_initial_state


def test_graph_contains_all_nodes():
    """Test that every node is registered."""
    from exprcalc.graph.build_graph import build_graph
    graph = build_graph()
    names = set(graph.nodes.keys())
    assert {"initialize", "guard", "evaluate", "format", "error", "finalize"} <= names


def test_graph_execution_success():
    """Test that a valid expression produces a labelled result."""
    from exprcalc.graph.build_graph import build_graph
    graph = build_graph()
    result = graph.invoke(build_initial_state("2 + 3 * 4"))

    assert result["is_error"] is False
    assert result["value"] == 14.0
    assert result["formatted"] == "14"
    assert result["display"] == f"{RESULT_LABEL}14"


def test_graph_execution_decimal_result():
    """Test that fractional results are trimmed."""
    from exprcalc.graph.build_graph import run_expression
    result = run_expression("(2 + 3) / 4")
    assert result["display"] == f"{RESULT_LABEL}1.25"


def test_graph_execution_division_by_zero():
    """Test that errors reach the display verbatim."""
    from exprcalc.graph.build_graph import run_expression
    result = run_expression("1 / 0")

    assert result["is_error"] is True
    assert result.get("value") is None
    assert result.get("formatted") is None
    assert result["display"] == "Division by zero"


def test_graph_execution_missing_paren():
    """Test that a missing parenthesis is reported."""
    from exprcalc.graph.build_graph import run_expression
    result = run_expression("(1 + 2")
    assert result["is_error"] is True
    assert result["error_kind"] == "missing_close_paren"
    assert result["display"] == "Missing ')'"


def test_graph_execution_empty_input():
    """Test that empty input clears the result without an error."""
    from exprcalc.graph.build_graph import run_expression
    result = run_expression("")
    assert result["is_error"] is False
    assert result.get("value") is None
    assert result["display"] == RESULT_LABEL


def test_graph_execution_too_long(monkeypatch):
    """Test that the length guard stops evaluation."""
    from exprcalc.graph.build_graph import run_expression
    from exprcalc.observability.telemetry import clear_trace, get_evaluations
    monkeypatch.setattr("exprcalc.guards.policy.MAX_EXPRESSION_LENGTH", 4)
    clear_trace()

    result = run_expression("1 + 2 + 3")

    assert result["is_error"] is True
    assert result["display"] == "Expression too long (9 characters, limit 4)"
    assert get_evaluations() == []


def test_graph_records_trace():
    """Test that a run leaves node and evaluation records in the trace."""
    from exprcalc.graph.build_graph import run_expression
    from exprcalc.observability.telemetry import (
        clear_trace, get_evaluations, get_node_entries)
    clear_trace()

    run_expression("6 * 7")

    entered = [r.node_name for r in get_node_entries()]
    assert entered == ["guard", "evaluate", "format"]
    evaluations = get_evaluations()
    assert len(evaluations) == 1
    assert evaluations[0].expression == "6 * 7"
    assert evaluations[0].value == 42.0
    assert evaluations[0].error is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
