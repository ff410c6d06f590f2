"""Tests for the in-memory trace."""
import pytest
from exprcalc.observability.telemetry import (
    EvaluationRecord,
    NodeExitRecord,
    clear_trace,
    format_trace_summary,
    get_evaluations,
    get_trace,
    get_trace_dicts,
    log_evaluation,
    log_node_entry,
    log_node_exit,
)


@pytest.fixture(autouse=True)
def fresh_trace():
    clear_trace()
    yield
    clear_trace()


def test_empty_trace_summary():
    """Test the summary of an empty trace."""
    assert format_trace_summary() == "No trace data"


def test_log_evaluation_records_value():
    """Test that a successful evaluation is recorded."""
    log_evaluation("1 + 1", 2.0, None, 0.5)

    evaluations = get_evaluations()
    assert len(evaluations) == 1
    assert isinstance(evaluations[0], EvaluationRecord)
    assert evaluations[0].value == 2.0
    assert evaluations[0].duration_ms == 0.5


def test_log_evaluation_records_error():
    """Test that a failed evaluation is recorded with its message."""
    log_evaluation("1 / 0", None, "Division by zero", 0.1)

    record = get_evaluations()[0]
    assert record.value is None
    assert record.error == "Division by zero"
    assert "ERROR Division by zero" in format_trace_summary()


def test_node_records_in_order():
    """Test that node entry and exit records keep their order."""
    state = {"expression": "2 * 2", "display": "Result: 4"}
    log_node_entry("format", state)
    log_node_exit("format", state)

    trace = get_trace()
    assert len(trace) == 2
    assert isinstance(trace[1], NodeExitRecord)
    assert trace[1].display == "Result: 4"

    summary = format_trace_summary()
    assert "ENTER: format" in summary
    assert "EXIT: format" in summary


def test_trace_dicts_are_serializable():
    """Test conversion of records to dictionaries."""
    log_evaluation("3 * 3", 9.0, None, 0.2)

    record = get_trace_dicts()[0]
    assert record["type"] == "evaluation"
    assert record["expression"] == "3 * 3"
    assert record["value"] == 9.0
    assert "timestamp" in record
    assert "record_type" not in record


def test_get_trace_returns_copy():
    """Test that callers cannot mutate the stored trace."""
    log_evaluation("1", 1.0, None, 0.1)
    get_trace().clear()
    assert len(get_trace()) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
