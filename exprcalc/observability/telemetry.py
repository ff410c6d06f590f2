"""Observability and telemetry for the calculator pipeline."""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
from datetime import datetime
from enum import Enum

logger = logging.getLogger(__name__)


class RecordType(str, Enum):
    """Types of trace records."""
    EVALUATION = "evaluation"
    NODE_ENTRY = "node_entry"
    NODE_EXIT = "node_exit"


@dataclass
class TraceRecord:
    """Base class for trace records."""
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary for serialization."""
        record_type = getattr(self, 'record_type', None)
        return {
            "timestamp": self.timestamp.isoformat(),
            "type": record_type.value if record_type else "unknown",
            **{k: v for k, v in self.__dict__.items() if k not in ("timestamp", "record_type")}
        }


@dataclass
class EvaluationRecord(TraceRecord):
    """Record for a single evaluate() call."""
    expression: str
    value: Optional[float]
    error: Optional[str]
    duration_ms: float
    record_type: RecordType = field(default=RecordType.EVALUATION, init=False)


@dataclass
class NodeEntryRecord(TraceRecord):
    """Record for node entry."""
    node_name: str
    expression: str
    record_type: RecordType = field(default=RecordType.NODE_ENTRY, init=False)


@dataclass
class NodeExitRecord(TraceRecord):
    """Record for node exit."""
    node_name: str
    display: Optional[str] = None
    record_type: RecordType = field(default=RecordType.NODE_EXIT, init=False)


# In-memory trace storage
_trace_log: List[TraceRecord] = []


def log_evaluation(expression: str, value: Optional[float], error: Optional[str], duration_ms: float):
    """Log an evaluation with timing."""
    record = EvaluationRecord(
        timestamp=datetime.now(),
        expression=expression,
        value=value,
        error=error,
        duration_ms=duration_ms
    )
    _trace_log.append(record)
    outcome = f"error: {error}" if error else value
    logger.info(
        f"Evaluated '{expression[:100]}' → {outcome} ({duration_ms:.3f}ms)")


def log_node_entry(node_name: str, state: Dict):
    """Log when entering a node."""
    record = NodeEntryRecord(
        timestamp=datetime.now(),
        node_name=node_name,
        expression=state.get("expression", "")[:50]
    )
    _trace_log.append(record)
    logger.debug(f"Entering node: {node_name}")


def log_node_exit(node_name: str, state: Dict):
    """Log when exiting a node."""
    record = NodeExitRecord(
        timestamp=datetime.now(),
        node_name=node_name,
        display=state.get("display")
    )
    _trace_log.append(record)
    logger.debug(f"Exiting node: {node_name}")
    if state.get("display"):
        logger.debug(f"  Display: {state['display'][:100]}")


def get_trace() -> List[TraceRecord]:
    """Get the full trace log."""
    return _trace_log.copy()


def get_trace_dicts() -> List[Dict[str, Any]]:
    """Get trace log as list of dictionaries."""
    return [record.to_dict() for record in _trace_log]


def get_evaluations() -> List[EvaluationRecord]:
    """Get all evaluation records."""
    return [r for r in _trace_log if isinstance(r, EvaluationRecord)]


def get_node_entries() -> List[NodeEntryRecord]:
    """Get all node entry records."""
    return [r for r in _trace_log if isinstance(r, NodeEntryRecord)]


def clear_trace():
    """Clear the trace log."""
    _trace_log.clear()


def format_trace_summary() -> str:
    """Format a human-readable trace summary."""
    if not _trace_log:
        return "No trace data"

    lines = ["\n=== Calculator Execution Trace ==="]
    for record in _trace_log:
        timestamp = record.timestamp.strftime("%H:%M:%S")
        if isinstance(record, EvaluationRecord):
            outcome = f"ERROR {record.error}" if record.error else record.value
            lines.append(
                f"[{timestamp}] EVAL: {record.expression[:150]} → {outcome} ({record.duration_ms:.3f}ms)")
        elif isinstance(record, NodeEntryRecord):
            lines.append(f"[{timestamp}] ENTER: {record.node_name}")
        elif isinstance(record, NodeExitRecord):
            lines.append(f"[{timestamp}] EXIT: {record.node_name}")

    return "\n".join(lines)
