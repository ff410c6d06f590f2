"""Pytest configuration for test logging."""
from exprcalc.config import LOG_LEVEL
from exprcalc.observability.logging_config import configure_logging

configure_logging(LOG_LEVEL)
