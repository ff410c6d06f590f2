"""Centralized logging configuration."""
import logging


def configure_logging(level: str = "INFO"):
    """Configure logging with appropriate levels for different modules."""
    log_level = getattr(logging, level.upper())

    # Base configuration
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)8s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True  # Override any existing configuration
    )

    # Suppress graph runtime internals
    logging.getLogger("langgraph").setLevel(logging.WARNING)

    # Keep the shell logs visible at the requested level
    logging.getLogger("exprcalc.graph").setLevel(log_level)
    logging.getLogger("exprcalc.guards").setLevel(log_level)
    logging.getLogger("exprcalc.observability").setLevel(log_level)
    # Set root logger to the desired level
    logging.getLogger().setLevel(log_level)
