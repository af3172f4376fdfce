"""structlog setup for applications embedding swapcore.

The library itself only calls structlog.get_logger(); nothing here runs on
import.
"""

import logging

import structlog


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure structlog with a console renderer filtered at `level`."""
    if isinstance(level, str):
        level = logging.getLevelNamesMapping()[level.upper()]

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
