"""
Logging configuration using structlog for structured, JSON-based logging.

Logs are written to stderr so that stdout carries only command output,
which scripts and agents parse when ``--json`` is given.
"""

import sys

import structlog

DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(log_level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structured logging with JSON output on stderr.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level.upper()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

