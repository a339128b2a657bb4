"""structlog setup for processes that run the exchange."""

import logging

import structlog


def configure_logging(debug: bool = False) -> None:
    """Render structured logs to the console, filtered at INFO (DEBUG if debug)."""
    log_level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
