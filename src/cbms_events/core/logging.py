"""Logging configuration for the dashboard."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpcore", "httpx", "openai", "sqlalchemy", "uvicorn.access")


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging with a single stdout handler.

    Safe to call more than once: existing root handlers are replaced.

    Args:
        level: Log level name for the application loggers.
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level.upper())
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
