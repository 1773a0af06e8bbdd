"""Structured logging setup for orgsift."""

from pathlib import Path
from typing import Any, Optional

import structlog


def default_log_file() -> Path:
    return Path.home() / ".cache" / "orgsift" / "logs" / "orgsift.log"


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """
    Configure structlog for JSON logging to ~/.cache/orgsift/logs/orgsift.log.

    Log level and file come from the configuration (logging.level and
    logging.file), which can in turn be set via ORGSIFT_LOG_LEVEL and
    ORGSIFT_LOG_FILE.

    Log levels:
    - DEBUG: Per-stage headline counts, resolved options
    - INFO: Commands started, files read and written
    - WARNING: Suspicious but recoverable input (e.g. empty documents)
    - ERROR: Configuration conflicts, unreadable input, write failures

    Example:
        # View logs with jq for readability:
        tail -f ~/.cache/orgsift/logs/orgsift.log | jq .
    """
    log_file = log_file or default_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    log_level = level.upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        log_level = "INFO"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=open(log_file, "a")),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Structured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("parse_started", path="notes.org", render_mode="html")
    """
    return structlog.get_logger(name)
