"""
Structured logging configuration using structlog.

Provides consistent, structured logging across all modules.
"""

import logging
import re
import sys
from typing import Any

import structlog

from projectlens.shared.infrastructure.config import settings

_HOME_PATTERNS = (
    re.compile(r"/Users/[^/\s]+"),
    re.compile(r"/home/[^/\s]+"),
    re.compile(r"[A-Za-z]:\\Users\\[^\\\s]+"),
)


def privacy_redactor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Redact home directories from log values.

    Analyzed paths often live under a user's home; the user name is not
    needed to diagnose a scan.

    Args:
        logger: Logger instance
        method_name: Logging method name
        event_dict: Event dictionary to process

    Returns:
        Redacted event dictionary
    """
    if not getattr(settings, "log_redaction_enabled", True):
        return event_dict

    def redact_string(text: str) -> str:
        for pattern in _HOME_PATTERNS:
            text = pattern.sub("~", text)
        return text

    def redact_value(value: Any) -> Any:
        if isinstance(value, str):
            return redact_string(value)
        if isinstance(value, dict):
            return {k: redact_value(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [redact_value(v) for v in value]
        return value

    return {k: redact_value(v) for k, v in event_dict.items()}


def configure_logging(stream: Any = sys.stderr, level: str | None = None) -> None:
    """
    Configure structlog for the application.

    Sets up:
    - JSON output for production
    - Pretty console output for development
    - Log level from settings (or the explicit override)
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        privacy_redactor,
    ]

    if settings.is_development:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=stream.isatty() if hasattr(stream, "isatty") else False),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, (level or settings.log_level).upper()),
        force=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("traversal_completed", files=12)
    """
    return structlog.get_logger(name)
