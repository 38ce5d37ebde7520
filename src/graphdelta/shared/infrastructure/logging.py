"""
Structured logging for graphdelta.

Events are snake_case names with keyword context, e.g.

    logger.info("graph_diff_completed", node_diffs=4)

Log records always go to stderr: the diff command prints JSON on stdout and
that output must stay parseable.
"""

import logging
import sys
from typing import Any, Optional, TextIO

import structlog

from graphdelta.shared.infrastructure.config import settings


def add_app_name(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Tag every event with the application name."""
    event_dict.setdefault("app", settings.app_name)
    return event_dict


def _renderer(stream: TextIO) -> list[Any]:
    if settings.is_development:
        return [structlog.dev.ConsoleRenderer(colors=getattr(stream, "isatty", lambda: False)())]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def configure_logging(stream: TextIO = sys.stderr, level: Optional[str] = None) -> None:
    """
    Configure structlog and the stdlib logging bridge.

    Args:
        stream: Destination of log records
        level: Overrides settings.log_level, e.g. DEBUG for --verbose
    """
    log_level = (level or settings.log_level).upper()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            add_app_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            *_renderer(stream),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=stream, level=getattr(logging, log_level), force=True)


def get_logger(name: str) -> Any:
    """Structured logger named after the calling module (pass __name__)."""
    return structlog.get_logger(name)
