"""structlog setup for the digest service.

Events are snake_case names (``digest_tick``, ``digest_delivered``) with the
cadence, team and window bound as fields.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "idea-digest"


def _add_service_name(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(json_logs: bool = True, level: int = logging.INFO) -> None:
    """Install the structlog processor chain.

    Args:
        json_logs: JSON lines for Cloud Logging, or the dev console renderer.
        level: Minimum level for both structlog and stdlib loggers.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn, google-cloud and slack_sdk log through stdlib
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)


def get_logger(component: str | None = None, **context: Any) -> Any:
    """Logger with ``component`` and any extra fields already bound."""
    logger = structlog.get_logger()
    if component:
        context["component"] = component
    return logger.bind(**context) if context else logger
