"""Structured logging configuration."""

import logging
import sys

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from api.config import Settings, get_settings


def service_context(settings: Settings) -> Processor:
    """Build a processor stamping every event with the service and environment."""

    def add_service_context(
        _logger: WrappedLogger, _method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service", settings.service_name)
        event_dict.setdefault("env", settings.env)
        return event_dict

    return add_service_context


def build_processors(settings: Settings) -> list[Processor]:
    """Processor chain: JSON lines in production, console output elsewhere."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        service_context(settings),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        # No ANSI colors under pytest so captured output stays readable
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=not settings.is_test,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    return processors


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog and route stdlib logging to stdout."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # Per-request lines come from LoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
