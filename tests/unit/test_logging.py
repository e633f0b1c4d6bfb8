"""Tests for structured logging configuration."""

import structlog

from api.config import Settings
from api.logging import build_processors, service_context


def test_service_context_added() -> None:
    """Every event carries the service name and environment."""
    processor = service_context(Settings(env="test", service_name="scoring-test"))

    event = processor(None, "info", {"event": "Scored criterion"})

    assert event["service"] == "scoring-test"
    assert event["env"] == "test"


def test_service_context_keeps_bound_values() -> None:
    """Values bound by the caller are not overwritten."""
    processor = service_context(Settings(env="test"))

    event = processor(None, "info", {"event": "x", "service": "worker"})

    assert event["service"] == "worker"


def test_production_renders_json() -> None:
    """Production logs are JSON lines."""
    processors = build_processors(Settings(env="production"))

    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_development_renders_console() -> None:
    """Non-production logs use the console renderer."""
    processors = build_processors(Settings(env="development"))

    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
