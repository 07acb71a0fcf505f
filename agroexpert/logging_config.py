"""Structured logging for the engine and advisor service.

Every event carries ``service`` and ``component`` keys so engine output can be
filtered apart from the host application's logs.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from agroexpert.config import LogFormat, Settings, get_settings

SERVICE_NAME = "agroexpert"

_configured = False


def add_service_name(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
	event_dict.setdefault("service", SERVICE_NAME)
	return event_dict


def build_processors(log_format: LogFormat) -> list[Any]:
	renderer: Any
	if log_format == LogFormat.json:
		renderer = structlog.processors.JSONRenderer(sort_keys=True)
	else:
		renderer = structlog.dev.ConsoleRenderer()
	return [
		structlog.contextvars.merge_contextvars,
		add_service_name,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso", utc=True),
		structlog.processors.format_exc_info,
		renderer,
	]


def configure_structured_logging(settings: Settings | None = None) -> None:
	"""Configure structlog once per process; later calls are no-ops."""
	global _configured
	if _configured:
		return

	settings = settings or get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
	logging.basicConfig(level=log_level, format="%(message)s")

	structlog.configure(
		processors=build_processors(settings.log_format),
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


def get_logger(component: str) -> Any:
	"""Logger bound to one engine component, e.g. ``get_logger("advisor")``."""
	return structlog.get_logger(f"{SERVICE_NAME}.{component}", component=component)


def bind_farm_context(farm_id: str) -> None:
	"""Reset per-call context vars and tag subsequent log lines with the farm."""
	structlog.contextvars.clear_contextvars()
	structlog.contextvars.bind_contextvars(farm_id=farm_id)
