"""Structured logging setup using structlog.

One processor chain feeds either a coloured console renderer or a JSON
renderer.  JSON is chosen when ``APP_ENV=production`` or when the caller
forces it; the container image runs in production mode so log collectors
receive one JSON object per line.

On top of the usual context/level/timestamp processors the chain:

- stamps every event with ``service=showtracker`` so the proxy's lines can
  be told apart when several containers share a collector, and
- masks the TMDB credential wherever it shows up in an event, whether as a
  ``bearer_token``/``authorization`` field or embedded in a header dict.

The stdlib root logger is pointed at the same chain, so uvicorn access logs
come out in the same format as our own events.  httpx logs one INFO line per
upstream request; that duplicates ``lookup_fetched_upstream`` and is only
let through when the level is DEBUG.
"""

import logging
import os
import sys
from collections.abc import Callable, Mapping
from typing import Any

import structlog

SERVICE_NAME = "showtracker"

_REDACTED = "***"
_SECRET_KEYS = frozenset({"authorization", "bearer_token", "tmdb_bearer_token", "token"})
_CHATTY_LOGGERS = ("httpx", "httpcore")


def _mask(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            k: (_REDACTED if str(k).lower() in _SECRET_KEYS else _mask(v)) for k, v in value.items()
        }
    return value


def redact_secrets(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace credential values in *event_dict* with ``***``."""
    for key in list(event_dict):
        if key.lower() in _SECRET_KEYS:
            event_dict[key] = _REDACTED
        else:
            event_dict[key] = _mask(event_dict[key])
    return event_dict


def add_service(service: str) -> Callable[[Any, str, dict[str, Any]], dict[str, Any]]:
    """Return a processor that sets ``service`` unless the event already has one."""

    def _processor(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service)
        return event_dict

    return _processor


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    service: str = SERVICE_NAME,
) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        json_output: Force JSON rendering regardless of ``APP_ENV``.
        service: Value stamped into the ``service`` field of every event.

    Returns:
        A configured structlog BoundLogger.
    """
    level = log_level.upper()
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service(service),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    chatty_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound with ``logger_name``.

    Configures logging with defaults on first use if nothing else has.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
