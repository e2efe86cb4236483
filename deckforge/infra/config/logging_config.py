"""
Structlog configuration and helpers.

Log events never carry provider credentials: any event key that looks like a
secret is masked before rendering.
"""

from __future__ import annotations

import logging
from typing import Any, MutableMapping, Optional

import structlog

SECRET_KEYS = frozenset({"api_key", "apikey", "authorization", "credentials", "token"})
MASK = "***"

# Client libraries that log full request lines at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "google_genai")


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Structlog processor masking credential-like keys."""
    for key in list(event_dict):
        if key.lower() in SECRET_KEYS and event_dict[key]:
            event_dict[key] = MASK
    return event_dict


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    settings=None,
) -> None:
    """Configure structlog for the application.

    Args:
        log_level: Log level name (e.g., "INFO"); defaults from settings
        log_format: "json" or "console"; defaults from settings
        settings: Settings instance; the global settings when omitted
    """
    if settings is None:
        from deckforge.infra.config.settings import get_settings

        settings = get_settings()

    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    fmt = (log_format or settings.log_format).lower()

    logging.basicConfig(level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            redact_secrets,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:  # type: ignore[name-defined]
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_context(**kwargs) -> None:
    """Bind contextvars for correlation (request_id, provider, slide_id)."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Drop per-item keys (slide_id, provider) once the item is done."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
