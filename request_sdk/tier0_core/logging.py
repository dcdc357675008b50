"""
request_sdk.tier0_core.logging
───────────────────────────────
Structured request logs. Every record passes through credential redaction
before rendering: token/authorization keys are masked and free-text fields
(URLs, error strings) are scrubbed of bearer tokens and query secrets.

Configure via: REQUEST_SDK_LOG_LEVEL, REQUEST_SDK_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from request_sdk.tier0_core.config import get_config
from request_sdk.tier0_core.redact import redact_dict, scrub_string

SDK_LOGGER_NAME = "request_sdk"

_SCRUBBED_FIELDS = ("url", "error")


def _redact_processor(logger: Any, method: str, event_dict: dict) -> dict:
    """Mask credential keys, then scrub credential patterns out of text fields."""
    event_dict = redact_dict(event_dict)
    for key in _SCRUBBED_FIELDS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = scrub_string(value)
    return event_dict


def _configure_structlog() -> None:
    config = get_config()
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _redact_processor,
    ]

    if config.log_format.lower() == "console":
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    # Only the SDK's own logger tree; the host app owns the root logger.
    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)
    sdk_logger.addHandler(handler)
    sdk_logger.setLevel(level)


_configured = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger, configuring structlog on first use.

    Usage:
        log = get_logger(__name__)
        log.info("request.sent", method="POST", url="https://api.example.com/login")
    """
    global _configured
    if not _configured:
        _configure_structlog()
        _configured = True
    return structlog.get_logger(name or SDK_LOGGER_NAME)
