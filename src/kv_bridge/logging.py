"""Structured logging with structlog.

kv-bridge modules only emit events through :func:`get_logger`; they never
configure output. Applications that want kv-bridge's console or JSON rendering
call :func:`configure_logging` once at startup, otherwise events follow
whatever structlog configuration the host application installed.
"""

import logging
import sys
from functools import lru_cache

import structlog

from kv_bridge.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Install console or JSON rendering on the root logger.

    Opt-in for applications embedding kv-bridge. ``settings`` defaults to
    :func:`~kv_bridge.config.get_settings`; its ``log_level`` and
    ``log_format`` are used.
    """
    if settings is None:
        settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if settings.log_format == "json":
        formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
        )
    else:
        formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        )

    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


@lru_cache(maxsize=100)
def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return the named logger kv-bridge modules emit events through.

    Rendering and filtering are left to the host application's structlog
    configuration (see :func:`configure_logging`).
    """
    return structlog.get_logger(name)
