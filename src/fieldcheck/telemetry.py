"""
Structured logging setup.

Library modules only call ``structlog.get_logger()``; applications embedding
fieldcheck call :func:`setup_logging` once at startup if they want structlog
output routed through the standard logging handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from fieldcheck.config import LoggingConfig


_handler: logging.Handler | None = None


def setup_logging(config: LoggingConfig) -> None:
    """
    Configure structured logging for the entire application.

    Meant to be called by applications, not by libraries embedding fieldcheck:
    it configures structlog globally and sets the root logger level. Handlers
    already on the root logger are kept; calling again replaces only the
    handler installed by the previous call.
    """
    global _handler
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: Any
    if config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    if _handler is not None:
        root_logger.removeHandler(_handler)
    root_logger.addHandler(handler)
    _handler = handler
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
