"""
Structured Logging

Every mutation, rejection and save is logged with key/value context
through structlog. Configuration happens once, at startup, from
LoggingSettings; modules just call get_logger().
"""

import logging
import sys
from typing import Optional

import structlog

from lifehub.config import LoggingSettings, get_settings


_configured = False


def configure_logging(
    settings: Optional[LoggingSettings] = None,
    force: bool = False,
) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Safe to call more than once; later calls are ignored unless force=True.
    """
    global _configured
    if _configured and not force:
        return

    settings = settings or get_settings().logging
    level = getattr(logging, settings.log_level)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=force,
    )
    logging.getLogger("lifehub").setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structured logger."""
    return structlog.get_logger(name)
