"""
Logging configuration.

Provides a single entry point for configuring structured logging.
Configuration is read from arguments or environment variables:
- GLOSSARY_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: INFO)
- GLOSSARY_LOG_FORMAT: json | console (default: console)

Usage:
    from glossary_spine.framework.logging import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="DEBUG", format="json")
"""

import logging
import os
import sys
from typing import Literal

import structlog
from structlog.types import Processor

from glossary_spine.framework.logging.context import add_context_processor

_configured = False


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | str | None = None,
    format: Literal["json", "console"] | str | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Should be called once at startup (CLI entry).  Subsequent calls are
    no-ops unless force=True.

    Args:
        level: Log level (overrides GLOSSARY_LOG_LEVEL env var)
        format: Output format (overrides GLOSSARY_LOG_FORMAT env var)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = (level or os.environ.get("GLOSSARY_LOG_LEVEL", "INFO")).upper()
    log_format = (format or os.environ.get("GLOSSARY_LOG_FORMAT", "console")).lower()

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_context_processor,
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )
    logging.getLogger("glossary_spine").setLevel(getattr(logging, log_level))
    # httpx logs every request at INFO; keep it at WARNING unless debugging
    if log_level != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)

    _configured = True

