"""
Glossary Spine Logging - Structured, execution-aware logging.

This module provides:
- Structured logging with structlog
- Execution context propagation via contextvars
- Timing utilities for step durations
- Environment-based configuration

Usage:
    from glossary_spine.framework.logging import get_logger, configure_logging, log_step, set_context

    configure_logging()
    log = get_logger(__name__)

    set_context(execution_id="abc-123", operation="create_pr", term="Webhook")

    with log_step("create_pr.open_pull_request"):
        open_pull_request()
"""

from glossary_spine.framework.logging.config import configure_logging
from glossary_spine.framework.logging.context import (
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    push_context,
    set_context,
)
from glossary_spine.framework.logging.timing import TimingResult, log_step

__all__ = [
    "configure_logging",
    "get_logger",
    "set_context",
    "clear_context",
    "get_context",
    "bind_context",
    "push_context",
    "LogContext",
    "TimingResult",
    "log_step",
]
