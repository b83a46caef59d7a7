"""
Logging context management using contextvars.

Execution context (execution id, operation, term, step) is attached to
every log entry without being passed through each call.  contextvars keep
it correct across threads and asyncio tasks.
"""

from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Any

import structlog


@dataclass
class LogContext:
    """
    Execution context attached to all log entries.

    Core identifiers:
        execution_id: Unique operation execution ID
        operation: Operation name (e.g., "create_pr")
        term: Glossary input term being processed

    Tracing (for nested timing blocks):
        span_id: Current span identifier
        parent_span_id: Parent span for nested operations

    Execution metadata:
        attempt: Attempt number (default 1)
        step: Current processing step name
    """

    execution_id: str | None = None
    operation: str | None = None
    term: str | None = None

    span_id: str | None = None
    parent_span_id: str | None = None

    attempt: int = 1
    step: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict (excludes attempt=1 default)."""
        result = {}
        for k, v in asdict(self).items():
            if v is None:
                continue
            if k == "attempt" and v == 1:
                continue
            result[k] = v
        return result

    def merge(self, **kwargs) -> "LogContext":
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None and k in current})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def set_context(
    execution_id: str | None = None,
    operation: str | None = None,
    term: str | None = None,
    step: str | None = None,
    span_id: str | None = None,
    parent_span_id: str | None = None,
    attempt: int = 1,
) -> LogContext:
    """
    Set the current log context.

    This replaces the current context. Use bind_context() to add to existing.
    """
    ctx = LogContext(
        execution_id=execution_id,
        operation=operation,
        term=term,
        step=step,
        span_id=span_id,
        parent_span_id=parent_span_id,
        attempt=attempt,
    )
    _log_context.set(ctx)
    return ctx


def bind_context(**kwargs) -> LogContext:
    """Merge values into the current context and return it."""
    updated = get_context().merge(**kwargs)
    _log_context.set(updated)
    return updated


def clear_context() -> None:
    """Clear the current context (reset to empty)."""
    _log_context.set(LogContext())


class _ContextToken:
    """Token for restoring context after a scoped operation."""

    def __init__(self, token):
        self._token = token

    def restore(self):
        _log_context.reset(self._token)


def push_context(**kwargs) -> _ContextToken:
    """
    Push new context values, returning a token to restore later.

    Usage:
        token = push_context(step="create_branch")
        try:
            do_work()
        finally:
            token.restore()
    """
    updated = get_context().merge(**kwargs)
    return _ContextToken(_log_context.set(updated))


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds execution context to every log entry.

    Keys already present on the event win over context values.
    """
    for key, value in get_context().to_dict().items():
        if key not in event_dict:
            event_dict[key] = value
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (typically ``get_logger(__name__)``)."""
    return structlog.get_logger(name)
