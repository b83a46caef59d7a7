"""
Structured error types for Glossary Spine.

Provides a small hierarchy of typed errors with metadata for retry
decisions, categorization and logging. Every error raised by the pipeline
derives from ``GlossaryError`` and carries:

- **Category:** What kind of error (precondition, source control, config, ...)
- **Retryable:** Whether the operation could be retried automatically
- **Context:** Structured metadata (operation, term, url, http_status, ...)
- **Cause:** Chained underlying exception for root cause analysis

Manifesto:
    The publishing flow only knows two failure kinds: a precondition that
    upstream generation did not satisfy (abort immediately, never retry)
    and a remote call that failed (propagate, leave remote state as is).
    Typed errors keep that distinction visible to the runner and the CLI
    instead of flattening everything into ``Exception``.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                        GlossaryError                          │
        │        (category, retryable, retry_after, context, cause)     │
        ├──────────────────────────────────────────────────────────────┤
        │  AbortTaskError        SourceControlError    ConfigError      │
        │  (PRECONDITION)        (SOURCE_CONTROL)      (CONFIG)         │
        │       │                                          │            │
        │  EntryNotFoundError                        MissingConfigError │
        │                                                               │
        │  TransientError                              OperationError   │
        │  (retryable=True)                            (OPERATION)      │
        │       │                                          │            │
        │  NetworkError                              OperationNotFound  │
        │                                            BadParamsError     │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> error = AbortTaskError("takeaways missing", term="Customer Auth")
    >>> error.retryable
    False
    >>> error.context.term
    'Customer Auth'

    >>> error = SourceControlError("Reference does not exist", http_status=422)
    >>> error.to_dict()["context"]["http_status"]
    422

Guardrails:
    ❌ DON'T: Raise plain Exception for a missing upstream artifact
    ✅ DO: Raise AbortTaskError so the runner never retries it

    ❌ DON'T: Swallow the httpx exception when wrapping it
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, retry-logic, error-context,
    glossary-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Categories are grouped by their typical retry behavior:
    - **Infrastructure (usually transient):** NETWORK
    - **Remote host:** SOURCE_CONTROL
    - **Never retryable:** PRECONDITION, CONFIG
    - **Application:** OPERATION
    - **Internal:** INTERNAL
    """

    # Infrastructure errors (usually transient)
    NETWORK = "NETWORK"                  # Connection, timeout, DNS

    # Remote host errors
    SOURCE_CONTROL = "SOURCE_CONTROL"    # GitHub REST failures

    # Input errors (never retryable)
    PRECONDITION = "PRECONDITION"        # Upstream content missing
    CONFIG = "CONFIG"                    # Missing config, invalid settings

    # Application errors
    OPERATION = "OPERATION"              # Operation lookup/params/execution

    # Internal errors
    INTERNAL = "INTERNAL"                # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        operation: Name of the operation being executed
        execution_id: Unique execution identifier
        term: Glossary input term being processed
        step: Step within the operation (e.g. "create_branch")
        url: URL that was being accessed
        http_status: HTTP status code if applicable
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    execution_id: str | None = None
    term: str | None = None
    step: str | None = None

    url: str | None = None
    http_status: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "execution_id", "term", "step", "url", "http_status"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class GlossaryError(Exception):
    """
    Base exception for all Glossary Spine errors.

    Subclasses set ``default_category`` and ``default_retryable`` so callers
    rarely pass them explicitly.

    Examples:
        >>> error = GlossaryError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> GlossaryError("Fetch failed").with_context(term="Webhook").context.term
        'Webhook'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        retry_after: int | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.retry_after = retry_after
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> GlossaryError:
        """
        Add context to this error (fluent API).

        Usage:
            raise SourceControlError("Failed").with_context(
                step="create_branch",
                url="https://api.github.com/repos/o/r/git/refs",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# PRECONDITION ERRORS (Never Retryable)
# =============================================================================


class AbortTaskError(GlossaryError):
    """
    Fatal precondition failure that aborts a task run.

    Raised when an upstream generation step has not produced what the task
    needs (rendered body, takeaways). The runner never retries it, whatever
    the operation's retry policy says.
    """

    default_category = ErrorCategory.PRECONDITION
    default_retryable = False

    def __init__(self, message: str, *, term: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        if term is not None:
            self.context.term = term

    @property
    def term(self) -> str | None:
        return self.context.term


class EntryNotFoundError(AbortTaskError):
    """No glossary entry is stored for the requested term."""

    def __init__(self, term: str):
        super().__init__(f"No glossary entry found for term: {term}", term=term)


# =============================================================================
# REMOTE ERRORS
# =============================================================================


class TransientError(GlossaryError):
    """Temporary error that may succeed on retry."""

    default_category = ErrorCategory.NETWORK
    default_retryable = True


class NetworkError(TransientError):
    """Connection, DNS or timeout failure talking to a remote host."""

    pass


class SourceControlError(GlossaryError):
    """
    A source-control host (GitHub) call failed.

    Server-side failures (5xx) and rate limiting (429) are flagged
    retryable; client errors are not. Whether anything is actually retried
    is decided by the operation's retry policy.
    """

    default_category = ErrorCategory.SOURCE_CONTROL
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        url: str | None = None,
        **kwargs: Any,
    ):
        if "retryable" not in kwargs and http_status is not None:
            kwargs["retryable"] = http_status >= 500 or http_status == 429
        super().__init__(message, **kwargs)
        self.context.http_status = http_status
        self.context.url = url

    @property
    def http_status(self) -> int | None:
        return self.context.http_status


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(GlossaryError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


# =============================================================================
# OPERATION ERRORS
# =============================================================================


class OperationError(GlossaryError):
    """Operation execution error."""

    default_category = ErrorCategory.OPERATION
    default_retryable = False


class OperationNotFoundError(OperationError):
    """Operation not found in registry."""

    def __init__(self, name: str):
        self.operation_name = name
        super().__init__(f"Operation not found: {name}")


class BadParamsError(OperationError):
    """Invalid operation parameters."""

    def __init__(
        self,
        message: str,
        *,
        missing_params: list[str] | None = None,
        invalid_params: dict[str, str] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.missing_params = missing_params or []
        self.invalid_params = invalid_params or {}


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, GlossaryError):
        return error.retryable
    retryable_types = (
        ConnectionError,
        ConnectionResetError,
        ConnectionRefusedError,
        BrokenPipeError,
    )
    return isinstance(error, retryable_types)


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "GlossaryError",
    # Precondition
    "AbortTaskError",
    "EntryNotFoundError",
    # Remote
    "TransientError",
    "NetworkError",
    "SourceControlError",
    # Config
    "ConfigError",
    "MissingConfigError",
    # Operation
    "OperationError",
    "OperationNotFoundError",
    "BadParamsError",
    # Utilities
    "is_retryable",
]
