"""Base operation interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from glossary_spine.framework.params import OperationSpec


class OperationStatus(str, Enum):
    """Operation execution status."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RetryPolicy:
    """How many extra attempts the runner may make after a retryable failure.

    ``max_attempts=0`` means the operation runs exactly once.
    """

    max_attempts: int = 0
    backoff_seconds: float = 0.0


@dataclass
class OperationResult:
    """Result of an operation execution."""

    status: OperationStatus
    started_at: datetime
    completed_at: datetime | None = None
    error: str | None = None
    error_type: str | None = None
    attempts: int = 1
    metrics: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == OperationStatus.COMPLETED

    @property
    def duration_seconds(self) -> float | None:
        """Duration in seconds if completed."""
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()


class Operation(ABC):
    """Base class for all operations."""

    name: str = ""
    description: str = ""
    spec: "OperationSpec | None" = None
    retry: RetryPolicy = RetryPolicy()

    def __init__(self, params: dict[str, Any] | None = None) -> None:
        self.params = params or {}

    @abstractmethod
    def run(self) -> OperationResult:
        """Execute the operation. Must be implemented by subclasses."""
        ...

    def validate_params(self) -> None:  # noqa: B027
        """Validate operation parameters. Override in subclasses."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(params={self.params})"
