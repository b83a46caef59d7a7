"""Operation base classes and result types."""

from glossary_spine.framework.operations.base import Operation, OperationResult, OperationStatus, RetryPolicy

__all__ = ["Operation", "OperationResult", "OperationStatus", "RetryPolicy"]
