"""
Glossary Spine Framework - operation infrastructure.

This module provides:
- Operation base classes, retry policy and registration
- Parameter specs and validation
- Structured logging with context
- Operation runner
"""

from glossary_spine.framework.operations import Operation, OperationResult, OperationStatus, RetryPolicy
from glossary_spine.framework.registry import clear_registry, get_operation, list_operations, register_operation
from glossary_spine.framework.runner import OperationRunner, get_runner

__all__ = [
    # Operations
    "Operation",
    "OperationResult",
    "OperationStatus",
    "RetryPolicy",
    # Registry
    "register_operation",
    "get_operation",
    "list_operations",
    "clear_registry",
    # Runner
    "OperationRunner",
    "get_runner",
]
