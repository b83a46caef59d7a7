"""Synchronous operation runner.

Manifesto:
    The runner executes operations with consistent lifecycle hooks
    (validate → execute → record result) so operation code never manages
    its own timing, error capture or retry loop.

Retries follow the operation's :class:`RetryPolicy` and only ever apply to
errors flagged retryable; precondition failures are never retried.

Tags:
    glossary-spine, framework, runner, synchronous, lifecycle

Doc-Types:
    api-reference
"""

import time
import uuid
from datetime import UTC, datetime
from typing import Any

from glossary_spine.core.errors import BadParamsError, OperationNotFoundError, is_retryable
from glossary_spine.framework.logging import bind_context, clear_context, get_logger, log_step, set_context
from glossary_spine.framework.operations import Operation, OperationResult, OperationStatus
from glossary_spine.framework.registry import get_operation

log = get_logger(__name__)


class OperationRunner:
    """
    Synchronous operation runner.

    Executes operations immediately in the current thread.
    """

    def run(self, operation_name: str, params: dict[str, Any] | None = None) -> OperationResult:
        """
        Run an operation by name.

        Args:
            operation_name: Name of the registered operation
            params: Optional parameters for the operation

        Returns:
            OperationResult with execution details.  Exceptions raised by the
            operation are captured as a FAILED result carrying their message.

        Raises:
            OperationNotFoundError: If operation is not registered
            BadParamsError: If parameters are missing or invalid
        """
        params = dict(params or {})

        try:
            operation_cls = get_operation(operation_name)
        except KeyError:
            raise OperationNotFoundError(operation_name) from None

        if operation_cls.spec is not None:
            validation = operation_cls.spec.validate(params)
            if not validation.valid:
                raise BadParamsError(
                    validation.get_error_message(),
                    missing_params=validation.missing_params,
                    invalid_params=validation.invalid_params,
                )

        operation = operation_cls(params=params)

        try:
            operation.validate_params()
        except BadParamsError:
            raise
        except Exception as e:
            raise BadParamsError(str(e)) from e

        set_context(execution_id=uuid.uuid4().hex, operation=operation_name, term=params.get("term"))
        try:
            return self._run_with_policy(operation)
        finally:
            clear_context()

    def _run_with_policy(self, operation: Operation) -> OperationResult:
        policy = operation.retry
        total_attempts = 1 + max(policy.max_attempts, 0)
        started_at = datetime.now(UTC)

        for attempt in range(1, total_attempts + 1):
            bind_context(attempt=attempt)
            try:
                with log_step("operation.run", operation=operation.name):
                    result = operation.run()
            except Exception as e:
                if attempt < total_attempts and is_retryable(e):
                    log.warning("runner.retrying", attempt=attempt, error=str(e))
                    time.sleep(policy.backoff_seconds)
                    continue

                log.error("runner.error", error=str(e), error_type=type(e).__name__, attempt=attempt)
                return OperationResult(
                    status=OperationStatus.FAILED,
                    started_at=started_at,
                    completed_at=datetime.now(UTC),
                    error=str(e),
                    error_type=type(e).__name__,
                    attempts=attempt,
                )

            result.attempts = attempt
            log.info(
                "runner.completed",
                status=result.status.value,
                duration_ms=round(result.duration_seconds * 1000, 2) if result.duration_seconds else None,
            )
            return result

        raise AssertionError("unreachable: retry loop always returns")


_runner: OperationRunner | None = None


def get_runner() -> OperationRunner:
    """Get or create runner instance."""
    global _runner
    if _runner is None:
        _runner = OperationRunner()
    return _runner
