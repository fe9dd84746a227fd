from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .topic.operations import OperationRequest

__all__ = [
    "ValidationError",
    "TransportError",
    "PartitionError",
    "SyncError",
]


class ValidationError(Exception):
    """
    Raised before any remote call when a topic tree is malformed.

    Examples:

    - {obj}`TopicNode` with an empty name
    - Tree provided as a mapping which does not conform to {obj}`TopicNode`
    """

    errors: list[str]

    def __init__(self, errors: list[str]):
        self.errors = errors
        errors_str = "\n".join([e for e in errors])
        super().__init__(f"Errors found during validation: {errors_str}")


class TransportError(Exception):
    """
    Raised when the transport fails to execute an operation: connection
    failure, non-success HTTP status, or errors reported by the API.
    """

    status: int | None
    """HTTP status code, if a response was received."""

    def __init__(self, message: str, *, status: int | None = None):
        self.status = status
        super().__init__(message)


class PartitionError(Exception):
    """
    Raised if the batching engine produces a payload exceeding the configured
    ceiling. Indicates a defect rather than a recoverable condition.
    """

    def __init__(self, count: int, max_batch_size: int):
        self.count = count
        self.max_batch_size = max_batch_size
        super().__init__(
            f"Batch of {count} topics exceeds maximum of {max_batch_size}"
        )


class SyncError(Exception):
    """
    Raised when synchronization of a tree aborts partway through.

    Calls executed before the failure are not rolled back; they're available
    in {obj}`SyncError.calls`.
    """

    calls: list[OperationRequest]
    """Operations successfully executed before the failure, in order."""

    error: Exception
    """Originating exception."""

    def __init__(self, calls: list[OperationRequest], error: Exception):
        self.calls = calls
        self.error = error
        super().__init__(
            f"Synchronization failed after {len(calls)} successful calls: {error}"
        )


def _assert_validate(cond: bool, errors: list[str], message: str):
    """
    Helper to record a validation error if the condition is False.
    """
    if cond is not True:
        errors.append(message)
