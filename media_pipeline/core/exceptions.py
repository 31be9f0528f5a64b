"""
Exception hierarchy for the media processing pipeline.

Provides layered exception structure for pipeline errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the pipeline
"""

from typing import Any


class PipelineError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(PipelineError):
    """Raised when required configuration or secrets are missing."""


class InputError(PipelineError):
    """Raised when a queue message body cannot be parsed or validated."""

    def __init__(
        self,
        message: str,
        message_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if message_id:
            details["message_id"] = message_id
        super().__init__(message, details)


class FetchError(PipelineError):
    """Raised when the source object cannot be read from storage."""

    def __init__(
        self,
        message: str,
        bucket: str | None = None,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize fetch error.

        Args:
            message: Error message
            bucket: Source bucket
            key: Source object key
            details: Additional context
        """
        self.bucket = bucket
        self.key = key
        details = details or {}
        if bucket:
            details["bucket"] = bucket
        if key:
            details["key"] = key
        super().__init__(message, details)


class ObjectNotFoundError(FetchError):
    """Raised when the source object does not exist."""


class ObjectEmptyError(FetchError):
    """Raised when the source object has no content."""


class EmptyResultError(PipelineError):
    """Raised for an attempt that returned an empty payload."""


class StageFailedError(PipelineError):
    """Raised when a pipeline stage exhausts its retry budget."""

    stage = "unknown"

    def __init__(
        self,
        job_id: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize stage failure.

        Args:
            job_id: Job that failed
            cause: Last error observed before giving up
            details: Additional context
        """
        self.job_id = job_id
        self.cause = cause
        details = details or {}
        details["job_id"] = job_id
        details["stage"] = self.stage
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(f"{self.stage} failed after retries", details)


class SummarizationFailed(StageFailedError):
    """Raised when summarization fails after retries."""

    stage = "summarization"


class EmbeddingFailed(StageFailedError):
    """Raised when embedding generation fails after retries."""

    stage = "embedding"


class PersistenceError(PipelineError):
    """Raised when the result record cannot be written."""

    def __init__(
        self,
        message: str,
        job_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if job_id:
            details["job_id"] = job_id
        super().__init__(message, details)


class DimensionMismatchError(PersistenceError):
    """Raised when an embedding length does not match the store schema."""

    def __init__(self, job_id: str, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Embedding has {actual} dimensions, store expects {expected}",
            job_id,
            {"expected": expected, "actual": actual},
        )
