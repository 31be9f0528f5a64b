"""
Bounded retry with linear backoff for calls to unreliable services.

Dependencies: tenacity
System role: Retry strategy shared by the summarization and embedding stages
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, NoReturn, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_incrementing,
)

from media_pipeline.core.exceptions import EmptyResultError, StageFailedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY_SECONDS = 1.0


def _attempt_error(retry_state: RetryCallState, job_id: str, stage: str) -> BaseException:
    outcome = retry_state.outcome
    if outcome is not None and outcome.failed:
        return outcome.exception()
    return EmptyResultError(
        f"{stage} returned an empty result",
        {"job_id": job_id, "attempt": retry_state.attempt_number},
    )


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    job_id: str,
    stage: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY_SECONDS,
    failure: type[StageFailedError] = StageFailedError,
    is_valid: Callable[[Any], bool] = bool,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> T:
    """
    Invoke an async operation until it returns a valid payload.

    Waits ``base_delay * attempt`` between attempts (linear, no jitter) and
    never after the final attempt. An empty payload counts as a failed
    attempt.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        job_id: Job identifier for log correlation
        stage: Stage name for log correlation
        max_attempts: Maximum number of invocations
        base_delay: Backoff unit in seconds
        failure: Exception class raised on exhaustion
        is_valid: Predicate deciding whether a result counts as success
        sleep: Awaitable sleep, injectable for tests

    Returns:
        The first valid result

    Raises:
        ValueError: max_attempts is less than 1
        StageFailedError: All attempts failed (instance of ``failure``)
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    def _log_failed_attempt(retry_state: RetryCallState) -> None:
        logger.warning(
            "%s attempt failed",
            stage,
            extra={
                "job_id": job_id,
                "stage": stage,
                "attempt": retry_state.attempt_number,
                "max_attempts": max_attempts,
                "error": str(_attempt_error(retry_state, job_id, stage)),
            },
        )

    def _raise_stage_failure(retry_state: RetryCallState) -> NoReturn:
        last_error = _attempt_error(retry_state, job_id, stage)
        raise failure(job_id=job_id, cause=last_error) from last_error

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_incrementing(start=base_delay, increment=base_delay),
        retry=retry_if_exception_type(Exception) | retry_if_result(lambda r: not is_valid(r)),
        after=_log_failed_attempt,
        retry_error_callback=_raise_stage_failure,
        sleep=sleep,
    )
    return await retrying(operation)
