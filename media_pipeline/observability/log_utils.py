"""
Structured logging helpers.

Keeps log payloads small and JSON friendly, and gives every job lifecycle
event the same job_id and stage fields.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any


def safe_log_value(value: Any, max_length: int = 500) -> Any:
    """
    Safely convert a value for structured logging.

    Numbers, booleans and None pass through unchanged. Lists and dicts are
    summarized by size, everything else is stringified and truncated.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        Safe representation
    """
    try:
        if value is None or isinstance(value, (bool, int, float)):
            return value
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (list, tuple)):
            val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:  # pylint: disable=broad-except
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Emit ``message`` with every context value passed through safe_log_value.

    Embeddings and other large payloads end up as short summaries in the
    JSON line instead of thousands of floats.
    """
    logger.log(
        level,
        message,
        extra={name: safe_log_value(value) for name, value in context.items()},
    )


def log_job_lifecycle(
    logger: logging.Logger,
    job_id: str,
    stage: str,
    message: str,
    level: int = logging.INFO,
    **context,
) -> None:
    """
    Emit a lifecycle event correlated by job_id.

    Args:
        logger: Logger instance
        job_id: Job identifier
        stage: Pipeline stage or state name
        message: Log message
        level: Log level (INFO for transitions, ERROR for failures)
        **context: Additional fields (bucket, key, duration_ms, ...)
    """
    log_with_context(logger, level, message, job_id=job_id, stage=stage, **context)
