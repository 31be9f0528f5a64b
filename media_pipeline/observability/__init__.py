"""
Observability module.

Exports: configure_logging, log_job_lifecycle, log_with_context
"""

from media_pipeline.observability.log_utils import (
    log_job_lifecycle,
    log_with_context,
    safe_log_value,
)
from media_pipeline.observability.logger import JsonFormatter, configure_logging

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "log_job_lifecycle",
    "log_with_context",
    "safe_log_value",
]
