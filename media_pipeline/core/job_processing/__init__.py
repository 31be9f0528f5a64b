"""
Job processor for queued media jobs.

Fetches source content, summarizes and embeds it with retries, and writes
an idempotent vector record.

Dependencies: boto3, langchain_core, sqlalchemy, pydantic
System role: Job processing entrypoint
"""

from .configs import ProcessorSettings, get_processor_settings
from .entrypoint import build_job_processor
from .fingerprint import fingerprint
from .models import JobState, MediaType, ProcessingJob, ProcessingOutcome, ResultRecord
from .processor import JobProcessor
from .retry import with_retry

__all__ = [
    "JobProcessor",
    "build_job_processor",
    "ProcessorSettings",
    "get_processor_settings",
    "fingerprint",
    "with_retry",
    "JobState",
    "MediaType",
    "ProcessingJob",
    "ProcessingOutcome",
    "ResultRecord",
]
