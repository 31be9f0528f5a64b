"""
Models for the job processor.

Exports: MediaType, ProcessingJob, JobState, ResultRecord, ProcessingOutcome, SQSRecord
"""

from .processing_job import MediaType, ProcessingJob
from .result_record import JobState, ProcessingOutcome, ResultRecord
from .sqs_event import SQSRecord

__all__ = [
    "MediaType",
    "ProcessingJob",
    "JobState",
    "ResultRecord",
    "ProcessingOutcome",
    "SQSRecord",
]
