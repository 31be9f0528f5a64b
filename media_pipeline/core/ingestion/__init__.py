"""
Ingestion trigger: S3 notifications to processing jobs on SQS.

Exports: infer_media_type, build_job, enqueue_s3_event
"""

from .lambda_handler import build_job, enqueue_s3_event, infer_media_type

__all__ = ["build_job", "enqueue_s3_event", "infer_media_type"]
