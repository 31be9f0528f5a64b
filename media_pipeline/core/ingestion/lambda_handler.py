"""
Lambda handler for S3 object-created notifications.

Classifies the uploaded object by extension and enqueues a processing job
on SQS. Job ids are assigned here.

Dependencies: boto3, models.processing_job
System role: Ingestion trigger in front of the job processor
"""

import logging
import os
import uuid
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any, Dict
from urllib.parse import unquote_plus

import boto3
from dotenv import load_dotenv

from media_pipeline.core.exceptions import ConfigurationError
from media_pipeline.core.ingestion.configs import IngestionSettings, get_ingestion_settings
from media_pipeline.core.job_processing.models import MediaType, ProcessingJob
from media_pipeline.observability import configure_logging, log_job_lifecycle

load_dotenv()

configure_logging(os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = frozenset({"txt", "md", "json"})
AUDIO_EXTENSIONS = frozenset({"mp3", "wav", "m4a", "ogg", "flac"})

_sqs_client = None


def infer_media_type(key: str) -> MediaType:
    """
    Classify an object key by extension.

    Unknown extensions are treated as text.
    """
    extension = PurePosixPath(key).suffix.lstrip(".").lower()
    if extension in AUDIO_EXTENSIONS:
        return MediaType.AUDIO
    if extension not in TEXT_EXTENSIONS:
        logger.debug(
            "infer_media_type - Unknown extension, treating as text",
            extra={"key": key, "extension": extension},
        )
    return MediaType.TEXT


def build_job(bucket: str, key: str, created_at: datetime | None = None) -> ProcessingJob:
    """Create a new ProcessingJob for an uploaded object."""
    return ProcessingJob(
        job_id=str(uuid.uuid4()),
        bucket=bucket,
        key=key,
        media_type=infer_media_type(key),
        created_at=created_at or datetime.now(timezone.utc),
        retry_count=0,
    )


def _get_sqs_client(region: str):
    global _sqs_client
    if _sqs_client is None:
        _sqs_client = boto3.client("sqs", region_name=region)
    return _sqs_client


def enqueue_s3_event(
    event: Dict[str, Any],
    settings: IngestionSettings,
    sqs_client,
) -> list[ProcessingJob]:
    """
    Enqueue one job per S3 record from the configured bucket.

    Args:
        event: S3 notification event
        settings: Ingestion settings
        sqs_client: boto3 SQS client

    Returns:
        list[ProcessingJob]: Jobs that were sent

    Raises:
        Exception: SQS send failure (logged, then re-raised)
    """
    now = datetime.now(timezone.utc)
    jobs = []

    for record in event.get("Records", []):
        s3_info = record.get("s3", {})
        bucket = s3_info.get("bucket", {}).get("name", "")
        key = unquote_plus(s3_info.get("object", {}).get("key", ""))

        if bucket != settings.media_bucket_name:
            logger.warning(
                "Ignoring event from non-configured bucket",
                extra={"bucket": bucket, "key": key},
            )
            continue
        if not key:
            logger.warning("Ignoring record without object key", extra={"bucket": bucket})
            continue

        job = build_job(bucket, key, created_at=now)
        log_job_lifecycle(
            logger,
            job.job_id,
            "INGESTION",
            "Enqueueing processing job",
            bucket=bucket,
            key=key,
            media_type=job.media_type.value,
        )

        try:
            sqs_client.send_message(
                QueueUrl=settings.processing_queue_url,
                MessageBody=job.model_dump_json(by_alias=True),
            )
        except Exception as e:
            logger.error(
                "Failed to enqueue job",
                extra={"job_id": job.job_id, "bucket": bucket, "key": key, "error": str(e)},
            )
            raise

        log_job_lifecycle(logger, job.job_id, "INGESTION", "Job enqueued successfully")
        jobs.append(job)

    return jobs


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for S3 notifications.

    Args:
        event: S3 event with Records array
        context: Lambda context object

    Returns:
        Dict with the enqueued job ids
    """
    settings = get_ingestion_settings()
    if not settings.media_bucket_name or not settings.processing_queue_url:
        raise ConfigurationError(
            "MEDIA_BUCKET_NAME and PROCESSING_QUEUE_URL must be set"
        )

    jobs = enqueue_s3_event(event, settings, _get_sqs_client(settings.aws_region))
    return {"enqueued": len(jobs), "job_ids": [job.job_id for job in jobs]}
