"""
Lambda handler for SQS-triggered job processing.

Processes each SQS record through the job processor:
fetch -> fingerprint -> summarize -> embed -> persist.

Malformed records are logged and skipped. Any processing failure is
re-raised so SQS redelivers the batch and, after maxReceiveCount,
moves the message to the dead-letter queue.

Environment variables:
- MEDIA_BUCKET_NAME: S3 bucket holding uploaded media
- LLM_SECRET_ARN (or OPENAI_SECRET_ARN): Secret with the LLM API key
- DB_SECRET_ARN: Secret with database credentials
- DB_HOST, DB_NAME: Database overrides
- LOG_LEVEL: Logging level

Dependencies: entrypoint, lambda_utils, observability
System role: Lambda entry point for async job processing
"""

import asyncio
import logging
import os
from typing import Any, Dict, Iterable

from dotenv import load_dotenv

from media_pipeline.core.exceptions import InputError
from media_pipeline.core.job_processing.entrypoint import build_job_processor
from media_pipeline.core.job_processing.lambda_utils import parse_job_record
from media_pipeline.core.job_processing.processor import JobProcessor
from media_pipeline.observability import configure_logging

# Load environment variables from .env if present
load_dotenv()

configure_logging(os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

_processor: JobProcessor | None = None
_event_loop: asyncio.AbstractEventLoop | None = None


def get_processor() -> JobProcessor:
    """Build the processor on cold start and reuse it for warm invocations."""
    global _processor
    if _processor is None:
        _processor = build_job_processor()
    return _processor


def _get_event_loop() -> asyncio.AbstractEventLoop:
    # The pooled engine binds connections to a loop, so one loop lives as
    # long as the container.
    global _event_loop
    if _event_loop is None or _event_loop.is_closed():
        _event_loop = asyncio.new_event_loop()
    return _event_loop


async def process_records(
    records: Iterable[Dict[str, Any]],
    processor: JobProcessor,
) -> Dict[str, Any]:
    """
    Process SQS records one at a time.

    Args:
        records: Raw SQS records from the Lambda event
        processor: Job processor

    Returns:
        Dict with processed/skipped counts and per-record results

    Raises:
        Exception: First processing failure, unchanged
    """
    results = []
    skipped = 0

    for record in records:
        message_id = record.get("messageId")
        try:
            job = parse_job_record(record)
        except InputError as e:
            logger.error(
                "Invalid SQS message body",
                extra={"message_id": message_id, "error": str(e)},
            )
            skipped += 1
            results.append(
                {"messageId": message_id, "status": "skipped", "error": str(e)}
            )
            continue

        outcome = await processor.process(job)
        results.append(
            {
                "messageId": message_id,
                "status": "duplicate" if outcome.duplicate else "success",
                "job_id": outcome.job_id,
                "content_hash": outcome.content_hash,
                "duration_ms": outcome.duration_ms,
            }
        )

    return {
        "processed": len(results) - skipped,
        "skipped": skipped,
        "results": results,
    }


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for SQS processing events.

    Args:
        event: SQS event with Records array
        context: Lambda context object

    Returns:
        Dict with processed/skipped counts and per-record results
    """
    records = event.get("Records", [])
    logger.info("handler - Received SQS event", extra={"record_count": len(records)})

    processor = get_processor()
    summary = _get_event_loop().run_until_complete(process_records(records, processor))

    logger.info(
        "handler - Batch complete",
        extra={"processed": summary["processed"], "skipped": summary["skipped"]},
    )
    return summary
