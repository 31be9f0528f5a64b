"""
SQS record parsing utilities for Lambda.
"""

import json
import logging
from typing import Any, Dict

from pydantic import ValidationError

from media_pipeline.core.exceptions import InputError
from media_pipeline.core.job_processing.models import ProcessingJob, SQSRecord

logger = logging.getLogger(__name__)


def parse_job_record(record: Dict[str, Any]) -> ProcessingJob:
    """
    Parse and validate one SQS record into a ProcessingJob.

    When the body carries no retryCount, SQS's ApproximateReceiveCount
    attribute is used instead (first delivery = 0).

    Raises:
        InputError: Empty body, invalid JSON or schema violation
    """
    message_id = record.get("messageId")
    try:
        sqs_record = SQSRecord.model_validate(record)
        if not sqs_record.body:
            raise InputError("Empty message body", message_id)

        data = json.loads(sqs_record.body)
        if not isinstance(data, dict):
            raise InputError("Message body is not a JSON object", message_id)

        if data.get("retryCount") is None:
            data["retryCount"] = max(sqs_record.receive_count - 1, 0)

        job = ProcessingJob.model_validate(data)

    except InputError:
        raise
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in message body: {e}", message_id) from e
    except ValidationError as e:
        raise InputError(
            f"Invalid message schema: {e.error_count()} validation error(s)",
            message_id,
            {"errors": [err["loc"] for err in e.errors()]},
        ) from e

    logger.info(
        "parse_job_record - Parsed message",
        extra={"message_id": message_id, "job_id": job.job_id},
    )
    return job
