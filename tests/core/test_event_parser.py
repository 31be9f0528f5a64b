"""Tests for SQS record parsing into ProcessingJob."""

import json
from datetime import datetime, timezone

import pytest

from media_pipeline.core.exceptions import InputError
from media_pipeline.core.job_processing.lambda_utils import parse_job_record
from media_pipeline.core.job_processing.models import MediaType


def _record(body, receive_count: str = "1") -> dict:
    return {
        "messageId": "msg-1",
        "receiptHandle": "handle",
        "body": body if isinstance(body, str) else json.dumps(body),
        "attributes": {"ApproximateReceiveCount": receive_count},
    }


@pytest.fixture
def body() -> dict:
    return {
        "jobId": "job-1",
        "bucket": "media-bucket",
        "key": "podcasts/ep1.mp3",
        "mediaType": "audio",
        "createdAt": "2026-03-04T05:06:07Z",
        "retryCount": 2,
    }


def test_parse_camel_case_body(body):
    job = parse_job_record(_record(body))

    assert job.job_id == "job-1"
    assert job.bucket == "media-bucket"
    assert job.key == "podcasts/ep1.mp3"
    assert job.media_type == MediaType.AUDIO
    assert job.created_at == datetime(2026, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
    assert job.retry_count == 2


def test_missing_retry_count_falls_back_to_receive_count(body):
    del body["retryCount"]

    job = parse_job_record(_record(body, receive_count="3"))

    assert job.retry_count == 2


def test_first_delivery_without_retry_count_is_zero(body):
    del body["retryCount"]

    assert parse_job_record(_record(body)).retry_count == 0


@pytest.mark.parametrize(
    "mutation",
    [
        {"mediaType": "video"},
        {"jobId": ""},
        {"retryCount": -1},
        {"createdAt": "yesterday"},
    ],
)
def test_schema_violations_raise_input_error(body, mutation):
    body.update(mutation)

    with pytest.raises(InputError) as exc_info:
        parse_job_record(_record(body))

    assert exc_info.value.details["message_id"] == "msg-1"


def test_missing_field_raises_input_error(body):
    del body["key"]

    with pytest.raises(InputError, match="schema"):
        parse_job_record(_record(body))


def test_invalid_json_raises_input_error():
    with pytest.raises(InputError, match="Invalid JSON"):
        parse_job_record(_record("{not json"))


def test_non_object_body_raises_input_error():
    with pytest.raises(InputError, match="not a JSON object"):
        parse_job_record(_record("[1, 2, 3]"))


def test_empty_body_raises_input_error():
    with pytest.raises(InputError, match="Empty"):
        parse_job_record(_record(""))
