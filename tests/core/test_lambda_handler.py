"""
Test suite for the SQS processing Lambda handler.

Tests record-level handling: malformed messages are skipped, processing
failures propagate so SQS redelivers, and the handler drives the batch on
its persistent event loop.

System role: Verification of the processing Lambda entry point
"""

import json
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from media_pipeline.core.exceptions import SummarizationFailed
from media_pipeline.core.job_processing import lambda_handler
from media_pipeline.core.job_processing.lambda_handler import handler, process_records
from media_pipeline.core.job_processing.models import ProcessingOutcome


def _sqs_record(message_id: str, body) -> dict:
    return {
        "messageId": message_id,
        "receiptHandle": f"handle-{message_id}",
        "body": body if isinstance(body, str) else json.dumps(body),
        "attributes": {"ApproximateReceiveCount": "1"},
        "messageAttributes": {},
    }


def _job_body(job_id: str, key: str = "doc1.txt") -> dict:
    return {
        "jobId": job_id,
        "bucket": "media-bucket",
        "key": key,
        "mediaType": "text",
        "createdAt": "2026-01-01T00:00:00Z",
        "retryCount": 0,
    }


class TestProcessRecords:
    """Test suite for process_records()."""

    @pytest.mark.asyncio
    async def test_malformed_record_should_be_skipped_and_next_processed(
        self, build_processor, result_store, caplog
    ) -> None:
        # Arrange
        caplog.set_level(logging.INFO)
        processor = build_processor({("media-bucket", "doc1.txt"): b"hello world"})
        records = [
            _sqs_record("m-1", "not json {"),
            _sqs_record("m-2", _job_body("job-2")),
        ]

        # Act
        summary = await process_records(records, processor)

        # Assert
        assert summary["processed"] == 1
        assert summary["skipped"] == 1
        assert summary["results"][0]["status"] == "skipped"
        assert summary["results"][1]["status"] == "success"
        assert summary["results"][1]["job_id"] == "job-2"
        assert [r["job_id"] for r in result_store.records] == ["job-2"]

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].message_id == "m-1"

    @pytest.mark.asyncio
    async def test_schema_violation_should_be_skipped(self, build_processor) -> None:
        processor = build_processor({})
        body = _job_body("job-3")
        del body["bucket"]

        summary = await process_records([_sqs_record("m-3", body)], processor)

        assert summary["processed"] == 0
        assert summary["skipped"] == 1
        assert summary["results"][0]["status"] == "skipped"
        assert summary["results"][0]["messageId"] == "m-3"

    @pytest.mark.asyncio
    async def test_processing_failure_should_propagate(self) -> None:
        # Arrange
        processor = MagicMock()
        processor.process = AsyncMock(
            side_effect=SummarizationFailed(job_id="job-4", cause=RuntimeError("down"))
        )

        # Act / Assert
        with pytest.raises(SummarizationFailed):
            await process_records([_sqs_record("m-4", _job_body("job-4"))], processor)

    @pytest.mark.asyncio
    async def test_duplicate_content_should_report_duplicate_status(self) -> None:
        processor = MagicMock()
        processor.process = AsyncMock(
            return_value=ProcessingOutcome(
                job_id="job-5", content_hash="f" * 64, duplicate=True, duration_ms=3.0
            )
        )

        summary = await process_records([_sqs_record("m-5", _job_body("job-5"))], processor)

        assert summary["results"][0]["status"] == "duplicate"
        assert summary["processed"] == 1


class TestHandler:
    """Test suite for handler()."""

    def test_handler_should_process_event_records(self) -> None:
        # Arrange
        processor = MagicMock()
        processor.process = AsyncMock(
            return_value=ProcessingOutcome(job_id="job-6", content_hash="0" * 64, duration_ms=1.0)
        )
        event = {"Records": [_sqs_record("m-6", _job_body("job-6"))]}

        # Act
        with patch.object(lambda_handler, "get_processor", return_value=processor):
            summary = handler(event, None)

        # Assert
        assert summary["processed"] == 1
        assert summary["skipped"] == 0
        job = processor.process.await_args.args[0]
        assert job.job_id == "job-6"

    def test_handler_should_reuse_event_loop_across_invocations(self) -> None:
        processor = MagicMock()
        processor.process = AsyncMock()

        with patch.object(lambda_handler, "get_processor", return_value=processor):
            handler({"Records": []}, None)
            first_loop = lambda_handler._get_event_loop()
            handler({"Records": []}, None)

        assert lambda_handler._get_event_loop() is first_loop

    def test_get_processor_should_build_once(self) -> None:
        built = MagicMock()
        with patch.object(lambda_handler, "_processor", None), patch.object(
            lambda_handler, "build_job_processor", return_value=built
        ) as build:
            assert lambda_handler.get_processor() is built
            assert lambda_handler.get_processor() is built

        build.assert_called_once()
