"""Unit tests for the fetch, summarization and embedding tasks."""

import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from media_pipeline.core.exceptions import (
    EmbeddingFailed,
    FetchError,
    ObjectEmptyError,
    ObjectNotFoundError,
    SummarizationFailed,
)
from media_pipeline.core.job_processing.tasks import (
    SUMMARY_SYSTEM_PROMPT,
    EmbeddingTask,
    S3FetchTask,
    SummarizationTask,
)
from media_pipeline.core.job_processing.tasks.summarization_task import message_text

from tests.fakes import make_s3_client


# ============================================================================
# S3FetchTask
# ============================================================================


class TestS3FetchTask:
    @pytest.mark.asyncio
    async def test_fetch_returns_object_bytes(self):
        task = S3FetchTask(s3_client=make_s3_client({("bucket", "a.txt"): b"hello"}))

        assert await task.fetch("bucket", "a.txt") == b"hello"

    @pytest.mark.asyncio
    async def test_missing_object_raises_not_found(self):
        task = S3FetchTask(s3_client=make_s3_client({}))

        with pytest.raises(ObjectNotFoundError) as exc_info:
            await task.fetch("bucket", "missing.txt")

        assert exc_info.value.bucket == "bucket"
        assert exc_info.value.key == "missing.txt"

    @pytest.mark.asyncio
    async def test_empty_object_raises_object_empty(self):
        task = S3FetchTask(s3_client=make_s3_client({("bucket", "empty.txt"): b""}))

        with pytest.raises(ObjectEmptyError):
            await task.fetch("bucket", "empty.txt")

    @pytest.mark.asyncio
    async def test_other_client_errors_raise_fetch_error(self):
        client = MagicMock()
        client.get_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GetObject"
        )
        task = S3FetchTask(s3_client=client)

        with pytest.raises(FetchError) as exc_info:
            await task.fetch("bucket", "secret.txt")

        assert not isinstance(exc_info.value, ObjectNotFoundError)

    @pytest.mark.asyncio
    async def test_requires_bucket_and_key(self):
        task = S3FetchTask(s3_client=MagicMock())

        with pytest.raises(FetchError):
            await task.fetch("bucket", "")

    @pytest.mark.asyncio
    async def test_passes_bucket_and_key_to_client(self):
        client = MagicMock()
        client.get_object.return_value = {"Body": io.BytesIO(b"data")}
        task = S3FetchTask(s3_client=client)

        await task.fetch("media", "folder/file.md")

        client.get_object.assert_called_once_with(Bucket="media", Key="folder/file.md")


# ============================================================================
# SummarizationTask
# ============================================================================


class TestSummarizationTask:
    @pytest.mark.asyncio
    async def test_returns_stripped_summary(self, no_sleep):
        model = MagicMock()
        model.ainvoke = AsyncMock(return_value=AIMessage(content="  Concise summary.\n"))
        task = SummarizationTask(model, sleep=no_sleep)

        assert await task.summarize("some text", "job-1") == "Concise summary."

    @pytest.mark.asyncio
    async def test_truncates_content_to_budget(self, chat_model, no_sleep):
        task = SummarizationTask(chat_model, max_input_chars=12000, sleep=no_sleep)
        content = "a" * 12000 + "b" * 500

        await task.summarize(content, "job-1")

        messages = chat_model.ainvoke.await_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == SUMMARY_SYSTEM_PROMPT
        assert isinstance(messages[1], HumanMessage)
        assert messages[1].content == content[:12000]

    @pytest.mark.asyncio
    async def test_short_content_is_submitted_unchanged(self, chat_model, no_sleep):
        task = SummarizationTask(chat_model, sleep=no_sleep)

        await task.summarize("short", "job-1")

        assert chat_model.ainvoke.await_args.args[0][1].content == "short"

    @pytest.mark.asyncio
    async def test_empty_summary_is_retried(self, no_sleep):
        model = MagicMock()
        model.ainvoke = AsyncMock(
            side_effect=[AIMessage(content="   "), AIMessage(content="Real summary.")]
        )
        task = SummarizationTask(model, sleep=no_sleep)

        assert await task.summarize("text", "job-1") == "Real summary."
        assert model.ainvoke.await_count == 2

    @pytest.mark.asyncio
    async def test_exhaustion_raises_summarization_failed(self, no_sleep):
        model = MagicMock()
        model.ainvoke = AsyncMock(side_effect=TimeoutError("llm timeout"))
        task = SummarizationTask(model, max_attempts=3, sleep=no_sleep)

        with pytest.raises(SummarizationFailed) as exc_info:
            await task.summarize("text", "job-42")

        assert exc_info.value.job_id == "job-42"
        assert isinstance(exc_info.value.cause, TimeoutError)
        assert model.ainvoke.await_count == 3

    def test_message_text_joins_content_blocks(self):
        message = AIMessage(content=[{"type": "text", "text": "Part one. "}, "Part two."])

        assert message_text(message) == "Part one. Part two."


# ============================================================================
# EmbeddingTask
# ============================================================================


class TestEmbeddingTask:
    @pytest.mark.asyncio
    async def test_returns_vector(self, embeddings, no_sleep):
        task = EmbeddingTask(embeddings, sleep=no_sleep)

        vector = await task.embed("summary", "job-1")

        assert len(vector) == 1536
        assert all(isinstance(v, float) for v in vector)

    @pytest.mark.asyncio
    async def test_truncates_input_to_budget(self, embeddings, no_sleep):
        task = EmbeddingTask(embeddings, max_input_chars=8000, sleep=no_sleep)
        text = "x" * 9000

        await task.embed(text, "job-1")

        embeddings.aembed_query.assert_awaited_once_with("x" * 8000)

    @pytest.mark.asyncio
    async def test_empty_vector_is_retried(self, no_sleep):
        model = MagicMock()
        model.aembed_query = AsyncMock(side_effect=[[], [0.5, 0.25]])
        task = EmbeddingTask(model, sleep=no_sleep)

        assert await task.embed("summary", "job-1") == [0.5, 0.25]

    @pytest.mark.asyncio
    async def test_exhaustion_raises_embedding_failed(self, no_sleep):
        model = MagicMock()
        model.aembed_query = AsyncMock(side_effect=ConnectionError("reset"))
        task = EmbeddingTask(model, sleep=no_sleep)

        with pytest.raises(EmbeddingFailed) as exc_info:
            await task.embed("summary", "job-3")

        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert model.aembed_query.await_count == 3
