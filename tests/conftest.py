"""
Shared test fixtures and configuration for entire test suite.

Provides: job factories, fake S3 client, fake LLM clients, in-memory result store
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

from media_pipeline.core.job_processing.models import MediaType, ProcessingJob
from media_pipeline.core.job_processing.processor import JobProcessor
from media_pipeline.core.job_processing.tasks import (
    EmbeddingTask,
    S3FetchTask,
    SummarizationTask,
)

from tests.fakes import DIMENSIONS, InMemoryResultStore, make_s3_client


@pytest.fixture
def job_factory():
    """Build ProcessingJob instances with sensible defaults."""

    def _make(**overrides) -> ProcessingJob:
        values = {
            "job_id": str(uuid.uuid4()),
            "bucket": "media-bucket",
            "key": "doc1.txt",
            "media_type": MediaType.TEXT,
            "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
            "retry_count": 0,
        }
        values.update(overrides)
        return ProcessingJob(**values)

    return _make


@pytest.fixture
def chat_model():
    """Chat model double returning a fixed summary."""
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content="A short summary of the document."))
    return model


@pytest.fixture
def embeddings():
    """Embeddings double returning a vector of the expected size."""
    model = MagicMock()
    model.aembed_query = AsyncMock(return_value=[0.01] * DIMENSIONS)
    return model


@pytest.fixture
def no_sleep():
    """Awaitable sleep that returns immediately and records delays."""
    return AsyncMock(return_value=None)


@pytest.fixture
def result_store():
    return InMemoryResultStore()


@pytest.fixture
def build_processor(chat_model, embeddings, no_sleep, result_store):
    """Assemble a JobProcessor over fakes; objects maps (bucket, key) -> bytes."""

    def _build(objects: dict[tuple[str, str], bytes]) -> JobProcessor:
        return JobProcessor(
            fetch_task=S3FetchTask(s3_client=make_s3_client(objects)),
            summarization_task=SummarizationTask(chat_model, sleep=no_sleep),
            embedding_task=EmbeddingTask(embeddings, sleep=no_sleep),
            result_store=result_store,
        )

    return _build
