"""
Embedding generation task using a LangChain embeddings model.

Embeds the summary (not the raw content) into a fixed-length vector.

Dependencies: langchain_core
System role: Third stage of the job processor
"""

import asyncio
from typing import Any, Awaitable, Callable

from langchain_core.embeddings import Embeddings

from media_pipeline.core.exceptions import EmbeddingFailed
from media_pipeline.core.job_processing.retry import with_retry


class EmbeddingTask:
    """Generate an embedding vector with bounded retries."""

    def __init__(
        self,
        embeddings: Embeddings,
        max_input_chars: int = 8000,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """
        Initialize embedding task.

        Args:
            embeddings: LangChain embeddings model
            max_input_chars: Text is cut to this many characters before submission
            max_attempts: Attempts before EmbeddingFailed
            base_delay: Linear backoff unit in seconds
            sleep: Awaitable sleep used between attempts
        """
        self._embeddings = embeddings
        self._max_input_chars = max_input_chars
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._sleep = sleep

    async def embed(self, text: str, job_id: str) -> list[float]:
        """
        Embed text.

        Args:
            text: Summary text
            job_id: Job identifier for log correlation

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingFailed: All attempts failed or returned an empty vector
        """
        truncated = text[: self._max_input_chars]

        async def _embed_once() -> list[float]:
            vector = await self._embeddings.aembed_query(truncated)
            return [float(value) for value in vector or []]

        return await with_retry(
            _embed_once,
            job_id=job_id,
            stage="embedding",
            max_attempts=self._max_attempts,
            base_delay=self._base_delay,
            failure=EmbeddingFailed,
            sleep=self._sleep,
        )
