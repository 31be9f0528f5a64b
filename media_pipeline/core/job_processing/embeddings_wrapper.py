"""
Google Generative AI Embeddings wrapper with fixed output dimensionality.

Wraps GoogleGenerativeAIEmbeddings so every call produces vectors that fit
the ``embeddings.embedding`` column. The base class does not apply
output_dimensionality unless it is passed on each call.

Dependencies: langchain_google_genai
System role: Embedding dimension consistency for the pgvector column
"""

import logging
from typing import List

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings that always request a fixed dimension."""

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID (gemini-embedding-001 supports up to 3072)
            output_dimensionality: Fixed dimension for all embeddings
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            "__init__ - Initialized with model=%s, output_dimensionality=%s",
            model,
            output_dimensionality,
        )

    def embed_query(self, text: str, **kwargs) -> List[float]:
        """Embed query with the configured dimension unless overridden."""
        kwargs["output_dimensionality"] = (
            kwargs.get("output_dimensionality") or self._output_dimensionality
        )
        return super().embed_query(text, **kwargs)

    async def aembed_query(self, text: str, **kwargs) -> List[float]:
        """Async variant of embed_query with the configured dimension."""
        kwargs["output_dimensionality"] = (
            kwargs.get("output_dimensionality") or self._output_dimensionality
        )
        return await super().aembed_query(text, **kwargs)
