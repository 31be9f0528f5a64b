"""
Result store for processed jobs.

Writes summary, embedding and metadata to the pgvector-backed
``embeddings`` table in a single transaction. ``content_hash`` is unique,
so a redelivered job whose content was already stored is reported as a
duplicate instead of producing a second row.

Dependencies: sqlalchemy, asyncpg
System role: Database persistence layer for the job processor
"""

import json
import logging
import uuid
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from media_pipeline.core.exceptions import DimensionMismatchError, PersistenceError

logger = logging.getLogger(__name__)

INSERT_RESULT_SQL = text("""
    INSERT INTO embeddings (
        id, job_id, content_hash, summary, embedding, metadata, created_at
    ) VALUES (
        :id, :job_id, :content_hash, :summary,
        CAST(CAST(:embedding AS text) AS vector), CAST(:metadata AS jsonb), NOW()
    )
    ON CONFLICT (content_hash) DO NOTHING
    RETURNING id
""")


def format_vector(embedding: list[float]) -> str:
    """Render an embedding as a pgvector literal, e.g. ``[0.1,0.2]``."""
    return "[" + ",".join(repr(float(value)) for value in embedding) + "]"


class ResultStore:
    """Persist job results into the embeddings table."""

    def __init__(self, session_factory: async_sessionmaker, dimensions: int = 1536) -> None:
        """
        Initialize with a session factory.

        Args:
            session_factory: Async session factory bound to the pooled engine
            dimensions: Vector column dimensionality of the embeddings table
        """
        self._session_factory = session_factory
        self.dimensions = dimensions

    async def insert(
        self,
        job_id: str,
        content_hash: str,
        summary: str,
        embedding: list[float],
        metadata: dict[str, Any],
    ) -> bool:
        """
        Insert one result record.

        Args:
            job_id: Job identifier
            content_hash: Content fingerprint (unique key)
            summary: Summary text
            embedding: Embedding vector
            metadata: JSON-serializable metadata map

        Returns:
            bool: True when a row was written, False for an existing content hash

        Raises:
            DimensionMismatchError: Embedding length differs from the schema
            PersistenceError: Serialization or database failure
        """
        if len(embedding) != self.dimensions:
            raise DimensionMismatchError(job_id, self.dimensions, len(embedding))

        try:
            metadata_json = json.dumps(metadata)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Metadata is not JSON serializable: {e}", job_id) from e

        params = {
            "id": str(uuid.uuid4()),
            "job_id": job_id,
            "content_hash": content_hash,
            "summary": summary,
            "embedding": format_vector(embedding),
            "metadata": metadata_json,
        }

        async with self._session_factory() as session:
            try:
                result = await session.execute(INSERT_RESULT_SQL, params)
                row = result.fetchone()
                await session.commit()
            except SQLAlchemyError as e:
                logger.error(
                    "insert - %s: %s",
                    type(e).__name__,
                    e,
                    extra={"job_id": job_id, "content_hash": content_hash},
                )
                await session.rollback()
                raise PersistenceError(f"Failed to write result record: {e}", job_id) from e

        if row is None:
            logger.info(
                "insert - Duplicate content hash, record already stored",
                extra={"job_id": job_id, "content_hash": content_hash},
            )
            return False
        return True
