"""
Database schema creation script.

Creates the pgvector extension and the ``embeddings`` table the result
store writes to. ``content_hash`` carries a unique constraint so that
redelivered jobs cannot store the same content twice.

Dependencies: sqlalchemy, media_pipeline.configs
System role: Database schema initialization

Usage:
    python -m media_pipeline.boundary.db.create_tables
"""

import asyncio

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine


def schema_statements(dimensions: int) -> list[str]:
    """
    DDL for the result store, in execution order.

    Args:
        dimensions: Embedding vector dimensionality

    Returns:
        list[str]: Idempotent DDL statements
    """
    if dimensions < 1:
        raise ValueError("dimensions must be positive")
    return [
        "CREATE EXTENSION IF NOT EXISTS vector",
        f"""
        CREATE TABLE IF NOT EXISTS embeddings (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            job_id TEXT NOT NULL,
            content_hash CHAR(64) NOT NULL,
            summary TEXT NOT NULL,
            embedding vector({dimensions}) NOT NULL,
            metadata JSONB NOT NULL DEFAULT '{{}}'::jsonb,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT embeddings_content_hash_key UNIQUE (content_hash)
        )
        """,
        "CREATE INDEX IF NOT EXISTS embeddings_job_id_idx ON embeddings (job_id)",
        """
        CREATE INDEX IF NOT EXISTS embeddings_embedding_hnsw_idx
        ON embeddings USING hnsw (embedding vector_cosine_ops)
        """,
    ]


async def create_schema(engine: AsyncEngine, dimensions: int = 1536) -> None:
    """
    Create extension, table and indexes.

    Idempotent: every statement uses IF NOT EXISTS, so safe to run
    multiple times.

    Args:
        engine: Async engine connected as a role allowed to run DDL
        dimensions: Embedding vector dimensionality
    """
    async with engine.begin() as conn:
        for statement in schema_statements(dimensions):
            await conn.execute(text(statement))


async def _main() -> None:
    from media_pipeline.boundary.aws.secrets_client import SecretsClient
    from media_pipeline.boundary.db.connection import (
        create_engine_from_url,
        get_engine_from_secret,
    )
    from media_pipeline.core.job_processing.configs import get_processor_settings

    settings = get_processor_settings()
    if settings.database_url:
        engine = create_engine_from_url(settings.database_url, ssl=None)
    else:
        engine = get_engine_from_secret(
            SecretsClient(region=settings.aws_region),
            settings.db_secret_arn,
            host=settings.db_host,
            database=settings.db_name,
        )
    try:
        await create_schema(engine, settings.embedding_dimensions)
    finally:
        await engine.dispose()
    print("embeddings table created successfully.")


if __name__ == "__main__":
    asyncio.run(_main())
