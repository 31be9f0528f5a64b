"""
Database boundary layer: connection management and schema creation.

Exports:
  - create_engine_from_url(), get_engine_from_secret(): Pooled async engines
  - get_async_session_factory(): Session factory for the result store
  - create_schema(): embeddings table DDL

Dependencies: sqlalchemy, asyncpg
"""

from media_pipeline.boundary.db.connection import (
    clear_engine_cache,
    create_engine_from_url,
    get_async_session_factory,
    get_engine_from_secret,
    normalize_database_url,
)
from media_pipeline.boundary.db.create_tables import create_schema, schema_statements

__all__ = [
    "clear_engine_cache",
    "create_engine_from_url",
    "get_async_session_factory",
    "get_engine_from_secret",
    "normalize_database_url",
    "create_schema",
    "schema_statements",
]
