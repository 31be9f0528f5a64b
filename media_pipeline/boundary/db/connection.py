"""
Database connection management.

Provides the pooled async engine used by the result store. Engines are
cached per process keyed by (secret reference, host, database), so every
in-flight job in a worker shares one connection pool and separate worker
processes each open their own.

Dependencies: sqlalchemy, asyncpg
System role: Database connection lifecycle management
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from media_pipeline.boundary.aws.secrets_client import SecretsClient

logger = logging.getLogger(__name__)

_engine_cache: dict[tuple[str, str, str], AsyncEngine] = {}


def normalize_database_url(database_url: str) -> str:
    """Convert postgres:// and postgresql:// URLs to the asyncpg dialect."""
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url


def create_engine_from_url(
    database_url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    ssl: str | None = "require",
) -> AsyncEngine:
    """
    Create a pooled async engine.

    pool_pre_ping=True verifies connections before use so stale
    connections left over from a frozen Lambda container are replaced.

    Args:
        database_url: PostgreSQL URL (any postgres scheme)
        pool_size: Connection pool size
        max_overflow: Extra connections allowed above pool_size
        ssl: asyncpg ssl mode, None to disable

    Returns:
        AsyncEngine: Configured engine
    """
    connect_args = {"ssl": ssl} if ssl else {}
    return create_async_engine(
        normalize_database_url(database_url),
        echo=False,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def get_engine_from_secret(
    secrets_client: SecretsClient,
    secret_id: str,
    host: str | None = None,
    database: str | None = None,
) -> AsyncEngine:
    """
    Get the process-wide engine for a credentials secret.

    Args:
        secrets_client: Secrets resolver
        secret_id: Database credentials secret reference
        host: Host override
        database: Database name override

    Returns:
        AsyncEngine: Cached engine for (secret_id, host, database)
    """
    cache_key = (secret_id, host or "", database or "")
    engine = _engine_cache.get(cache_key)
    if engine is None:
        database_url = secrets_client.resolve_database_url(secret_id, host, database)
        engine = create_engine_from_url(database_url)
        _engine_cache[cache_key] = engine
        logger.info(
            "get_engine_from_secret - Engine created",
            extra={"secret_id": secret_id, "db_host": host or "", "database": database or ""},
        )
    return engine


def clear_engine_cache() -> None:
    """Forget cached engines (tests and local tooling)."""
    _engine_cache.clear()


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory bound to an engine.

    Args:
        engine: Pooled async engine

    Returns:
        async_sessionmaker: Session factory with manual transaction control
    """
    return async_sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
