"""
Configuration settings for the job processor.

Provides environment-based configuration for fetching, summarization,
embedding, retries and persistence. Field names map directly onto the
Lambda environment variables (MEDIA_BUCKET_NAME, DB_SECRET_ARN, ...).

Dependencies: pydantic, pydantic_settings
System role: Centralized processor configuration
"""

from functools import lru_cache

from pydantic import AliasChoices, Field

from media_pipeline.configs.base import BaseSettings
from media_pipeline.core.exceptions import ConfigurationError


class ProcessorSettings(BaseSettings):
    """Settings for the queue-driven job processor."""

    # Source storage
    media_bucket_name: str = Field(
        default="",
        description="S3 bucket that holds uploaded media",
    )
    processing_queue_url: str = Field(
        default="",
        description="SQS queue the processor consumes (informational)",
    )

    # Secrets
    llm_secret_arn: str = Field(
        default="",
        validation_alias=AliasChoices("llm_secret_arn", "openai_secret_arn"),
        description="Secrets Manager reference holding the LLM provider API key",
    )
    db_secret_arn: str = Field(
        default="",
        description="Secrets Manager reference holding database credentials",
    )
    db_host: str | None = Field(
        default=None,
        description="Database host override (falls back to the secret's host)",
    )
    db_name: str = Field(
        default="mediapipeline",
        description="Database name",
    )
    database_url: str = Field(
        default="",
        description="Direct connection string for local development (skips DB_SECRET_ARN)",
    )

    # LLM provider
    llm_provider: str = Field(
        default="openai",
        description="LLM provider: 'openai', 'google' or 'bedrock'",
    )
    summary_model_id: str = Field(
        default="gpt-4o-mini",
        description="Chat model used for summaries",
    )
    embedding_model_id: str = Field(
        default="text-embedding-3-small",
        description="Embedding model (must produce embedding_dimensions floats)",
    )
    embedding_dimensions: int = Field(
        default=1536,
        description="Vector column dimensionality of the embeddings table",
    )
    summary_max_tokens: int = Field(
        default=256,
        description="Maximum output tokens for a summary",
    )

    # Input budgets
    summary_max_input_chars: int = Field(
        default=12000,
        description="Characters of source content submitted for summarization",
    )
    embedding_max_input_chars: int = Field(
        default=8000,
        description="Characters of summary submitted for embedding",
    )

    # Retry policy
    max_llm_attempts: int = Field(
        default=3,
        description="Attempts per LLM call before the stage fails",
    )
    llm_retry_base_delay_seconds: float = Field(
        default=1.0,
        description="Linear backoff unit between attempts",
    )


REQUIRED_PROCESSOR_SETTINGS = (
    "media_bucket_name",
    "llm_secret_arn",
    "db_secret_arn",
)


def validate_environment(settings: ProcessorSettings) -> ProcessorSettings:
    """
    Validate required processor settings.

    Args:
        settings: Loaded processor settings

    Returns:
        ProcessorSettings: The same settings when valid

    Raises:
        ConfigurationError: Missing required setting
    """
    required = list(REQUIRED_PROCESSOR_SETTINGS)
    if settings.llm_provider.lower() != "openai":
        required.remove("llm_secret_arn")
    if settings.database_url:
        required.remove("db_secret_arn")

    missing = [name.upper() for name in required if not getattr(settings, name)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}",
            {"missing": missing},
        )
    return settings


@lru_cache
def get_processor_settings() -> ProcessorSettings:
    """
    Get cached processor settings instance.

    Returns:
        ProcessorSettings: Singleton settings loaded from environment
    """
    return ProcessorSettings()
