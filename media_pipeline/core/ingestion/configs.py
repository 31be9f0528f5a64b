"""
Configuration settings for the ingestion trigger.

Dependencies: pydantic, pydantic_settings
System role: Ingestion Lambda configuration
"""

from functools import lru_cache

from pydantic import Field

from media_pipeline.configs.base import BaseSettings


class IngestionSettings(BaseSettings):
    """Settings for the S3 -> SQS ingestion trigger."""

    media_bucket_name: str = Field(
        default="",
        description="Only objects from this bucket are enqueued",
    )
    processing_queue_url: str = Field(
        default="",
        description="SQS queue receiving processing jobs",
    )


@lru_cache
def get_ingestion_settings() -> IngestionSettings:
    """
    Get cached ingestion settings instance.

    Returns:
        IngestionSettings: Singleton settings loaded from environment
    """
    return IngestionSettings()
