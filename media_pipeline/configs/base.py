"""
Shared pipeline settings.

Every Lambda in the pipeline reads its settings from environment variables
(or a local .env file during development). Fields common to the ingestion
trigger and the job processor live here.

Dependencies: pydantic_settings
System role: Parent class of the ingestion and processor settings
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Settings shared by the ingestion and processing Lambdas."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment stage the Lambda runs in (development, staging, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for the JSON log handler",
    )
    aws_region: str = Field(
        default="us-east-1",
        description="Region used for the S3, SQS, Secrets Manager and Bedrock clients",
    )
