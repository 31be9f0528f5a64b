"""
Processing job message schema.

Validates the job messages that the ingestion trigger places on SQS.
Wire format uses camelCase keys; Python attributes are snake_case.

Dependencies: pydantic
System role: Data validation and contract definition
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MediaType(str, Enum):
    """Kind of media the source object holds."""

    AUDIO = "audio"
    TEXT = "text"


class ProcessingJob(BaseModel):
    """One unit of work delivered by the processing queue."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "jobId": "550e8400-e29b-41d4-a716-446655440000",
                "bucket": "media-bucket",
                "key": "uploads/doc1.txt",
                "mediaType": "text",
                "createdAt": "2026-01-01T00:00:00Z",
                "retryCount": 0,
            }
        },
    )

    job_id: str = Field(..., alias="jobId", min_length=1, description="Job ID assigned at ingestion")
    bucket: str = Field(..., min_length=1, description="Source bucket")
    key: str = Field(..., min_length=1, description="Source object key")
    media_type: MediaType = Field(..., alias="mediaType")
    created_at: datetime = Field(..., alias="createdAt")
    retry_count: int = Field(
        default=0,
        alias="retryCount",
        ge=0,
        description="Advisory redelivery count, not authoritative",
    )

    @property
    def source_location(self) -> str:
        """bucket/key pair as a single string."""
        return f"{self.bucket}/{self.key}"
