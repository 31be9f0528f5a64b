"""
Result models for the job processor.

Dependencies: pydantic
System role: Persisted outcome and return type of JobProcessor.process()
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class JobState(str, Enum):
    """Job processor states. COMPLETED and FAILED are terminal."""

    RECEIVED = "RECEIVED"
    FETCHING = "FETCHING"
    SUMMARIZING = "SUMMARIZING"
    EMBEDDING = "EMBEDDING"
    PERSISTING = "PERSISTING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class ResultRecord(BaseModel):
    """Summary and embedding persisted for one processed job."""

    job_id: str
    content_hash: str = Field(description="SHA-256 hex digest of the source bytes")
    summary: str
    embedding: list[float]
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ProcessingOutcome(BaseModel):
    """Result of a successful processing attempt."""

    job_id: str
    content_hash: str
    state: JobState = JobState.COMPLETED
    duplicate: bool = Field(
        default=False,
        description="True when a record with the same content hash already existed",
    )
    duration_ms: float
