"""
SQS Lambda event envelope.

Dependencies: pydantic
System role: Typed view of the records Lambda receives from SQS
"""

from pydantic import BaseModel, Field


class SQSRecord(BaseModel):
    """Single SQS record wrapper."""

    messageId: str
    receiptHandle: str = ""
    body: str  # JSON string containing a ProcessingJob
    attributes: dict = Field(default_factory=dict)
    messageAttributes: dict = Field(default_factory=dict)
    md5OfBody: str = ""

    @property
    def receive_count(self) -> int:
        """SQS ApproximateReceiveCount, 1 when absent."""
        try:
            return int(self.attributes.get("ApproximateReceiveCount", 1))
        except (TypeError, ValueError):
            return 1
