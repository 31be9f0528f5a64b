"""
Task modules for the job processor.

Exports: S3FetchTask, SummarizationTask, EmbeddingTask
"""

from .embedding_task import EmbeddingTask
from .s3_fetch_task import S3FetchTask
from .summarization_task import SUMMARY_SYSTEM_PROMPT, SummarizationTask

__all__ = [
    "S3FetchTask",
    "SummarizationTask",
    "SUMMARY_SYSTEM_PROMPT",
    "EmbeddingTask",
]
