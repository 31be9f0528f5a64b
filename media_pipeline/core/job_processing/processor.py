"""
Job processor.

Runs one ProcessingJob through fetch -> fingerprint -> summarize -> embed ->
persist. Every stage must finish before the next starts; any failure moves
the job to FAILED and the original exception is re-raised so the queue can
redeliver or dead-letter the message. No state is kept between deliveries.

Dependencies: tasks, database, fingerprint, observability
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time

from media_pipeline.core.job_processing.database import ResultStore
from media_pipeline.core.job_processing.fingerprint import fingerprint
from media_pipeline.core.job_processing.models import (
    JobState,
    ProcessingJob,
    ProcessingOutcome,
    ResultRecord,
)
from media_pipeline.core.job_processing.tasks import (
    EmbeddingTask,
    S3FetchTask,
    SummarizationTask,
)
from media_pipeline.observability import log_job_lifecycle

logger = logging.getLogger(__name__)


class JobProcessor:
    """Process a single queued job end to end."""

    def __init__(
        self,
        fetch_task: S3FetchTask,
        summarization_task: SummarizationTask,
        embedding_task: EmbeddingTask,
        result_store: ResultStore,
    ) -> None:
        """
        Initialize processor with its collaborators.

        Args:
            fetch_task: Reads source bytes from object storage
            summarization_task: Produces the summary (retrying)
            embedding_task: Produces the embedding (retrying)
            result_store: Persists the result record
        """
        self._fetch_task = fetch_task
        self._summarization_task = summarization_task
        self._embedding_task = embedding_task
        self._result_store = result_store

    async def process(self, job: ProcessingJob) -> ProcessingOutcome:
        """
        Process one job delivery.

        Args:
            job: Validated job message

        Returns:
            ProcessingOutcome: Completed job details

        Raises:
            FetchError: Source object missing, empty or unreadable
            SummarizationFailed: Summary retries exhausted
            EmbeddingFailed: Embedding retries exhausted
            PersistenceError: Result could not be written
        """
        start_time = time.perf_counter()
        job_id = job.job_id
        state = JobState.RECEIVED
        log_job_lifecycle(
            logger,
            job_id,
            state.value,
            "Starting processing",
            bucket=job.bucket,
            key=job.key,
            source=job.source_location,
            media_type=job.media_type.value,
            retry_count=job.retry_count,
        )

        try:
            state = self._transition(job_id, JobState.FETCHING)
            content = await self._fetch_task.fetch(job.bucket, job.key)
            content_hash = fingerprint(content)
            text = content.decode("utf-8", errors="replace")

            state = self._transition(job_id, JobState.SUMMARIZING)
            summary = await self._summarization_task.summarize(text, job_id)

            state = self._transition(job_id, JobState.EMBEDDING)
            embedding = await self._embedding_task.embed(summary, job_id)

            state = self._transition(job_id, JobState.PERSISTING)
            record = ResultRecord(
                job_id=job_id,
                content_hash=content_hash,
                summary=summary,
                embedding=embedding,
                metadata={
                    "bucket": job.bucket,
                    "key": job.key,
                    "mediaType": job.media_type.value,
                    "retryCount": job.retry_count,
                },
            )
            written = await self._result_store.insert(
                record.job_id,
                record.content_hash,
                record.summary,
                record.embedding,
                record.metadata,
            )

        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            log_job_lifecycle(
                logger,
                job_id,
                JobState.FAILED.value,
                "Processing failed",
                level=logging.ERROR,
                failed_stage=state.value,
                bucket=job.bucket,
                key=job.key,
                retry_count=job.retry_count,
                duration_ms=duration_ms,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log_job_lifecycle(
            logger,
            job_id,
            JobState.COMPLETED.value,
            "Processing completed",
            bucket=job.bucket,
            key=job.key,
            content_hash=content_hash,
            duplicate=not written,
            duration_ms=duration_ms,
        )
        return ProcessingOutcome(
            job_id=job_id,
            content_hash=content_hash,
            duplicate=not written,
            duration_ms=duration_ms,
        )

    def _transition(self, job_id: str, state: JobState) -> JobState:
        log_job_lifecycle(logger, job_id, state.value, f"Entering {state.value}")
        return state
