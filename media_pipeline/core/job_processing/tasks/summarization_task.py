"""
Summarization task using a LangChain chat model.

Produces a short natural-language summary of the source content.

Dependencies: langchain_core
System role: Second stage of the job processor
"""

import asyncio
from typing import Any, Awaitable, Callable

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from media_pipeline.core.exceptions import SummarizationFailed
from media_pipeline.core.job_processing.retry import with_retry

SUMMARY_SYSTEM_PROMPT = (
    "Summarize the following text concisely in 2-4 sentences. "
    "Output only the summary, no preamble."
)


def message_text(message: BaseMessage) -> str:
    """
    Extract plain text from a chat model response.

    Some providers return a list of content blocks instead of a string.
    """
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class SummarizationTask:
    """Summarize source content with bounded retries."""

    def __init__(
        self,
        chat_model: BaseChatModel,
        max_input_chars: int = 12000,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """
        Initialize summarization task.

        Args:
            chat_model: Configured chat model (temperature and max tokens fixed)
            max_input_chars: Content is cut to this many characters before submission
            max_attempts: Attempts before SummarizationFailed
            base_delay: Linear backoff unit in seconds
            sleep: Awaitable sleep used between attempts
        """
        self._chat_model = chat_model
        self._max_input_chars = max_input_chars
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._sleep = sleep

    async def summarize(self, content: str, job_id: str) -> str:
        """
        Summarize content.

        Args:
            content: Decoded source content
            job_id: Job identifier for log correlation

        Returns:
            str: Non-empty summary

        Raises:
            SummarizationFailed: All attempts failed or returned nothing
        """
        messages = [
            SystemMessage(content=SUMMARY_SYSTEM_PROMPT),
            HumanMessage(content=content[: self._max_input_chars]),
        ]

        async def _summarize_once() -> str:
            response = await self._chat_model.ainvoke(messages)
            return message_text(response).strip()

        return await with_retry(
            _summarize_once,
            job_id=job_id,
            stage="summarization",
            max_attempts=self._max_attempts,
            base_delay=self._base_delay,
            failure=SummarizationFailed,
            sleep=self._sleep,
        )
