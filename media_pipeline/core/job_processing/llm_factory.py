"""
Chat model and embeddings construction per LLM provider.

Provider clients are built with their own retries disabled; the
summarization and embedding tasks own the retry policy.

Dependencies: langchain_openai, langchain_google_genai, langchain_aws
System role: LLM client wiring for the job processor
"""

import logging

from langchain_core.embeddings import Embeddings
from langchain_core.language_models.chat_models import BaseChatModel

from media_pipeline.boundary.aws.secrets_client import SecretsClient
from media_pipeline.core.exceptions import ConfigurationError
from media_pipeline.core.job_processing.configs import ProcessorSettings

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai", "google", "bedrock")


def build_llm_clients(
    settings: ProcessorSettings,
    secrets_client: SecretsClient | None = None,
) -> tuple[BaseChatModel, Embeddings]:
    """
    Create the summarization chat model and the embeddings model.

    Args:
        settings: Processor settings (provider, model ids, dimensions)
        secrets_client: Resolver for provider API keys

    Returns:
        tuple: (chat_model, embeddings)

    Raises:
        ConfigurationError: Unknown provider or missing API key
    """
    provider = settings.llm_provider.lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise ConfigurationError(
            f"Unsupported LLM provider: {settings.llm_provider}",
            {"supported": list(SUPPORTED_PROVIDERS)},
        )

    logger.info(
        "build_llm_clients - Building LLM clients",
        extra={
            "provider": provider,
            "summary_model": settings.summary_model_id,
            "embedding_model": settings.embedding_model_id,
        },
    )

    if provider == "openai":
        from langchain_openai import ChatOpenAI, OpenAIEmbeddings

        secrets_client = secrets_client or SecretsClient(region=settings.aws_region)
        api_key = secrets_client.get_api_key(settings.llm_secret_arn)
        chat_model = ChatOpenAI(
            model=settings.summary_model_id,
            api_key=api_key,
            temperature=0,
            max_tokens=settings.summary_max_tokens,
            max_retries=0,
        )
        embeddings = OpenAIEmbeddings(
            model=settings.embedding_model_id,
            api_key=api_key,
            dimensions=settings.embedding_dimensions,
            max_retries=0,
        )
        return chat_model, embeddings

    if provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        from media_pipeline.core.job_processing.embeddings_wrapper import (
            FixedDimensionEmbeddings,
        )

        secrets_client = secrets_client or SecretsClient(region=settings.aws_region)
        api_key = secrets_client.get_api_key(
            settings.llm_secret_arn or None, field="api_key", env_var="GOOGLE_API_KEY"
        )
        chat_model = ChatGoogleGenerativeAI(
            model=settings.summary_model_id,
            google_api_key=api_key,
            temperature=0,
            max_output_tokens=settings.summary_max_tokens,
            max_retries=0,
        )
        embeddings = FixedDimensionEmbeddings(
            model=settings.embedding_model_id,
            output_dimensionality=settings.embedding_dimensions,
            google_api_key=api_key,
        )
        return chat_model, embeddings

    from langchain_aws import BedrockEmbeddings, ChatBedrockConverse

    chat_model = ChatBedrockConverse(
        model=settings.summary_model_id,
        region_name=settings.aws_region,
        temperature=0,
        max_tokens=settings.summary_max_tokens,
    )
    embeddings = BedrockEmbeddings(
        model_id=settings.embedding_model_id,
        region_name=settings.aws_region,
        model_kwargs={"dimensions": settings.embedding_dimensions},
    )
    return chat_model, embeddings
