"""
Job processor factory.

Wires production collaborators (S3, LLM clients, pooled database engine)
into a JobProcessor. Every collaborator can be passed in explicitly, which
is how tests and local tooling substitute fakes.

Dependencies: configs, tasks, database, boundary
System role: Composition root for the processor
"""

from langchain_core.embeddings import Embeddings
from langchain_core.language_models.chat_models import BaseChatModel
from sqlalchemy.ext.asyncio import async_sessionmaker

from media_pipeline.boundary.aws.secrets_client import SecretsClient
from media_pipeline.boundary.db.connection import (
    create_engine_from_url,
    get_async_session_factory,
    get_engine_from_secret,
)
from media_pipeline.core.job_processing.configs import (
    ProcessorSettings,
    get_processor_settings,
    validate_environment,
)
from media_pipeline.core.job_processing.database import ResultStore
from media_pipeline.core.job_processing.llm_factory import build_llm_clients
from media_pipeline.core.job_processing.processor import JobProcessor
from media_pipeline.core.job_processing.tasks import (
    EmbeddingTask,
    S3FetchTask,
    SummarizationTask,
)


def build_session_factory(
    settings: ProcessorSettings,
    secrets_client: SecretsClient,
) -> async_sessionmaker:
    """
    Session factory over the process-wide engine.

    DATABASE_URL wins when set; otherwise credentials come from DB_SECRET_ARN.
    """
    if settings.database_url:
        engine = create_engine_from_url(settings.database_url)
    else:
        engine = get_engine_from_secret(
            secrets_client,
            settings.db_secret_arn,
            host=settings.db_host,
            database=settings.db_name,
        )
    return get_async_session_factory(engine)


def build_job_processor(
    settings: ProcessorSettings | None = None,
    *,
    secrets_client: SecretsClient | None = None,
    s3_client=None,
    chat_model: BaseChatModel | None = None,
    embeddings: Embeddings | None = None,
    session_factory: async_sessionmaker | None = None,
) -> JobProcessor:
    """
    Build a JobProcessor from settings.

    Args:
        settings: Processor settings (loaded from environment if None)
        secrets_client: Secrets resolver (created if None)
        s3_client: boto3 S3 client (created if None)
        chat_model: Summarization chat model (built from provider if None)
        embeddings: Embeddings model (built from provider if None)
        session_factory: Result store sessions (built from DB settings if None)

    Returns:
        JobProcessor: Ready-to-use processor

    Raises:
        ConfigurationError: Missing settings, secrets or unknown provider
    """
    settings = validate_environment(settings or get_processor_settings())
    secrets_client = secrets_client or SecretsClient(region=settings.aws_region)

    if chat_model is None or embeddings is None:
        built_chat_model, built_embeddings = build_llm_clients(settings, secrets_client)
        chat_model = chat_model or built_chat_model
        embeddings = embeddings or built_embeddings

    if session_factory is None:
        session_factory = build_session_factory(settings, secrets_client)

    return JobProcessor(
        fetch_task=S3FetchTask(region=settings.aws_region, s3_client=s3_client),
        summarization_task=SummarizationTask(
            chat_model,
            max_input_chars=settings.summary_max_input_chars,
            max_attempts=settings.max_llm_attempts,
            base_delay=settings.llm_retry_base_delay_seconds,
        ),
        embedding_task=EmbeddingTask(
            embeddings,
            max_input_chars=settings.embedding_max_input_chars,
            max_attempts=settings.max_llm_attempts,
            base_delay=settings.llm_retry_base_delay_seconds,
        ),
        result_store=ResultStore(session_factory, dimensions=settings.embedding_dimensions),
    )
