"""
Secrets Manager client.

Resolves API keys and database credentials by secret reference. Parsed
secrets are cached for the lifetime of the process so warm Lambda
invocations do not call Secrets Manager again.

Dependencies: boto3
System role: Credential resolution for the LLM provider and the result store
"""

import json
import logging
import os
from typing import Any
from urllib.parse import quote_plus

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from media_pipeline.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class SecretsClient:
    """Cached JSON secret lookups."""

    def __init__(self, region: str = "us-east-1", client=None) -> None:
        """
        Initialize Secrets Manager client.

        Args:
            region: AWS region
            client: Preconfigured boto3 secretsmanager client (created if None)
        """
        self._client = client or boto3.session.Session().client(
            "secretsmanager", region_name=region
        )
        self._cache: dict[str, dict[str, Any]] = {}

    def get_json(self, secret_id: str) -> dict[str, Any]:
        """
        Fetch and parse a JSON secret.

        Args:
            secret_id: Secret ARN or name

        Returns:
            dict: Parsed secret (empty dict for a secret without SecretString)

        Raises:
            ConfigurationError: Secret cannot be read or is not valid JSON
        """
        if secret_id in self._cache:
            return self._cache[secret_id]

        try:
            response = self._client.get_secret_value(SecretId=secret_id)
            secret = json.loads(response.get("SecretString") or "{}")
        except (ClientError, BotoCoreError) as e:
            logger.error("get_json - Failed to fetch secret: %s", e)
            raise ConfigurationError(
                f"Failed to fetch secret: {e}", {"secret_id": secret_id}
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                "Secret is not valid JSON", {"secret_id": secret_id}
            ) from e

        self._cache[secret_id] = secret
        logger.info("get_json - Secret resolved", extra={"secret_id": secret_id})
        return secret

    def get_api_key(
        self,
        secret_id: str | None,
        field: str = "OPENAI_API_KEY",
        env_var: str = "OPENAI_API_KEY",
    ) -> str:
        """
        Resolve an API key from a secret, falling back to the environment.

        Args:
            secret_id: Secret reference (skipped when empty)
            field: Key inside the secret JSON
            env_var: Environment variable used when the secret has no key

        Returns:
            str: API key

        Raises:
            ConfigurationError: Key not found in secret or environment
        """
        api_key = None
        if secret_id:
            api_key = self.get_json(secret_id).get(field)
        api_key = api_key or os.getenv(env_var)
        if not api_key:
            raise ConfigurationError(
                f"{field} not found in secret or environment",
                {"secret_id": secret_id, "env_var": env_var},
            )
        return api_key

    def resolve_database_url(
        self,
        secret_id: str,
        host: str | None = None,
        database: str | None = None,
        default_database: str = "mediapipeline",
    ) -> str:
        """
        Build an asyncpg connection URL from a credentials secret.

        Args:
            secret_id: Secret holding username, password, host and port
            host: Host override (wins over the secret's host)
            database: Database name override
            default_database: Used when neither override nor secret names one

        Returns:
            str: ``postgresql+asyncpg://`` URL with URL-encoded credentials

        Raises:
            ConfigurationError: No host available
        """
        secret = self.get_json(secret_id)
        resolved_host = host or secret.get("host")
        if not resolved_host:
            raise ConfigurationError(
                "Database host missing from overrides and secret",
                {"secret_id": secret_id},
            )

        username = quote_plus(str(secret.get("username", "")))
        password = quote_plus(str(secret.get("password", "")))
        port = secret.get("port") or 5432
        db_name = database or secret.get("dbname") or default_database
        return f"postgresql+asyncpg://{username}:{password}@{resolved_host}:{port}/{db_name}"
