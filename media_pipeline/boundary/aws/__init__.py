"""AWS boundary clients."""

from media_pipeline.boundary.aws.secrets_client import SecretsClient

__all__ = ["SecretsClient"]
