"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from media_pipeline.configs.base import BaseSettings

__all__ = ["BaseSettings"]
