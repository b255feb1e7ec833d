"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        openai_api_key: str,
        openai_base_url: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.openai_api_key = openai_api_key
        self.openai_base_url = openai_base_url
        self.log_level = log_level
        self.environment = environment or "local"

    def __repr__(self) -> str:
        # Never print the key itself
        return (
            f"EnvironmentConfig(openai_api_key=***, openai_base_url={self.openai_base_url!r}, "
            f"log_level={self.log_level!r}, environment={self.environment!r})"
        )


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Required environment variables:
    - OPENAI_API_KEY: API key for the chat and embedding models

    Optional environment variables:
    - OPENAI_BASE_URL: Alternative OpenAI-compatible endpoint
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Label attached to every log record (default: local)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    errors = []

    openai_api_key = os.getenv("OPENAI_API_KEY")
    openai_base_url = os.getenv("OPENAI_BASE_URL")
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if not openai_api_key or not openai_api_key.strip():
        errors.append("Missing required environment variable: OPENAI_API_KEY")

    if openai_base_url and not openai_base_url.startswith(("http://", "https://")):
        errors.append(
            f"Invalid OPENAI_BASE_URL: '{openai_base_url}'. Must start with http:// or https://"
        )

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your API key",
                "Ensure OPENAI_API_KEY is exported in the shell running jobmatch",
            ],
        )

    return EnvironmentConfig(
        openai_api_key=openai_api_key.strip(),
        openai_base_url=openai_base_url.rstrip("/") if openai_base_url else None,
        log_level=log_level.upper() if log_level else None,
        environment=environment,
    )
