"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

CREDENTIAL_ENV_VAR = "WEB3_STORAGE_TOKEN"
DEFAULT_DRAFTS_DATABASE_URL = "sqlite:///./data/drafts.db"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        storage_token: Optional[str],
        log_level: Optional[str] = None,
        drafts_database_url: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.storage_token = storage_token
        self.log_level = log_level
        self.drafts_database_url = drafts_database_url or DEFAULT_DRAFTS_DATABASE_URL
        self.environment = environment or "local"

    def __repr__(self) -> str:
        token_state = "set" if self.storage_token else "missing"
        return (
            f"EnvironmentConfig(storage_token=<{token_state}>, log_level={self.log_level!r}, "
            f"drafts_database_url={self.drafts_database_url!r}, environment={self.environment!r})"
        )


def load_environment_config(require_credential: bool = True) -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Environment variables:
    - WEB3_STORAGE_TOKEN: access credential for the content-addressed store
      (required when require_credential is True)
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - DRAFTS_DATABASE_URL: draft store database (default: sqlite:///./data/drafts.db)
    - ENVIRONMENT: environment label attached to every log record

    Args:
        require_credential: Fail when the storage credential is absent. Commands
            that never publish (ranking, config validation) pass False.

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If the credential is missing or a value is invalid
    """
    errors = []
    missing_credential = None

    storage_token = os.getenv(CREDENTIAL_ENV_VAR)
    log_level = os.getenv("LOG_LEVEL")
    drafts_database_url = os.getenv("DRAFTS_DATABASE_URL")
    environment = os.getenv("ENVIRONMENT")

    if storage_token is not None:
        storage_token = storage_token.strip() or None

    if require_credential and not storage_token:
        missing_credential = CREDENTIAL_ENV_VAR
        errors.append(f"Missing required environment variable: {CREDENTIAL_ENV_VAR}")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                f"Set {CREDENTIAL_ENV_VAR} to an API token issued by the storage provider",
            ],
            missing_credential=missing_credential,
        )

    return EnvironmentConfig(
        storage_token=storage_token,
        log_level=log_level.upper() if log_level else None,
        drafts_database_url=drafts_database_url,
        environment=environment,
    )
