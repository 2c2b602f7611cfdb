"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from freelance_hub.domain.models import (
    DEFAULT_VALIDATION_RULES,
    AttachmentRole,
    ValidationRule,
)


class StorageProvider(str, Enum):
    """Supported content-addressed storage providers."""

    WEB3_STORAGE = "web3storage"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class StorageConfig(BaseModel):
    """Connection settings for the content-addressed storage provider."""

    provider: StorageProvider = Field(
        StorageProvider.WEB3_STORAGE, description="Storage provider implementation"
    )
    api_url: str = Field(
        "https://api.web3.storage", min_length=1, description="Base URL of the upload API"
    )
    gateway_url: str = Field(
        "https://w3s.link/ipfs",
        min_length=1,
        description="Gateway prefix used to build access URLs from content identifiers",
    )
    request_timeout: Optional[int] = Field(
        None,
        ge=1,
        le=600,
        description="Per-request timeout in seconds (unset = wait for the provider)",
    )
    user_agent: str = Field("FreelanceHub/1.0", min_length=1)

    @field_validator("api_url", "gateway_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Strip whitespace and trailing slashes so paths can be appended."""
        stripped = v.strip().rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return stripped

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped

    model_config = {"use_enum_values": True}


class MatchingConfig(BaseModel):
    """Ranking settings for the matching engine."""

    top_k: int = Field(3, ge=0, description="Maximum number of ranked matches returned")
    catalog_path: Optional[Path] = Field(
        None, description="YAML catalog of service candidates (default: built-in catalog)"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the freelance hub."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    attachments: Dict[AttachmentRole, ValidationRule] = Field(
        default_factory=lambda: dict(DEFAULT_VALIDATION_RULES),
        description="Per-role attachment limits; roles left out keep their defaults",
    )
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("attachments")
    @classmethod
    def merge_default_rules(
        cls, v: Dict[AttachmentRole, ValidationRule]
    ) -> Dict[AttachmentRole, ValidationRule]:
        """Fill in default rules for roles the file does not override."""
        merged = dict(DEFAULT_VALIDATION_RULES)
        merged.update(v)
        return {role: merged[role] for role in AttachmentRole}
