"""Configuration management module for the freelance hub."""

from .environment import CREDENTIAL_ENV_VAR, EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_config_dict, validate_config_file
from .models import (
    AppConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    MatchingConfig,
    StorageConfig,
    StorageProvider,
)

__all__ = [
    # Loader functions
    "load_config",
    "parse_config_dict",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "StorageConfig",
    "MatchingConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "CREDENTIAL_ENV_VAR",
    # Enums
    "StorageProvider",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
