"""Factory function for instantiating storage uploaders."""

import logging

from freelance_hub.config.environment import CREDENTIAL_ENV_VAR, EnvironmentConfig
from freelance_hub.config.exceptions import ConfigurationError
from freelance_hub.config.models import StorageConfig

from .base import ContentAddressableUploader
from .web3storage import Web3StorageUploader

logger = logging.getLogger(__name__)

UPLOADER_CLASSES = {
    "web3storage": Web3StorageUploader,
}


def get_uploader(
    storage_config: StorageConfig, env_config: EnvironmentConfig
) -> ContentAddressableUploader:
    """Instantiate the uploader for the configured provider.

    The credential comes from the environment configuration and is checked
    here, so a missing token surfaces before any publish is attempted.

    Args:
        storage_config: Provider, URLs and request settings
        env_config: Environment configuration holding the credential

    Returns:
        Ready-to-use uploader

    Raises:
        ConfigurationError: If the provider is unknown or the credential is missing
    """
    provider = str(getattr(storage_config.provider, "value", storage_config.provider)).lower()
    uploader_class = UPLOADER_CLASSES.get(provider)

    if uploader_class is None:
        supported = ", ".join(sorted(UPLOADER_CLASSES))
        raise ConfigurationError(
            f"Unknown storage provider: {storage_config.provider}. Supported providers: {supported}"
        )

    if not env_config.storage_token:
        raise ConfigurationError(
            "Storage credential is not configured",
            errors=[f"Missing required environment variable: {CREDENTIAL_ENV_VAR}"],
            suggestions=[f"Set {CREDENTIAL_ENV_VAR} in your environment or .env file"],
            missing_credential=CREDENTIAL_ENV_VAR,
        )

    logger.debug(
        "Creating uploader instance",
        extra={"provider": provider, "uploader_class": uploader_class.__name__},
    )

    return uploader_class(
        env_config.storage_token,
        api_url=storage_config.api_url,
        gateway_url=storage_config.gateway_url,
        timeout=storage_config.request_timeout,
        user_agent=storage_config.user_agent,
    )
