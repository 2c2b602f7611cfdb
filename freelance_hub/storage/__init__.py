"""Clients for content-addressed storage providers.

Use the factory to build the configured uploader:
    from freelance_hub.storage import get_uploader
    uploader = get_uploader(app_config.storage, env_config)
    reference = uploader.upload_document({"hello": "world"})

Exception handling:
    from freelance_hub.storage import StorageError, UploadError, NetworkError
"""

from .base import MANIFEST_TARGET, ContentAddressableUploader, canonical_json
from .exceptions import NetworkError, StorageError, UploadError
from .factory import get_uploader
from .web3storage import Web3StorageUploader

__all__ = [
    # Base and factory
    "ContentAddressableUploader",
    "get_uploader",
    "canonical_json",
    "MANIFEST_TARGET",
    # Providers
    "Web3StorageUploader",
    # Exceptions
    "StorageError",
    "UploadError",
    "NetworkError",
]
