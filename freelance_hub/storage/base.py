"""Base uploader class with shared functionality for content-addressed stores.

This module provides the abstract base class that every storage provider
client implements: credential checks at construction, a single-attempt HTTP
request helper with error mapping, and canonical JSON encoding for documents.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from freelance_hub.config.exceptions import ConfigurationError
from freelance_hub.domain.models import ContentReference, FilePayload
from freelance_hub.logging import get_logger

from .exceptions import NetworkError, UploadError

logger = get_logger(__name__, component="storage")

MANIFEST_TARGET = "manifest"


def canonical_json(document: Any) -> bytes:
    """Encode a structured value as canonical JSON (sorted keys, compact, UTF-8)."""
    return json.dumps(
        document, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


class ContentAddressableUploader(ABC):
    """Client for an append-only, content-addressed storage service.

    Each upload call makes exactly one network attempt. It either returns a
    ContentReference for everything it was given or raises a StorageError;
    there are no retries and no partial references.

    Attributes:
        timeout: Per-request timeout in seconds (None waits for the provider)
        user_agent: User-Agent header for HTTP requests
    """

    PROVIDER_NAME = "base"

    def __init__(
        self,
        credential: Optional[str],
        timeout: Optional[int] = None,
        user_agent: str = "FreelanceHub/1.0",
    ) -> None:
        """Initialize uploader.

        Args:
            credential: Access token for the provider, resolved once here
            timeout: Optional request timeout in seconds (1-600)
            user_agent: User-Agent header for requests

        Raises:
            ConfigurationError: If the credential is missing or settings are invalid
        """
        if not credential or not credential.strip():
            raise ConfigurationError(
                f"Missing access credential for the {self.PROVIDER_NAME} storage provider",
                suggestions=["Pass the provider's API token when constructing the uploader"],
                missing_credential="storage_token",
            )
        if timeout is not None and not 1 <= timeout <= 600:
            raise ConfigurationError(f"Timeout must be between 1 and 600 seconds, got: {timeout}")
        if not user_agent or not user_agent.strip():
            raise ConfigurationError("user_agent cannot be empty")

        self._credential = credential.strip()
        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(timeout={self.timeout!r}, user_agent={self.user_agent!r})"

    @abstractmethod
    def upload_batch(self, files: List[FilePayload], label: str = "batch") -> ContentReference:
        """Upload a set of files as one atomic batch.

        Args:
            files: Files to store together (at least one)
            label: What the batch holds, used in logs and errors (e.g. a role)

        Returns:
            ContentReference addressing the whole batch

        Raises:
            UploadError: Provider rejected the batch or answered unusably
            NetworkError: Provider unreachable or request timed out
        """

    @abstractmethod
    def upload_document(self, document: Any, label: str = MANIFEST_TARGET) -> ContentReference:
        """Upload a JSON-serializable document.

        Args:
            document: Structured value, serialized to canonical JSON
            label: What the document is, used in logs and errors

        Returns:
            ContentReference addressing the document

        Raises:
            UploadError: Provider rejected the document or answered unusably
            NetworkError: Provider unreachable or request timed out
        """

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._credential}"}

    def _make_request(
        self,
        url: str,
        target: str,
        method: str = "POST",
        headers: Optional[Dict[str, str]] = None,
        data: Optional[bytes] = None,
        files: Optional[list] = None,
    ) -> Dict[str, Any]:
        """Make a single HTTP request and decode the JSON reply.

        Args:
            url: URL to request
            target: Upload target, carried into errors and logs
            method: HTTP method (default "POST")
            headers: Extra headers merged over the session defaults
            data: Raw request body
            files: Multipart file parts in requests' format

        Returns:
            Parsed JSON object from the response

        Raises:
            UploadError: On 4xx/5xx status or an undecodable response
            NetworkError: On timeout or connection failure
        """
        request_headers = self._session.headers.copy()
        request_headers.update(self._auth_headers())
        if headers:
            request_headers.update(headers)

        logger.debug(
            f"HTTP {method} request to {url}",
            extra={
                "event": "storage.upload.request",
                "method": method,
                "url": url,
                "target": target,
                "timeout": self.timeout,
            },
        )

        try:
            response = self._session.request(
                method=method,
                url=url,
                headers=request_headers,
                data=data,
                files=files,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out",
                extra={
                    "event": "storage.upload.failed",
                    "error_type": "Timeout",
                    "url": url,
                    "target": target,
                },
            )
            raise NetworkError(f"Request to {url} timed out: {e}", target=target, url=url) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "storage.upload.failed",
                    "error_type": type(e).__name__,
                    "url": url,
                    "target": target,
                },
            )
            raise NetworkError(f"Request to {url} failed: {e}", target=target, url=url) from e

        if response.status_code >= 400:
            log_level = logging.WARNING if response.status_code >= 500 else logging.ERROR
            logger.log(
                log_level,
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "storage.upload.failed",
                    "status_code": response.status_code,
                    "url": url,
                    "target": target,
                },
            )
            raise UploadError(
                f"Upload of {target} failed with HTTP {response.status_code}: {response.text}",
                target=target,
                provider_status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(
                f"Failed to parse JSON response from {url}",
                extra={
                    "event": "storage.upload.failed",
                    "error_type": "JSONDecodeError",
                    "url": url,
                    "target": target,
                },
            )
            raise UploadError(
                f"Upload of {target} returned an unreadable response: {e}",
                target=target,
                provider_status=response.status_code,
            ) from e

        if not isinstance(payload, dict):
            raise UploadError(
                f"Upload of {target} returned {type(payload).__name__}, expected a JSON object",
                target=target,
                provider_status=response.status_code,
            )

        return payload
