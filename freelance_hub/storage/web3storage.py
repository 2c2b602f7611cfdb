"""Web3.Storage uploader implementation."""

from typing import Any, List, Optional

from freelance_hub.domain.models import ContentReference, FilePayload
from freelance_hub.logging import get_logger

from .base import MANIFEST_TARGET, ContentAddressableUploader, canonical_json
from .exceptions import UploadError

logger = get_logger(__name__, component="storage")


class Web3StorageUploader(ContentAddressableUploader):
    """Uploader for the Web3.Storage HTTP API.

    API Details:
        Endpoint: {api_url}/upload
        Method: POST
        Authentication: Bearer token
        Batch body: multipart/form-data, one "file" part per file
        Document body: canonical JSON with Content-Type application/json
        Response: JSON object with a "cid" field
        Access URL: {gateway_url}/{cid}
    """

    PROVIDER_NAME = "web3storage"
    DEFAULT_API_URL = "https://api.web3.storage"
    DEFAULT_GATEWAY_URL = "https://w3s.link/ipfs"

    def __init__(
        self,
        credential: Optional[str],
        api_url: str = DEFAULT_API_URL,
        gateway_url: str = DEFAULT_GATEWAY_URL,
        timeout: Optional[int] = None,
        user_agent: str = "FreelanceHub/1.0",
    ) -> None:
        super().__init__(credential, timeout=timeout, user_agent=user_agent)
        self.api_url = api_url.rstrip("/")
        self.gateway_url = gateway_url.rstrip("/")

    @property
    def upload_url(self) -> str:
        return f"{self.api_url}/upload"

    def upload_batch(self, files: List[FilePayload], label: str = "batch") -> ContentReference:
        """Upload files as one multipart request.

        Raises:
            ValueError: If files is empty
            UploadError: Provider rejected the batch or answered unusably
            NetworkError: Provider unreachable or request timed out
        """
        if not files:
            raise ValueError("upload_batch requires at least one file")

        logger.info(
            f"Uploading {len(files)} file(s) for {label}",
            extra={
                "event": "storage.upload.started",
                "provider": self.PROVIDER_NAME,
                "target": label,
                "file_count": len(files),
                "total_bytes": sum(len(f.data) for f in files),
            },
        )

        multipart = [("file", (payload.name, payload.data)) for payload in files]
        response = self._make_request(self.upload_url, target=label, files=multipart)
        return self._to_reference(response, label)

    def upload_document(self, document: Any, label: str = MANIFEST_TARGET) -> ContentReference:
        """Upload a document as canonical JSON.

        Raises:
            TypeError: If the document is not JSON-serializable
            UploadError: Provider rejected the document or answered unusably
            NetworkError: Provider unreachable or request timed out
        """
        body = canonical_json(document)

        logger.info(
            f"Uploading {label} document",
            extra={
                "event": "storage.upload.started",
                "provider": self.PROVIDER_NAME,
                "target": label,
                "total_bytes": len(body),
            },
        )

        response = self._make_request(
            self.upload_url,
            target=label,
            headers={"Content-Type": "application/json"},
            data=body,
        )
        return self._to_reference(response, label)

    def _to_reference(self, response: dict, label: str) -> ContentReference:
        """Build the ContentReference from the provider's reply."""
        cid = response.get("cid")
        if not isinstance(cid, str) or not cid.strip():
            raise UploadError(
                f"Upload of {label} succeeded without a content identifier in the response",
                target=label,
                provider_status=None,
            )

        cid = cid.strip()
        reference = ContentReference(content_id=cid, url=f"{self.gateway_url}/{cid}")

        logger.info(
            f"Uploaded {label}",
            extra={
                "event": "storage.upload.succeeded",
                "provider": self.PROVIDER_NAME,
                "target": label,
                "content_id": cid,
            },
        )
        return reference
