"""Custom exceptions for content-addressed storage uploads."""

from typing import Optional


class StorageError(Exception):
    """Base exception for all storage upload errors.

    A StorageError from an upload call means nothing from that call may be
    assumed stored: no content reference was produced. Callers abort the
    publish on any subclass.

    Attributes:
        target: What was being uploaded ("manifest" or an attachment role)
    """

    def __init__(self, message: str, target: str) -> None:
        super().__init__(message)
        self.target = target


class UploadError(StorageError):
    """The provider answered but did not accept the upload.

    Raised on HTTP 4xx/5xx responses and on success responses that cannot be
    parsed or carry no content identifier.
    """

    def __init__(self, message: str, target: str, provider_status: Optional[int] = None) -> None:
        """Initialize upload error.

        Args:
            message: Human-readable error message (includes the provider's reply)
            target: What was being uploaded
            provider_status: HTTP status returned by the provider
        """
        super().__init__(message, target)
        self.provider_status = provider_status
        self.message = message


class NetworkError(StorageError):
    """The provider could not be reached, or the request timed out.

    Treated exactly like UploadError by the publish orchestrator.
    """

    def __init__(self, message: str, target: str, url: str) -> None:
        super().__init__(message, target)
        self.url = url
