"""
Custom exceptions for Dropbox upload operations.

This module defines exception classes specific to dboxpy operations.
"""
from typing import Optional


class DropboxError(Exception):
    """Base exception for all dboxpy errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ValidationError(DropboxError):
    """Raised for missing or invalid input before any network call."""
    pass


class AuthError(DropboxError):
    """Raised when authorization or credential persistence fails."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            status: HTTP status of the token exchange (if any)
            body: Raw response body of the token exchange (if any)
        """
        self.status = status
        self.body = body
        super().__init__(message)


class SecretStoreError(DropboxError):
    """Raised when the credential store rejects a write."""
    pass


class UploadError(DropboxError):
    """Raised when an upload cannot be completed."""
    pass


class TransportError(UploadError):
    """Raised when a Dropbox endpoint fails at the HTTP level."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Optional[str] = None,
        endpoint: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            status: HTTP status code (None for connection-level failures)
            body: Raw response body
            endpoint: API endpoint that failed
        """
        self.status = status
        self.body = body
        self.endpoint = endpoint
        super().__init__(message)


class IntegrityError(UploadError):
    """Raised when Dropbox stored the file under a different name."""

    def __init__(self, expected: str, actual: Optional[str]) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Failed to upload file to Dropbox: expected '{expected}', "
            f"remote object is named '{actual}'"
        )
