"""
Custom exceptions for gemimg.

This module defines all custom exceptions used throughout the library.
"""

from typing import Any


class GemimgError(Exception):
    """Base exception for all gemimg errors."""

    pass


class ConfigurationError(GemimgError):
    """Raised when there is a configuration problem (e.g. missing API key)."""

    pass


class InvalidArgumentError(GemimgError):
    """Raised when an argument or option value is out of range."""

    def __init__(self, message: str, field: str = "") -> None:
        """
        Initialize invalid argument error.

        Args:
            message: Error message
            field: Name of the argument that was rejected (optional)
        """
        self.field = field
        super().__init__(message)


class InputNotFoundError(GemimgError):
    """Raised when a local input image does not exist."""

    def __init__(self, message: str, path: str = "") -> None:
        """
        Initialize input not found error.

        Args:
            message: Error message
            path: Path of the missing file
        """
        self.path = path
        super().__init__(message)


class APIError(GemimgError):
    """Raised when the Gemini API returns a non-success response."""

    def __init__(self, message: str, status_code: int = 0, response: str = "") -> None:
        """
        Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
            response: Raw API response body serialized as text (if available)
        """
        self.status_code = status_code
        self.response = response
        super().__init__(message)


class NoImageReturnedError(GemimgError):
    """Raised when a successful response carries no extractable image."""

    def __init__(
        self, message: str, model: str = "", response: dict[str, Any] | None = None
    ) -> None:
        """
        Initialize no-image error.

        Args:
            message: Error message
            model: Model ID the request was sent to
            response: The full parsed response, kept for diagnostics
        """
        self.model = model
        self.response = response if response is not None else {}
        super().__init__(message)


class NetworkError(GemimgError):
    """Raised when a network operation fails."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """
        Initialize network error.

        Args:
            message: Error message
            original_error: The underlying exception that caused this error
        """
        self.original_error = original_error
        super().__init__(message)


class RequestTimeoutError(GemimgError):
    """Raised when an HTTP request exceeds the caller-supplied timeout."""

    pass
