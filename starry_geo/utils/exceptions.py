"""Custom exceptions for the Starry Geo dashboard.

This module defines a hierarchy of exceptions so each dashboard action can
decide which failures it owns and surface them as a notification.

Exception Hierarchy:
    GeoDashboardError (base)
    ├── ValidationError
    │   └── InvalidIPAddressError
    └── RequestError
        ├── BackendUnavailableError
        └── ResponseFormatError
"""

from typing import Optional


class GeoDashboardError(Exception):
    """Base exception for the dashboard.

    All custom exceptions in this application should inherit from this class.
    This allows catching all application-specific errors with a single except clause.

    Example:
        >>> try:
        ...     risky_operation()
        ... except GeoDashboardError as e:
        ...     notify(e.message)
    """

    def __init__(self, message: str = "An error occurred in Starry Geo"):
        self.message = message
        super().__init__(self.message)


class ValidationError(GeoDashboardError):
    """Raised when user input is rejected before any network call."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message)


class InvalidIPAddressError(ValidationError):
    """Raised when a search term is not an IPv4 or IPv6 address.

    Attributes:
        value: The rejected input (already trimmed)

    Example:
        >>> raise InvalidIPAddressError("not-an-ip")
    """

    def __init__(self, value: str, message: str = None):
        self.value = value
        super().__init__(message or "Please enter a valid IPv4 or IPv6 address.")

    def __repr__(self) -> str:
        return f"InvalidIPAddressError(value={self.value!r}, message={self.message!r})"


class RequestError(GeoDashboardError):
    """Raised when the backend answers with a non-success status.

    The message is the human readable text extracted from the response body,
    so it can be shown to the user as-is.

    Attributes:
        status_code: HTTP status code (None when no response was received)

    Example:
        >>> raise RequestError("Invalid credentials.", status_code=401)
    """

    def __init__(self, message: str = "Request failed.", status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class BackendUnavailableError(RequestError):
    """Raised when the backend API cannot be reached at all."""

    def __init__(self, message: str = "Unable to reach the server."):
        super().__init__(message, status_code=None)


class ResponseFormatError(RequestError):
    """Raised when a success response does not have the expected shape.

    Example:
        >>> raise ResponseFormatError(status_code=200)
    """

    def __init__(self, message: str = "Invalid response from server.", status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code)
