"""Exceptions raised by the Product Advertising API client."""
from typing import Any, Optional


class PaapiError(Exception):
    """Base exception for client errors."""

    pass


class InvalidOperation(PaapiError, ValueError):
    """Raised when the requested operation is not one the API supports."""

    def __init__(self, operation: Any, supported: Optional[list] = None):
        self.operation = operation
        self.supported = supported or []
        message = f"Unsupported operation: {operation!r}"
        if self.supported:
            message += f" (expected one of: {', '.join(self.supported)})"
        super().__init__(message)


class InvalidRequest(PaapiError, ValueError):
    """Raised when operation parameters cannot produce a valid payload."""

    pass


class UnknownMarketplace(PaapiError, KeyError):
    """Raised when a marketplace code has no registry entry."""

    def __init__(self, code: Any, suggestions: Optional[list] = None):
        self.code = code
        self.suggestions = suggestions or []
        super().__init__(code)

    def __str__(self) -> str:
        message = f"Unknown marketplace: {self.code!r}"
        if self.suggestions:
            message += f" (did you mean: {', '.join(self.suggestions)}?)"
        return message


class SigningError(PaapiError):
    """Raised when a request cannot be signed."""

    pass


class TransportError(PaapiError):
    """Raised by a transport when the HTTP exchange itself fails."""

    pass


class RemoteError(PaapiError):
    """Raised on request by a response carrying a non-success status."""

    def __init__(self, response):
        self.response = response
        super().__init__(f"Remote service returned HTTP {response.status}")
