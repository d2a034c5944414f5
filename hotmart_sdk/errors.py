"""
Hotmart SDK Error Classes

Every failure of a request routed through the SDK surfaces as a
HotmartError subclass carrying a single descriptive message.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class HotmartError(Exception):
    """Base error class for Hotmart SDK."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "name": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, status_code={self.status_code})"


class ConfigurationError(HotmartError):
    """Configuration error."""


class ValidationError(HotmartError):
    """Validation error (invalid input, raised before any request is sent)."""


class AuthenticationError(HotmartError):
    """The client-credentials token exchange failed."""

    def __init__(self, detail: str, status_code: int = 0, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Authentication failed: {detail}", status_code, details)


class NetworkError(HotmartError):
    """Transport failure with no HTTP response (connection issues, timeouts)."""

    def __init__(self, detail: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Request failed: {detail}", 0, details)


class ApiError(HotmartError):
    """Non-2xx response from the Hotmart API."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error: Optional[str] = None,
        error_description: Optional[str] = None,
        error_uri: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, status_code, details)
        self.error = error
        self.error_description = error_description
        self.error_uri = error_uri

    @classmethod
    def from_api_response(cls, response: Any, status_code: int) -> "ApiError":
        """
        Create error from an API response body.

        Bodies shaped like {error, error_description, error_uri} produce
        "Hotmart API Error: <description>"; anything else falls back to the
        HTTP status.
        """
        if isinstance(response, dict) and (response.get("error") or response.get("error_description")):
            error = response.get("error")
            description = response.get("error_description")
            return cls(
                f"Hotmart API Error: {description or error}",
                status_code,
                error=error,
                error_description=description,
                error_uri=response.get("error_uri"),
            )
        details = {"body": response} if response else None
        return cls(f"Request failed: HTTP {status_code}", status_code, details=details)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update({
            "error": self.error,
            "error_description": self.error_description,
            "error_uri": self.error_uri,
        })
        return result


class UnauthorizedError(ApiError):
    """401 response. The cached access token has already been discarded."""


def is_hotmart_error(error: Any) -> bool:
    """Check if error is a HotmartError."""
    return isinstance(error, HotmartError)
