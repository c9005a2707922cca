"""Custom exceptions for the serviceability client."""

from __future__ import annotations

from requests.exceptions import RequestException

# Network-stage failures are delivered to callbacks as the transport raised them.
TransportError = RequestException


class ServiceabilityError(Exception):
    """Base exception for this project."""


class ConfigurationError(ServiceabilityError):
    """Raised when client configuration is missing or invalid."""


class ConfigTypeError(ConfigurationError, TypeError):
    """Raised when a configuration value has the wrong type."""


class ValidationError(ServiceabilityError, ValueError):
    """Raised when an address, callback, or state string is malformed."""


class ProtocolError(ServiceabilityError):
    """Raised when the service answers with an unexpected HTTP response."""

    def __init__(self, message: str, *, status_code: int | None = None, path: str = "") -> None:
        self.status_code = status_code
        self.path = path
        super().__init__(message)
