"""Validation of caller-supplied arguments."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse

from .errors import ValidationError
from .models import Address, ServiceabilityCallback

REQUIRED_ADDRESS_FIELDS = ("Address1", "Zip")


def is_supported_url(url: str) -> bool:
    """Allow only absolute HTTP(S) URLs with a hostname."""
    parsed = urlparse(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def validate_string(value: Any, name: str) -> str:
    """Return ``value`` trimmed, raising ValidationError unless it is a non-empty string."""
    if value is None:
        raise ValidationError(f"Parameter '{name}' was missing or None")
    if not isinstance(value, str):
        raise ValidationError(f"Parameter '{name}' must be a non-empty string")
    value = value.strip()
    if not value:
        raise ValidationError(f"Parameter '{name}' must be non-empty")
    return value


def validate_address(addr: Mapping[str, Any] | Address | None) -> dict[str, Any]:
    """Validate an address and return a new request payload.

    Only ``Address1`` and ``Zip`` are checked and trimmed; every other field
    is copied through for the service to judge. The caller's object is left
    untouched.
    """
    if addr is None:
        raise ValidationError("Address missing")
    if isinstance(addr, Address):
        payload = addr.to_payload()
    elif isinstance(addr, Mapping):
        payload = dict(addr)
    else:
        raise ValidationError("Address must be an object")
    for name in REQUIRED_ADDRESS_FIELDS:
        payload[name] = validate_string(payload.get(name), name)
    return payload


def _ignore_response(_error: Exception | None, _body: Any) -> None:
    return None


def validate_callback(callback: Any) -> ServiceabilityCallback:
    """Return a usable response handler, substituting a no-op for None."""
    if callback is None:
        return _ignore_response
    if not callable(callback):
        raise ValidationError("'callback' argument must be callable")
    return callback
