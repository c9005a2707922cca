"""Protocols and lightweight model types."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from requests.cookies import RequestsCookieJar

ServiceabilityCallback = Callable[[Exception | None, Any], None]

# Wire names used by the remote API, keyed by Address attribute.
ADDRESS_FIELDS = {
    "address1": "Address1",
    "city": "City",
    "state": "State",
    "unit_number": "UnitNumber",
    "zip": "Zip",
    "location_id": "LocationId",
    "unit_id": "UnitId",
}


class HttpSession(Protocol):
    """Contract for the HTTP transport used by the client."""

    cookies: RequestsCookieJar

    def post(self, url: str, **kwargs: Any) -> Any:
        """Send a POST request and return the response."""

    def close(self) -> None:
        """Release pooled connections."""


@dataclass(frozen=True)
class Address:
    """A mailing address to check or select.

    ``location_id`` and ``unit_id`` are opaque identifiers returned by a
    previous check and are only meaningful for select.
    """

    address1: str
    zip: str
    city: str | None = None
    state: str | None = None
    unit_number: str | None = None
    location_id: str | None = None
    unit_id: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the wire mapping, leaving out unset fields."""
        payload: dict[str, Any] = {}
        for attribute, wire_name in ADDRESS_FIELDS.items():
            value = getattr(self, attribute)
            if value is not None:
                payload[wire_name] = value
        return payload
