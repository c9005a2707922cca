"""Session state encoding.

The state string is the session's cookies for the configured endpoint in
``Cookie`` header form, e.g. ``"key1=value1; key2=value2"``. Callers store it
and hand it back to a later client to resume the session.
"""

from __future__ import annotations

from urllib.parse import urlparse

from requests import Request
from requests.cookies import RequestsCookieJar, create_cookie, get_cookie_header

from .errors import ValidationError
from .validation import validate_string


def _endpoint_host(endpoint: str) -> str:
    host = urlparse(endpoint).hostname
    if not host:
        raise ValidationError(f"Cannot scope cookies to endpoint without a host: {endpoint}")
    # http.cookiejar matches dotless hosts such as "localhost" as "<host>.local".
    if "." not in host and ":" not in host:
        host += ".local"
    return host


def encode_state(jar: RequestsCookieJar, endpoint: str) -> str:
    """Return the cookies that would be sent to ``endpoint``, in insertion order."""
    request = Request("POST", endpoint).prepare()
    header = get_cookie_header(jar, request)
    if not header:
        return ""
    # Valueless cookies come back as a bare name; keep every segment parseable.
    return "; ".join(
        segment if "=" in segment else f"{segment}=" for segment in header.split("; ")
    )


def parse_state(text: str | None) -> list[tuple[str, str]]:
    """Split a state string into ``(name, value)`` pairs.

    Empty segments are skipped. A segment without ``=`` or without a name
    raises ValidationError.
    """
    text = validate_string(text, "state")
    pairs: list[tuple[str, str]] = []
    for segment in text.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        name, separator, value = segment.partition("=")
        name = name.strip()
        if not separator or not name:
            raise ValidationError(f"Malformed state segment: {segment!r}")
        pairs.append((name, value.strip()))
    return pairs


def decode_state(jar: RequestsCookieJar, endpoint: str, text: str | None) -> list[str]:
    """Store the cookies of a state string in ``jar``, scoped to ``endpoint``.

    Returns the stored cookie names.
    """
    pairs = parse_state(text)
    host = _endpoint_host(endpoint)
    for name, value in pairs:
        jar.set_cookie(create_cookie(name, value, domain=host, path="/"))
    return [name for name, _ in pairs]
