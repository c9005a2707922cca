"""Serviceability API client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from requests import Session
from requests.exceptions import RequestException

from .config import DEFAULT_USER_AGENT, ClientConfig, validate_config
from .errors import ProtocolError
from .logging_utils import get_logger
from .models import Address, HttpSession
from .state import decode_state, encode_state
from .validation import validate_address, validate_callback

CHECK_PATH = "/shop/check"
SELECT_PATH = "/shop/select"


def make_session(config: ClientConfig) -> Session:
    """Create a requests session with the configured proxy and TLS policy.

    The session keeps the requests defaults for redirects and connection
    pooling, and does not retry.
    """
    session = Session()
    session.headers.update({"User-Agent": DEFAULT_USER_AGENT})
    if config.proxy:
        session.proxies.update({"http": config.proxy, "https": config.proxy})
    session.verify = config.verify_tls
    return session


class ServiceabilityClient:
    """Client for the address serviceability API.

    Construction validates ``config`` and raises ConfigurationError on bad
    input. ``saved_state`` is a string previously read from :attr:`state`;
    it seeds the session cookies.

    Address and callback errors are raised from :meth:`check` and
    :meth:`select` before any request is sent. Everything that happens on the
    network is reported to the callback instead, as ``callback(error, None)``
    or ``callback(None, body)``, exactly once and before the call returns.

    The configured proxy and TLS policy are applied to every request, so they
    also hold for an injected ``session``; the User-Agent header is only set
    on sessions built by :func:`make_session`.

    Instances are not thread-safe: the underlying requests session and its
    cookie jar must not be shared between threads without external locking.
    """

    def __init__(
        self,
        config: Mapping[str, Any] | None,
        saved_state: str | None = None,
        *,
        session: HttpSession | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = validate_config(config)
        self._session = session if session is not None else make_session(self._config)
        self._logger = logger or get_logger("client")
        if saved_state is not None:
            self.state = saved_state

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def state(self) -> str:
        """The session cookies for the endpoint as ``"name=value; ..."``."""
        return encode_state(self._session.cookies, self._config.endpoint)

    @state.setter
    def state(self, value: str) -> None:
        names = decode_state(self._session.cookies, self._config.endpoint, value)
        self._logger.debug("Restored session cookies: %s", ", ".join(names))

    def check(self, address: Mapping[str, Any] | Address, callback: Any = None) -> None:
        """Ask whether an address can be serviced.

        ``address`` needs ``Address1`` and ``Zip``; ``City``, ``State`` and
        ``UnitNumber`` are optional.
        """
        self._post(CHECK_PATH, address, callback)

    def select(self, address: Mapping[str, Any] | Address, callback: Any = None) -> None:
        """Select a serviceable address returned by :meth:`check`.

        Accepts the same fields as :meth:`check` plus the opaque
        ``LocationId`` and ``UnitId`` values from the check response.
        """
        self._post(SELECT_PATH, address, callback)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> ServiceabilityClient:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def _url(self, path: str) -> str:
        return self._config.endpoint.rstrip("/") + path

    def _request_options(self) -> dict[str, Any]:
        # Request-level proxies take precedence over HTTP(S)_PROXY from the environment.
        options: dict[str, Any] = {
            "timeout": self._config.timeout,
            "verify": self._config.verify_tls,
        }
        if self._config.proxy:
            options["proxies"] = {"http": self._config.proxy, "https": self._config.proxy}
        return options

    def _post(self, path: str, address: Mapping[str, Any] | Address, callback: Any) -> None:
        payload = validate_address(address)
        handler = validate_callback(callback)

        self._logger.debug("POST %s", path)
        try:
            response = self._session.post(
                self._url(path),
                json=payload,
                **self._request_options(),
            )
        except RequestException as exc:
            self._logger.debug("Request to %s failed: %s", path, exc)
            handler(exc, None)
            return

        if response.status_code != 200:
            self._logger.warning("Unexpected HTTP %s from %s", response.status_code, path)
            handler(
                ProtocolError(
                    f"Protocol error: HTTP {response.status_code} from {path}",
                    status_code=response.status_code,
                    path=path,
                ),
                None,
            )
            return

        try:
            body = response.json() if response.content else None
        except ValueError:
            self._logger.warning("Response from %s was not valid JSON", path)
            handler(
                ProtocolError(
                    f"Protocol error: invalid JSON body from {path}",
                    status_code=response.status_code,
                    path=path,
                ),
                None,
            )
            return
        handler(None, body)
