"""Client configuration model and its validation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import ConfigTypeError, ConfigurationError
from .validation import is_supported_url

DEFAULT_USER_AGENT = "mcc-serviceability/1.0"

_TYPE_CHECKS = {
    "string": lambda value: isinstance(value, str),
    "boolean": lambda value: isinstance(value, bool),
    "number": lambda value: isinstance(value, (int, float)) and not isinstance(value, bool),
}


@dataclass(frozen=True)
class ConfigField:
    """One entry of the configuration schema."""

    key: str
    type: str
    required: bool = False


CONFIG_SCHEMA: tuple[ConfigField, ...] = (
    ConfigField("endpoint", "string", required=True),
    ConfigField("proxy", "string"),
    ConfigField("verbose", "boolean"),
    ConfigField("trust_proxy", "boolean"),
    ConfigField("timeout", "number"),
)


@dataclass(frozen=True)
class ClientConfig:
    """Validated configuration used by the serviceability client.

    Optional fields that were not supplied stay ``None``.
    ``trust_proxy`` disables TLS certificate verification, and only has an
    effect when ``proxy`` is set.
    """

    endpoint: str
    proxy: str | None = None
    verbose: bool | None = None
    trust_proxy: bool | None = None
    timeout: float | None = None

    @property
    def verify_tls(self) -> bool:
        """Whether server certificates must be verified."""
        return not (self.proxy and self.trust_proxy)


def _check_value(field: ConfigField, value: Any) -> Any:
    if not _TYPE_CHECKS[field.type](value):
        raise ConfigTypeError(f"'{field.key}' should be a(n) {field.type}")
    if field.type == "string":
        value = value.strip()
        if not value:
            raise ConfigurationError(f"'{field.key}' must be a non-empty string")
    if field.type == "number" and value <= 0:
        raise ConfigurationError(f"'{field.key}' must be greater than zero")
    return value


def validate_config(
    config: Mapping[str, Any] | None,
    schema: tuple[ConfigField, ...] = CONFIG_SCHEMA,
) -> ClientConfig:
    """Validate a configuration mapping and return a new ClientConfig.

    Raises ConfigurationError for a missing mapping or required key, and
    ConfigTypeError when a supplied value has the wrong type. String values
    are trimmed. Keys outside the schema are ignored.
    """
    if config is None:
        raise ConfigurationError("No configuration supplied")
    if not isinstance(config, Mapping):
        raise ConfigTypeError("Configuration must be a mapping")

    values: dict[str, Any] = {}
    for field in schema:
        value = config.get(field.key)
        if value is None:
            if field.required:
                raise ConfigurationError(f"'{field.key}' is required in the configuration")
            continue
        values[field.key] = _check_value(field, value)
    if not is_supported_url(values["endpoint"]):
        raise ConfigurationError("'endpoint' must be an absolute http(s) URL")
    return ClientConfig(**values)
