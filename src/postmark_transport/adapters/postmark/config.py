"""Transport configuration model and loader.

Provides the TransportConfig Pydantic model for validated, immutable Postmark
settings and the loader function to create it from configuration dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from btx_lib_mail import validate_email_address
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

#: Base URI of the Postmark API; endpoint paths are appended to it.
DEFAULT_API_URI = "https://api.postmarkapp.com/"


class TransportConfig(BaseModel):
    """Validated, immutable Postmark transport configuration.

    ``server_token`` is the API key. It may be absent here so configuration
    files can be loaded and displayed before a token is set; the transport
    itself refuses to start without one.

    Example:
        >>> config = TransportConfig(server_token="abc", debug_mode=True)
        >>> config.debug_mode
        True
        >>> config.api_uri
        'https://api.postmarkapp.com/'
    """

    model_config = ConfigDict(frozen=True)

    server_token: str | None = None
    debug_mode: bool = False
    timeout: float = 30.0
    api_uri: str = DEFAULT_API_URI
    from_address: str | None = None

    @field_validator("server_token", "from_address", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only strings from config files as "not set".

        Example:
            >>> TransportConfig._coerce_empty_string_to_none("  ")
            >>> TransportConfig._coerce_empty_string_to_none("token")
            'token'
        """
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> TransportConfig:
        """Catch configuration mistakes early with clear error messages.

        Raises:
            ValueError: When configuration values are invalid.
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        if not self.api_uri.startswith(("https://", "http://")):
            raise ValueError(f"api_uri must be an http(s) URI, got {self.api_uri!r}")
        if not self.api_uri.endswith("/"):
            raise ValueError(f"api_uri must end with '/', got {self.api_uri!r}")

        if self.from_address is not None:
            validate_email_address(self.from_address)

        return self

    def __repr__(self) -> str:
        """Return string representation with server_token redacted.

        Example:
            >>> "secret" in repr(TransportConfig(server_token="secret"))
            False
        """
        fields: list[str] = []
        for name, value in self:
            if name == "server_token" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"TransportConfig({', '.join(fields)})"

    __str__ = __repr__


def load_transport_config_from_dict(config_dict: Mapping[str, Any]) -> TransportConfig:
    """Load TransportConfig from the ``postmark`` section of a config dictionary.

    Args:
        config_dict: Configuration dictionary, typically ``Config.as_dict()``.

    Returns:
        Configured transport settings with defaults for missing values.

    Example:
        >>> config = load_transport_config_from_dict({"postmark": {"server_token": "abc", "timeout": 5}})
        >>> config.timeout
        5.0
        >>> load_transport_config_from_dict({}).server_token is None
        True
    """
    section: Any = config_dict.get("postmark", {})

    # Non-mapping sections go straight to Pydantic for a proper error
    if not isinstance(section, Mapping):
        return TransportConfig.model_validate(section)

    raw: dict[str, Any] = dict(cast(Mapping[str, Any], section))
    return TransportConfig.model_validate(raw)


__all__ = [
    "DEFAULT_API_URI",
    "TransportConfig",
    "load_transport_config_from_dict",
]
