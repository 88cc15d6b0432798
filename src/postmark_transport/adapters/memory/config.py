"""Configuration ports backed by a plain dict instead of layered files."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lib_layered_config import Config

from postmark_transport.application.ports import GetConfig
from postmark_transport.domain.enums import OutputFormat


def config_in_memory(data: Mapping[str, Any] | None = None) -> GetConfig:
    """Return a ``get_config`` that always yields *data*, whatever the profile.

    Example:
        >>> get = config_in_memory({"postmark": {"debug_mode": True}})
        >>> get(profile="staging").get("postmark.debug_mode")
        True
    """
    config = Config(dict(data or {}), {})

    def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
        return config

    return _get_config


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """An empty configuration: every ``postmark`` setting at its default."""
    return Config({}, {})


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """Discard the display request."""


__all__ = [
    "config_in_memory",
    "display_config_in_memory",
    "get_config_in_memory",
]
