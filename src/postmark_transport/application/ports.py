"""Ports the CLI depends on, written as callable Protocols.

Adapters are plain functions (or callables such as ``TransportSpy.send_message``)
that match these signatures structurally; nothing subclasses them. ``Config`` and
``TransportConfig`` appear in signatures only, so they are imported for type
checking and the application layer never imports an adapter at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat
from ..domain.message import Message

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.postmark.config import TransportConfig


class GetConfig(Protocol):
    """Return the merged configuration for an optional profile."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Print a configuration, optionally a single section, as TOML or JSON."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class SendMessage(Protocol):
    """Send one message through Postmark and return the decoded API result."""

    def __call__(self, *, config: TransportConfig, message: Message) -> Mapping[str, Any]: ...


class LoadTransportConfigFromDict(Protocol):
    """Validate the ``postmark`` section of a configuration mapping."""

    def __call__(self, config_dict: Mapping[str, Any]) -> TransportConfig: ...


class InitLogging(Protocol):
    """Start logging from the loaded configuration; repeat calls are no-ops."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadTransportConfigFromDict",
    "SendMessage",
]
