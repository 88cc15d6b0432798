"""Composition root: chooses the adapter behind every application port.

The CLI receives a zero-argument factory returning :class:`AppServices`.
Real runs use :func:`build_production`; tests use :func:`build_testing` or
replace single fields with ``dataclasses.replace``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config
from ..adapters.logging.setup import init_logging
from ..adapters.postmark.config import load_transport_config_from_dict
from ..adapters.postmark.transport import send_message

# Checked by pyright only: each production adapter must match its port.
if TYPE_CHECKING:
    from ..adapters.memory.postmark import TransportSpy
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadTransportConfigFromDict,
        SendMessage,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_send_message: SendMessage = send_message
    _assert_load_transport_config_from_dict: LoadTransportConfigFromDict = load_transport_config_from_dict
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """One implementation per application port."""

    get_config: GetConfig
    display_config: DisplayConfig
    send_message: SendMessage
    load_transport_config_from_dict: LoadTransportConfigFromDict
    init_logging: InitLogging


def build_production() -> AppServices:
    """Layered config files, lib_log_rich and the Postmark HTTP API."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        send_message=send_message,
        load_transport_config_from_dict=load_transport_config_from_dict,
        init_logging=init_logging,
    )


def build_testing(
    *,
    spy: TransportSpy | None = None,
    config: Mapping[str, Any] | None = None,
) -> AppServices:
    """Services for tests: no files, no HTTP, no logging runtime.

    Args:
        spy: Receives every send; pass one to inspect the captured payloads.
        config: Layered configuration to serve instead of an empty one, e.g.
            ``{"postmark": {"server_token": "t"}}``.
    """
    from ..adapters.memory import (
        TransportSpy,
        config_in_memory,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        load_transport_config_from_dict_in_memory,
    )

    transport_spy = spy if spy is not None else TransportSpy()

    return AppServices(
        get_config=get_config_in_memory if config is None else config_in_memory(config),
        display_config=display_config_in_memory,
        send_message=transport_spy.send_message,
        load_transport_config_from_dict=load_transport_config_from_dict_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
]
