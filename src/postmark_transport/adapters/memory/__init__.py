"""In-memory adapter implementations for testing.

Lightweight implementations of the application ports that operate entirely
in memory -- no filesystem, no HTTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.postmark` - In-memory transport adapters (TransportSpy class)
    * :mod:`.logging` - In-memory logging adapters
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import config_in_memory, display_config_in_memory, get_config_in_memory
from .logging import DebugLogSpy, init_logging_in_memory
from .postmark import SentMessage, TransportSpy, load_transport_config_from_dict_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from postmark_transport.application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadTransportConfigFromDict,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_transport_config: LoadTransportConfigFromDict = load_transport_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory

__all__ = [
    "DebugLogSpy",
    "SentMessage",
    "TransportSpy",
    "config_in_memory",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
    "load_transport_config_from_dict_in_memory",
]
