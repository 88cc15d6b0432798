"""Application layer: the ports wired together in :mod:`postmark_transport.composition`."""

from __future__ import annotations

from .ports import DisplayConfig, GetConfig, InitLogging, LoadTransportConfigFromDict, SendMessage

__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadTransportConfigFromDict",
    "SendMessage",
]
