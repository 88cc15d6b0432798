"""Postmark adapter - HTTP email delivery.

Structure:
    * :mod:`.config` - Transport configuration model and loader
    * :mod:`.response` - Response classification
    * :mod:`.transport` - PostmarkTransport and send_message
    * :mod:`.validation` - Address parsing for CLI input
"""

from __future__ import annotations

from .config import TransportConfig, load_transport_config_from_dict
from .response import parse_response
from .transport import PostmarkTransport, send_message
from .validation import parse_address, parse_addresses

__all__ = [
    "PostmarkTransport",
    "TransportConfig",
    "load_transport_config_from_dict",
    "parse_address",
    "parse_addresses",
    "parse_response",
    "send_message",
]
