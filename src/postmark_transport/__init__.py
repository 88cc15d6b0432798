"""Send transactional mail through the Postmark HTTP API.

Public surface:
    * Message model: :class:`Message`, :class:`Address`, :class:`BodyPart`
    * Transport: :class:`PostmarkTransport`, :class:`TransportConfig`,
      :func:`send_message`
    * Results and errors: :class:`SendOutcome`, :class:`PostmarkError` and
      its subclasses

Example:
    >>> from postmark_transport import Address, Message, PostmarkTransport, TransportConfig
    >>> transport = PostmarkTransport(TransportConfig(server_token="server-token"))
    >>> message = Message(
    ...     from_addresses=(Address("shop@example.com", "Shop"),),
    ...     to=(Address("customer@example.com"),),
    ...     subject="Your order",
    ...     body="Thanks for your order.",
    ... )
    >>> transport.send(message)  # doctest: +SKIP
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .adapters.postmark import PostmarkTransport, TransportConfig, send_message
from .composition import get_config
from .domain import (
    RECIPIENTS_LIMIT,
    TAG_HEADER,
    Address,
    AuthError,
    BodyKind,
    BodyPart,
    ConfigurationError,
    DeliveryError,
    ErrorKind,
    Message,
    OutboundPayload,
    PostmarkError,
    ProtocolError,
    SendOutcome,
    ServerError,
    UnavailableError,
    UnknownAPIError,
    ValidationError,
    build_payload,
)

__all__ = [
    "RECIPIENTS_LIMIT",
    "TAG_HEADER",
    "Address",
    "AuthError",
    "BodyKind",
    "BodyPart",
    "ConfigurationError",
    "DeliveryError",
    "ErrorKind",
    "Message",
    "OutboundPayload",
    "PostmarkError",
    "PostmarkTransport",
    "ProtocolError",
    "SendOutcome",
    "ServerError",
    "TransportConfig",
    "UnavailableError",
    "UnknownAPIError",
    "ValidationError",
    "build_payload",
    "get_config",
    "print_info",
    "send_message",
]
