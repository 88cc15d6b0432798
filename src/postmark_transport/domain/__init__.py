"""Domain layer - pure message translation with no I/O or framework dependencies.

Contents:
    * :mod:`.message` - Message, Address and BodyPart value objects
    * :mod:`.payload` - Message-to-payload extraction and invariants
    * :mod:`.outcome` - Explicit send result
    * :mod:`.enums` - Domain enumerations (BodyKind, ErrorKind, OutputFormat)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import BodyKind, ErrorKind, OutputFormat
from .errors import (
    AuthError,
    ConfigurationError,
    DeliveryError,
    PostmarkError,
    ProtocolError,
    ServerError,
    UnavailableError,
    UnknownAPIError,
    ValidationError,
)
from .message import TAG_HEADER, Address, BodyPart, Message
from .outcome import SendOutcome
from .payload import RECIPIENTS_LIMIT, AttachmentRecord, OutboundPayload, build_payload

__all__ = [
    # Message model
    "TAG_HEADER",
    "Address",
    "BodyPart",
    "Message",
    # Payload
    "RECIPIENTS_LIMIT",
    "AttachmentRecord",
    "OutboundPayload",
    "build_payload",
    # Outcome
    "SendOutcome",
    # Enums
    "BodyKind",
    "ErrorKind",
    "OutputFormat",
    # Errors
    "AuthError",
    "ConfigurationError",
    "DeliveryError",
    "PostmarkError",
    "ProtocolError",
    "ServerError",
    "UnavailableError",
    "UnknownAPIError",
    "ValidationError",
]
