"""Type-safe domain enums for body parts, error kinds, and output formats."""

from __future__ import annotations

from enum import Enum


class BodyKind(str, Enum):
    """Role a body part plays in the outgoing payload.

    HTML and plain-text parts become ``HtmlBody`` / ``TextBody``; every other
    MIME type is sent as an attachment.

    Example:
        >>> BodyKind.from_content_type("text/html; charset=utf-8")
        <BodyKind.HTML: 'html'>
        >>> BodyKind.from_content_type("application/pdf")
        <BodyKind.ATTACHMENT: 'attachment'>
    """

    HTML = "html"
    TEXT = "text"
    ATTACHMENT = "attachment"

    @classmethod
    def from_content_type(cls, content_type: str) -> BodyKind:
        """Classify a MIME type, ignoring parameters and case."""
        mime = content_type.split(";", 1)[0].strip().lower()
        if mime == "text/html":
            return cls.HTML
        if mime == "text/plain":
            return cls.TEXT
        return cls.ATTACHMENT


class ErrorKind(str, Enum):
    """Classification of every failure a send can end with.

    Example:
        >>> ErrorKind.AUTH.value
        'auth'
        >>> ErrorKind.VALIDATION == "validation"
        True
    """

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    AUTH = "auth"
    SERVER = "server"
    UNAVAILABLE = "unavailable"
    UNKNOWN_API = "unknown_api"
    PROTOCOL = "protocol"
    DELIVERY = "delivery"


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Example:
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = [
    "BodyKind",
    "ErrorKind",
    "OutputFormat",
]
