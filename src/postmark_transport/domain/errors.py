"""Domain-specific exceptions for typed error handling at boundaries.

Every failure a send can end with is a :class:`PostmarkError` subclass that
carries its :class:`~postmark_transport.domain.enums.ErrorKind`, so callers
can branch on the kind without a chain of ``isinstance`` checks.
"""

from __future__ import annotations

from typing import ClassVar

from .enums import ErrorKind


class PostmarkError(Exception):
    """Base class for all transport failures.

    Attributes:
        kind: Classification shared by every instance of the subclass.
        status_code: HTTP status of the API response, when one was received.
        error_code: Postmark ``ErrorCode`` from the response body, if any.
        api_message: Postmark ``Message`` from the response body, if any.

    Example:
        >>> err = UnknownAPIError("boom", status_code=409, error_code=300)
        >>> err.kind
        <ErrorKind.UNKNOWN_API: 'unknown_api'>
        >>> err.status_code, err.error_code
        (409, 300)
    """

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN_API

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: object | None = None,
        api_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.api_message = api_message


class ConfigurationError(PostmarkError):
    """Missing, invalid, or incomplete configuration.

    Raised when the transport is constructed without a server token.

    Example:
        >>> str(ConfigurationError("PostmarkTransport requires API key"))
        'PostmarkTransport requires API key'
    """

    kind = ErrorKind.CONFIGURATION


class ValidationError(PostmarkError, ValueError):
    """The message cannot be sent as built, or the API rejected it (HTTP 422).

    Inherits from ValueError so generic ``except ValueError`` handlers at
    argument-parsing boundaries catch it too.

    Example:
        >>> isinstance(ValidationError("No body specified"), ValueError)
        True
    """

    kind = ErrorKind.VALIDATION


class AuthError(PostmarkError):
    """HTTP 401: the server token is missing or wrong."""

    kind = ErrorKind.AUTH


class ServerError(PostmarkError):
    """HTTP 500: Postmark failed internally."""

    kind = ErrorKind.SERVER


class UnavailableError(PostmarkError):
    """HTTP 503: Postmark is down for planned maintenance."""

    kind = ErrorKind.UNAVAILABLE


class UnknownAPIError(PostmarkError):
    """Any other error status, with the API-provided code and message."""

    kind = ErrorKind.UNKNOWN_API


class ProtocolError(PostmarkError):
    """A success response whose body is not a JSON object."""

    kind = ErrorKind.PROTOCOL


class DeliveryError(PostmarkError):
    """The request never produced a response (connection failure, timeout)."""

    kind = ErrorKind.DELIVERY


__all__ = [
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
