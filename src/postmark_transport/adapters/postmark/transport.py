"""Postmark HTTP transport.

Provides :class:`PostmarkTransport`, which turns a domain
:class:`~postmark_transport.domain.message.Message` into one POST to the
Postmark ``/email`` endpoint, and :func:`send_message`, the function wired
into the application's ``SendMessage`` port.

See http://developer.postmarkapp.com/developer-build.html for the API.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx
import orjson

from postmark_transport.domain.errors import ConfigurationError, DeliveryError, PostmarkError
from postmark_transport.domain.message import Message
from postmark_transport.domain.outcome import SendOutcome
from postmark_transport.domain.payload import OutboundPayload, build_payload

from .config import TransportConfig
from .response import parse_response

logger = logging.getLogger(__name__)

#: Header carrying the server token.
TOKEN_HEADER = "X-Postmark-Server-Token"

#: Endpoint path for single-message sends, relative to ``api_uri``.
EMAIL_PATH = "email"

DebugLog = Callable[[str, int], None]
"""Logger collaborator: receives a message and a ``logging`` level."""


def _log_to_module_logger(message: str, level: int) -> None:
    logger.log(level, message)


class PostmarkTransport:
    """Send messages through the Postmark API, one request per message.

    Args:
        config: Validated transport settings; ``server_token`` is required.
        log: Receives the redacted debug line when ``config.debug_mode`` is
            on. Defaults to this module's logger.
        http_transport: Optional httpx transport, e.g. ``httpx.MockTransport``
            in tests. A fresh client is built around it for every request.

    Raises:
        ConfigurationError: When no server token is configured.

    Example:
        >>> PostmarkTransport(TransportConfig())  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ConfigurationError: PostmarkTransport requires API key
    """

    def __init__(
        self,
        config: TransportConfig,
        *,
        log: DebugLog | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not config.server_token:
            raise ConfigurationError(f"{type(self).__name__} requires API key")
        self._config = config
        self._server_token = config.server_token
        self._log = log if log is not None else _log_to_module_logger
        self._http_transport = http_transport

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return self._config.api_uri + EMAIL_PATH

    def build_http_client(self) -> httpx.Client:
        """Return a client with the API headers and configured timeout."""
        return httpx.Client(
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                TOKEN_HEADER: self._server_token,
            },
            timeout=self._config.timeout,
            transport=self._http_transport,
        )

    def send(self, message: Message) -> dict[str, Any]:
        """Send *message* and return the decoded API result.

        Validation failures raise before any request is made. Once the
        request is attempted, a redacted debug line is logged whether it
        succeeds or fails (debug mode only); errors are re-raised unchanged.

        Raises:
            ValidationError: The message breaks a sending invariant, or the
                API answered 422.
            AuthError: HTTP 401.
            ServerError: HTTP 500.
            UnavailableError: HTTP 503.
            UnknownAPIError: Other error statuses.
            ProtocolError: The success body is not a JSON object.
            DeliveryError: The request failed before a response arrived.
        """
        payload = build_payload(message)

        error_message: str | None = None
        try:
            return self._post(payload)
        except BaseException as exc:
            error_message = str(exc)
            raise
        finally:
            if self._config.debug_mode:
                self._log_debug_summary(payload, error_message)

    def try_send(self, message: Message) -> SendOutcome:
        """Like :meth:`send`, but return a :class:`SendOutcome` instead of raising.

        Only :class:`PostmarkError` failures are captured; anything else is a
        bug and still propagates.
        """
        try:
            return SendOutcome.success(self.send(message))
        except PostmarkError as exc:
            return SendOutcome.failure(exc)

    def _post(self, payload: OutboundPayload) -> dict[str, Any]:
        body = orjson.dumps(payload.as_api_dict())
        try:
            with self.build_http_client() as client:
                response = client.post(self.endpoint, content=body)
        except httpx.TransportError as exc:
            raise DeliveryError(f"Request to Postmark failed: {exc}") from exc
        return parse_response(response.status_code, response.content)

    def _log_debug_summary(self, payload: OutboundPayload, error_message: str | None) -> None:
        summary = orjson.dumps(payload.debug_summary()).decode("utf-8")
        status = f"failed with error '{error_message}'" if error_message is not None else "sent"
        self._log(f"Postmark email {status}: {summary}", logging.DEBUG)


def send_message(
    *,
    config: TransportConfig,
    message: Message,
    http_transport: httpx.BaseTransport | None = None,
) -> dict[str, Any]:
    """Send one message with a transport built from *config*.

    Nothing is logged here; the only log line is the transport's debug-mode
    summary.

    Args:
        config: Transport settings.
        message: The message to send.
        http_transport: Optional httpx transport override.

    Returns:
        The decoded API result (``To``, ``SubmittedAt``, ``MessageID`` ...).

    Raises:
        ConfigurationError: No server token configured.
        PostmarkError: Any validation, API, or delivery failure.
    """
    return PostmarkTransport(config, http_transport=http_transport).send(message)


__all__ = [
    "EMAIL_PATH",
    "TOKEN_HEADER",
    "DebugLog",
    "PostmarkTransport",
    "send_message",
]
