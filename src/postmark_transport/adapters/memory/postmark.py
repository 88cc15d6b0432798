"""In-memory Postmark adapters for testing.

Contents:
    * :class:`TransportSpy` - Captures send calls for test assertions.
    * :func:`load_transport_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from postmark_transport.domain.errors import ConfigurationError
from postmark_transport.domain.message import Message
from postmark_transport.domain.payload import OutboundPayload, build_payload

from ..postmark.config import TransportConfig


@dataclass(frozen=True, slots=True)
class SentMessage:
    """One captured send: the config used and the payload that would be posted."""

    config: TransportConfig
    message: Message
    payload: OutboundPayload


def _empty_sent_list() -> list[SentMessage]:
    return []


@dataclass
class TransportSpy:
    """Captures send operations without any HTTP traffic.

    Applies the same checks as the real transport (server token present,
    payload builds) so CLI stories exercise the real validation path.

    Attributes:
        sent: Captured sends, in order.
        result: Result mapping returned for every successful send.
        raise_exception: When set, send raises it after capturing the call.

    Example:
        >>> from postmark_transport.domain.message import Address
        >>> spy = TransportSpy()
        >>> msg = Message(from_addresses=(Address("a@x.com"),), to=(Address("b@x.com"),), body="hi")
        >>> spy.send_message(config=TransportConfig(server_token="t"), message=msg)["MessageID"]
        'spy-1'
        >>> spy.sent[0].payload.to
        'b@x.com'
    """

    sent: list[SentMessage] = field(default_factory=_empty_sent_list)
    result: Mapping[str, Any] | None = None
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent.clear()
        self.raise_exception = None

    def send_message(self, *, config: TransportConfig, message: Message) -> Mapping[str, Any]:
        """Record the call and return a canned API result.

        Raises:
            ConfigurationError: When config carries no server token.
            ValidationError: When the message breaks a sending invariant.
            Exception: If raise_exception is set, raises that exception.
        """
        if not config.server_token:
            raise ConfigurationError("PostmarkTransport requires API key")
        payload = build_payload(message)
        self.sent.append(SentMessage(config=config, message=message, payload=payload))
        if self.raise_exception is not None:
            raise self.raise_exception
        if self.result is not None:
            return self.result
        return {"ErrorCode": 0, "Message": "OK", "MessageID": f"spy-{len(self.sent)}", "To": payload.to}


def load_transport_config_from_dict_in_memory(config_dict: Mapping[str, Any]) -> TransportConfig:
    """Parse transport config from dict using the real Pydantic model."""
    raw = config_dict.get("postmark", {})
    return TransportConfig.model_validate(raw if raw else {})


__all__ = [
    "SentMessage",
    "TransportSpy",
    "load_transport_config_from_dict_in_memory",
]
