"""Transport stories: request shape, debug logging, error propagation, outcomes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING

import httpx
import orjson
import pytest

from postmark_transport.adapters.memory import DebugLogSpy
from postmark_transport.adapters.postmark import transport as transport_mod
from postmark_transport.adapters.postmark.config import TransportConfig
from postmark_transport.adapters.postmark.transport import TOKEN_HEADER, PostmarkTransport, send_message
from postmark_transport.domain.enums import ErrorKind
from postmark_transport.domain.errors import (
    AuthError,
    ConfigurationError,
    DeliveryError,
    ProtocolError,
    ServerError,
    ValidationError,
)
from postmark_transport.domain.message import Address, BodyPart, Message

if TYPE_CHECKING:
    from conftest import FakePostmarkApi


# ======================== Construction ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize("token", [None, "", "   "])
def test_transport_without_server_token_refuses_to_start(token: str | None) -> None:
    with pytest.raises(ConfigurationError, match="PostmarkTransport requires API key"):
        PostmarkTransport(TransportConfig(server_token=token))


@pytest.mark.os_agnostic
def test_endpoint_is_email_path_under_api_uri() -> None:
    transport = PostmarkTransport(TransportConfig(server_token="t", api_uri="http://localhost:8080/api/"))

    assert transport.endpoint == "http://localhost:8080/api/email"


# ======================== Request shape ========================


@pytest.mark.os_agnostic
def test_send_posts_json_with_token_header(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    transport = PostmarkTransport(transport_config, http_transport=fake_api.transport)

    result = transport.send(simple_message)

    assert result["MessageID"] == "b7bc2f4a-e38e-4336-af7d-e6c392c2f817"
    assert len(fake_api.requests) == 1
    request = fake_api.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.postmarkapp.com/email"
    assert request.headers[TOKEN_HEADER] == "server-token-123"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.os_agnostic
def test_send_body_carries_every_payload_field(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    PostmarkTransport(transport_config, http_transport=fake_api.transport).send(simple_message)

    body = fake_api.last_json
    assert body["From"] == "Shop <shop@example.com>"
    assert body["To"] == "customer@example.com"
    assert body["ReplyTo"] == "support@example.com"
    assert body["TextBody"] == "Thanks for your order."
    assert body["Tag"] == "order-confirmation"
    assert set(body) == {"To", "Cc", "Bcc", "From", "Subject", "ReplyTo", "HtmlBody", "TextBody", "Attachments", "Tag"}


@pytest.mark.os_agnostic
def test_send_encodes_attachments(transport_config: TransportConfig, fake_api: FakePostmarkApi) -> None:
    message = Message(
        from_addresses=(Address("shop@example.com"),),
        to=(Address("a@example.com"),),
        body=[BodyPart.html("<p>invoice</p>"), BodyPart.attachment(b"abc", "application/pdf", "invoice.pdf")],
    )

    PostmarkTransport(transport_config, http_transport=fake_api.transport).send(message)

    assert fake_api.last_json["Attachments"] == [
        {"ContentType": "application/pdf", "Name": "invoice.pdf", "Content": "YWJj"},
    ]
    assert fake_api.last_json["HtmlBody"] == "<p>invoice</p>"


@pytest.mark.os_agnostic
def test_invalid_message_is_never_posted(transport_config: TransportConfig, fake_api: FakePostmarkApi) -> None:
    transport = PostmarkTransport(transport_config, http_transport=fake_api.transport)

    with pytest.raises(ValidationError, match="at least one of"):
        transport.send(Message(from_addresses=(Address("shop@example.com"),), body="hi"))

    assert fake_api.requests == []


# ======================== Error propagation ========================


@pytest.mark.os_agnostic
def test_api_error_propagates_as_typed_error(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    fake_api.respond_json(401, {"ErrorCode": 10, "Message": "Bad or missing API token"})
    transport = PostmarkTransport(transport_config, http_transport=fake_api.transport)

    with pytest.raises(AuthError):
        transport.send(simple_message)


@pytest.mark.os_agnostic
def test_network_failure_becomes_delivery_error(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    fake_api.error = httpx.ConnectError("Connection refused")
    transport = PostmarkTransport(transport_config, http_transport=fake_api.transport)

    with pytest.raises(DeliveryError, match="Connection refused") as exc_info:
        transport.send(simple_message)

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.os_agnostic
def test_non_object_success_body_is_protocol_error(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    fake_api.body = b"[]"
    transport = PostmarkTransport(transport_config, http_transport=fake_api.transport)

    with pytest.raises(ProtocolError):
        transport.send(simple_message)


# ======================== Debug logging ========================


@pytest.mark.os_agnostic
def test_debug_mode_logs_success_without_recipients_or_body(
    debug_transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    log = DebugLogSpy()
    transport = PostmarkTransport(debug_transport_config, log=log, http_transport=fake_api.transport)

    transport.send(simple_message)

    assert len(log.records) == 1
    message, level = log.records[0]
    assert level == logging.DEBUG
    assert message.startswith("Postmark email sent: ")
    summary = orjson.loads(message.removeprefix("Postmark email sent: "))
    assert summary == {
        "From": "Shop <shop@example.com>",
        "Subject": "Your order",
        "ReplyTo": "support@example.com",
        "Tag": "order-confirmation",
    }
    assert "customer@example.com" not in message
    assert "Thanks for your order." not in message


@pytest.mark.os_agnostic
def test_debug_mode_logs_failure_with_error_message(
    debug_transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    fake_api.respond_json(500, {})
    log = DebugLogSpy()
    transport = PostmarkTransport(debug_transport_config, log=log, http_transport=fake_api.transport)

    with pytest.raises(ServerError):
        transport.send(simple_message)

    assert len(log.messages) == 1
    assert log.messages[0].startswith(
        "Postmark email failed with error 'Postmark request error: Postmark Internal Server Error': "
    )
    assert "customer@example.com" not in log.messages[0]


@pytest.mark.os_agnostic
def test_debug_mode_logs_delivery_failures(
    debug_transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    fake_api.error = httpx.ReadTimeout("timed out")
    log = DebugLogSpy()
    transport = PostmarkTransport(debug_transport_config, log=log, http_transport=fake_api.transport)

    with pytest.raises(DeliveryError):
        transport.send(simple_message)

    assert "failed with error 'Request to Postmark failed: timed out'" in log.messages[0]


@pytest.mark.os_agnostic
def test_debug_mode_off_logs_nothing(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    log = DebugLogSpy()
    transport = PostmarkTransport(transport_config, log=log, http_transport=fake_api.transport)

    transport.send(simple_message)

    assert log.records == []


@pytest.mark.os_agnostic
def test_validation_failures_are_not_debug_logged(debug_transport_config: TransportConfig) -> None:
    log = DebugLogSpy()
    transport = PostmarkTransport(debug_transport_config, log=log)

    with pytest.raises(ValidationError):
        transport.send(Message())

    assert log.records == []


# ======================== try_send ========================


@pytest.mark.os_agnostic
def test_try_send_returns_success_outcome(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    outcome = PostmarkTransport(transport_config, http_transport=fake_api.transport).try_send(simple_message)

    assert outcome.ok
    assert outcome.unwrap()["MessageID"] == "b7bc2f4a-e38e-4336-af7d-e6c392c2f817"


@pytest.mark.os_agnostic
def test_try_send_captures_api_errors(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    fake_api.respond_json(503, {})

    outcome = PostmarkTransport(transport_config, http_transport=fake_api.transport).try_send(simple_message)

    assert not outcome.ok
    assert outcome.error_kind is ErrorKind.UNAVAILABLE
    assert outcome.result is None


@pytest.mark.os_agnostic
def test_try_send_captures_validation_errors(transport_config: TransportConfig) -> None:
    outcome = PostmarkTransport(transport_config).try_send(Message())

    assert outcome.error_kind is ErrorKind.VALIDATION
    with pytest.raises(ValidationError):
        outcome.unwrap()


@pytest.mark.os_agnostic
def test_try_send_captures_undecodable_body_without_calling_the_api(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    message = replace(simple_message, body=(BodyPart(b"\xff\xfe", "text/plain"),))

    outcome = PostmarkTransport(transport_config, http_transport=fake_api.transport).try_send(message)

    assert outcome.error_kind is ErrorKind.VALIDATION
    assert fake_api.requests == []


@pytest.mark.os_agnostic
def test_send_rejects_unknown_charset_as_validation_error(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    message = replace(simple_message, body=(BodyPart(b"hi", "text/plain", charset="no-such-charset"),))

    with pytest.raises(ValidationError, match="Cannot decode text/plain body part"):
        PostmarkTransport(transport_config, http_transport=fake_api.transport).send(message)


# ======================== send_message ========================


@pytest.mark.os_agnostic
def test_send_message_builds_transport_and_returns_result(
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    result = send_message(config=transport_config, message=simple_message, http_transport=fake_api.transport)

    assert result["Message"] == "OK"
    assert len(fake_api.requests) == 1


@pytest.mark.os_agnostic
def test_send_message_logs_nothing_when_debug_mode_is_off(
    monkeypatch: pytest.MonkeyPatch,
    transport_config: TransportConfig,
    simple_message: Message,
    fake_api: FakePostmarkApi,
) -> None:
    records: list[tuple[str, tuple[object, ...]]] = []

    class _RecordingLogger:
        def __getattr__(self, name: str) -> Callable[..., None]:
            return lambda *args, **_kwargs: records.append((name, args))

    monkeypatch.setattr(transport_mod, "logger", _RecordingLogger())

    send_message(config=transport_config, message=simple_message, http_transport=fake_api.transport)

    assert records == []


@pytest.mark.os_agnostic
def test_send_message_without_token_raises_configuration_error(simple_message: Message) -> None:
    with pytest.raises(ConfigurationError):
        send_message(config=TransportConfig(), message=simple_message)


@pytest.mark.os_agnostic
def test_http_client_uses_configured_timeout(fake_api: FakePostmarkApi) -> None:
    config = TransportConfig(server_token="t", timeout=2.5)
    transport = PostmarkTransport(config, http_transport=fake_api.transport)

    with transport.build_http_client() as client:
        assert client.timeout.read == 2.5
