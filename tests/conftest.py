"""Shared pytest fixtures for transport, CLI and module-entry tests.

Fixtures use descriptive names that read as plain English; tests pick them
up implicitly via pytest's conftest discovery.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import orjson
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from postmark_transport.adapters.postmark.config import TransportConfig
from postmark_transport.domain.message import Address, Message

if TYPE_CHECKING:
    from postmark_transport.adapters.memory.postmark import TransportSpy
    from postmark_transport.composition import AppServices


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()


_ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that removes ANSI escape sequences from rich CLI output."""

    def _strip(value: str) -> str:
        return _ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output; log lines go to stderr.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for CLI invocations."""
    from postmark_transport.composition import build_production

    return build_production


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore them after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = (lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color)
    try:
        yield
    finally:
        lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = snapshot


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before each test."""
    from postmark_transport.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def transport_config() -> TransportConfig:
    """A valid config with a server token and debug mode off."""
    return TransportConfig(server_token="server-token-123")


@pytest.fixture
def debug_transport_config() -> TransportConfig:
    """A valid config with debug mode on."""
    return TransportConfig(server_token="server-token-123", debug_mode=True)


@pytest.fixture
def simple_message() -> Message:
    """One sender, one recipient, a subject, a text body and a tag."""
    return Message(
        from_addresses=(Address("shop@example.com", "Shop"),),
        to=(Address("customer@example.com"),),
        reply_to=(Address("support@example.com"),),
        subject="Your order",
        body="Thanks for your order.",
        headers=(("Postmark-Tag", "order-confirmation"),),
    )


@dataclass
class FakePostmarkApi:
    """Records requests and answers them with one canned response.

    Attributes:
        status_code: HTTP status of every response.
        body: Raw response body.
        requests: Requests received, in order.
        error: When set, raised instead of responding (simulates network failure).
    """

    status_code: int = 200
    body: bytes = b'{"ErrorCode": 0, "Message": "OK", "MessageID": "b7bc2f4a-e38e-4336-af7d-e6c392c2f817"}'
    requests: list[httpx.Request] = field(default_factory=list)
    error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def respond_json(self, status_code: int, data: object) -> None:
        self.status_code = status_code
        self.body = orjson.dumps(data)

    @property
    def last_json(self) -> dict[str, Any]:
        return orjson.loads(self.requests[-1].content)


@pytest.fixture
def fake_api() -> FakePostmarkApi:
    """A fake Postmark API answering 200 with a MessageID."""
    return FakePostmarkApi()


@dataclass
class SendCliContext:
    """Services factory plus the spy capturing sends made through it."""

    factory: Callable[[], Any]
    spy: TransportSpy


@pytest.fixture
def send_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], SendCliContext]:
    """Create a CLI test context whose ``postmark`` section is *postmark_data*.

    Example:
        def test_send(cli_runner, send_cli_context) -> None:
            ctx = send_cli_context({"server_token": "t"})
            result = cli_runner.invoke(cli, ["send", ...], obj=ctx.factory)
            assert ctx.spy.sent[0].payload.to == "a@example.com"
    """
    from postmark_transport.adapters.memory import (
        TransportSpy,
        config_in_memory,
        load_transport_config_from_dict_in_memory,
    )
    from postmark_transport.composition import AppServices, build_production

    def _create(postmark_data: dict[str, Any]) -> SendCliContext:
        spy = TransportSpy()
        prod = build_production()
        test_services = AppServices(
            get_config=config_in_memory({"postmark": postmark_data}),
            display_config=prod.display_config,
            send_message=spy.send_message,
            load_transport_config_from_dict=load_transport_config_from_dict_in_memory,
            init_logging=prod.init_logging,
        )
        return SendCliContext(factory=lambda: test_services, spy=spy)

    return _create


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a services factory whose get_config returns *config_data*."""
    from postmark_transport.adapters.memory import config_in_memory
    from postmark_transport.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        prod = build_production()
        test_services = AppServices(
            get_config=config_in_memory(config_data),
            display_config=prod.display_config,
            send_message=prod.send_message,
            load_transport_config_from_dict=prod.load_transport_config_from_dict,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _create
