"""In-memory logging adapters for testing."""

from __future__ import annotations

from dataclasses import dataclass, field

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """No-op -- satisfies the InitLogging protocol without side effects."""


def _empty_records() -> list[tuple[str, int]]:
    return []


@dataclass
class DebugLogSpy:
    """Callable logger collaborator that records ``(message, level)`` pairs.

    Example:
        >>> spy = DebugLogSpy()
        >>> spy("Postmark email sent: {}", 10)
        >>> spy.messages
        ['Postmark email sent: {}']
    """

    records: list[tuple[str, int]] = field(default_factory=_empty_records)

    def __call__(self, message: str, level: int) -> None:
        self.records.append((message, level))

    @property
    def messages(self) -> list[str]:
        return [message for message, _ in self.records]


__all__ = ["DebugLogSpy", "init_logging_in_memory"]
