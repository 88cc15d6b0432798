"""Per-invocation CLI state and the lib_cli_exit_tools traceback switches.

The root group resolves configuration and services once and stores them as a
:class:`CLIContext` on ``ctx.obj``. Subcommands read it back through
:func:`get_cli_context` and ask it for the Postmark transport settings rather
than parsing the ``postmark`` section themselves.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, NamedTuple

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

if TYPE_CHECKING:
    from postmark_transport.adapters.postmark.config import TransportConfig
    from postmark_transport.composition import AppServices

CLICK_CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {"help_option_names": ["-h", "--help"]}

#: Characters of exception text printed without ``--traceback``.
TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
#: Characters of exception text printed with ``--traceback``.
TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000


class TracebackState(NamedTuple):
    """The two lib_cli_exit_tools switches that ``--traceback`` flips."""

    enabled: bool
    force_color: bool


@dataclass(slots=True)
class CLIContext:
    """State the root group hands to every subcommand."""

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None

    def transport_config(self) -> TransportConfig:
        """Validate the ``postmark`` section of the loaded configuration.

        Raises:
            pydantic.ValidationError: When the section holds invalid values.
        """
        return self.services.load_transport_config_from_dict(self.config.as_dict())

    def log_extra(self, command: str, **fields: Any) -> dict[str, Any]:
        """Context fields bound to the log records of *command*."""
        return {"command": command, "profile": self.profile, **fields}


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
) -> CLIContext:
    """Swap the services factory on ``ctx.obj`` for the resolved state."""
    cli_ctx = CLIContext(traceback=traceback, config=config, services=services, profile=profile)
    ctx.obj = cli_ctx
    return cli_ctx


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the state stored by the root group.

    Raises:
        RuntimeError: When a subcommand runs without the root group.
    """
    cli_ctx = ctx.obj
    if isinstance(cli_ctx, CLIContext):
        return cli_ctx
    raise RuntimeError("CLI context not initialized. Call store_cli_context first.")


def apply_traceback_preferences(enabled: bool) -> None:
    """Set both traceback switches to *enabled*.

    Example:
        >>> apply_traceback_preferences(True)
        >>> bool(lib_cli_exit_tools.config.traceback)
        True
    """
    restore_traceback_state(TracebackState(enabled=bool(enabled), force_color=bool(enabled)))


def snapshot_traceback_state() -> TracebackState:
    """Read the current traceback switches."""
    settings = lib_cli_exit_tools.config
    return TracebackState(
        enabled=bool(getattr(settings, "traceback", False)),
        force_color=bool(getattr(settings, "traceback_force_color", False)),
    )


def restore_traceback_state(state: TracebackState) -> None:
    """Write *state* back into lib_cli_exit_tools."""
    enabled, force_color = state
    lib_cli_exit_tools.config.traceback = enabled
    lib_cli_exit_tools.config.traceback_force_color = force_color


@contextmanager
def traceback_scope(*, restore: bool = True) -> Iterator[TracebackState]:
    """Yield the switches as found on entry; put them back on exit when *restore*."""
    previous = snapshot_traceback_state()
    try:
        yield previous
    finally:
        if restore:
            restore_traceback_state(previous)


def traceback_length_limit() -> int:
    """Character budget for the exception report under the current switches."""
    return TRACEBACK_VERBOSE_LIMIT if snapshot_traceback_state().enabled else TRACEBACK_SUMMARY_LIMIT


__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "CLIContext",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
    "traceback_length_limit",
    "traceback_scope",
]
