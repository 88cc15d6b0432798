"""Run the ``postmark-transport`` command group and turn its outcome into an exit code."""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from postmark_transport import __init__conf__

from .context import apply_traceback_preferences, snapshot_traceback_state, traceback_length_limit, traceback_scope

if TYPE_CHECKING:
    from postmark_transport.composition import AppServices


def _report_failure(exc: BaseException) -> int:
    """Print *exc* through lib_cli_exit_tools and return the matching exit code."""
    show_traceback = snapshot_traceback_state().enabled
    apply_traceback_preferences(show_traceback)
    lib_cli_exit_tools.print_exception_message(trace_back=show_traceback, length_limit=traceback_length_limit())
    return lib_cli_exit_tools.get_system_exit_code(exc)


def _invoke(args: list[str], services_factory: Callable[[], AppServices]) -> int:
    # lib_cli_exit_tools.run_cli has no way to hand ``obj`` to the group,
    # so Click runs non-standalone and failures are reported here instead.
    from .root import cli

    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, obj=services_factory, standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:  # SystemExit from commands carries their exit code
        return _report_failure(exc)
    return 0


def _shutdown_logging() -> None:
    # Worker threads share the runtime; only the main thread tears it down.
    if threading.current_thread() is not threading.main_thread():
        return
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run the CLI once and return its exit code.

    Args:
        argv: Arguments without the program name; None reads ``sys.argv``.
        restore_traceback: Put the traceback switches back as they were
            before the run.
        services_factory: Builds the AppServices for this run. The console
            script passes ``build_production``.

    Raises:
        ValueError: If services_factory is missing.
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    args = list(sys.argv[1:] if argv is None else argv)
    try:
        with traceback_scope(restore=restore_traceback):
            return _invoke(args, services_factory)
    finally:
        _shutdown_logging()


__all__ = ["main"]
