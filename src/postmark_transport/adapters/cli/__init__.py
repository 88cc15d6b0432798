"""Command-line interface for ``postmark-transport``.

:func:`main` runs the :func:`cli` group; the traceback helpers re-exported
here let tests and embedding code save and restore lib_cli_exit_tools state.
"""

from __future__ import annotations

from .commands import cli_config, cli_info, cli_send
from .context import (
    CLICK_CONTEXT_SETTINGS,
    TRACEBACK_SUMMARY_LIMIT,
    TRACEBACK_VERBOSE_LIMIT,
    CLIContext,
    TracebackState,
    apply_traceback_preferences,
    restore_traceback_state,
    snapshot_traceback_state,
    store_cli_context,
    traceback_scope,
)
from .exit_codes import ExitCode, exit_code_for
from .main import main
from .root import cli

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "CLIContext",
    "ExitCode",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
    "TracebackState",
    "apply_traceback_preferences",
    "cli",
    "cli_config",
    "cli_info",
    "cli_send",
    "exit_code_for",
    "main",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
    "traceback_scope",
]
