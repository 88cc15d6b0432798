"""Render the merged configuration for ``postmark-transport config``.

lib_layered_config masks sensitive keys such as ``postmark.server_token``
itself, so the loaded Config is handed over unchanged and keeps its
provenance comments.
"""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as render_layered_config
from rich.console import Console

from postmark_transport.domain.enums import OutputFormat


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Print *config* as annotated TOML or as JSON.

    Pending log records are flushed first so they do not interleave with the
    dump.

    Args:
        config: Loaded layered configuration.
        output_format: ``human`` or ``json``.
        section: Show only this top-level section, e.g. ``postmark``.
        console: Rich console to print to; tests pass a recording one.
        profile: Profile name shown in the provenance comments.

    Raises:
        ValueError: If *section* does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    render_layered_config(
        config,
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


__all__ = ["display_config"]
