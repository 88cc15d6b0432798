"""``config`` command: show the merged layered configuration."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from postmark_transport.domain.enums import OutputFormat

from ..context import CLICK_CONTEXT_SETTINGS, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

_FORMAT_CHOICES = [fmt.value for fmt in OutputFormat]


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(_FORMAT_CHOICES, case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    show_default=True,
    help="Render as a human-readable table or as JSON",
)
@click.option(
    "--section",
    metavar="NAME",
    default=None,
    help="Limit output to one top-level section, such as 'postmark' or 'lib_log_rich'",
)
@click.pass_context
def cli_config(ctx: click.Context, output_format: str, section: str | None) -> None:
    """Show the configuration ``send`` would use.

    Layers merge in this order, later ones winning:
    defaults, app, host, user, dotenv, environment.
    """
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    with lib_log_rich.runtime.bind(job_id="cli-config", extra=cli_ctx.log_extra("config", format=fmt.value)):
        logger.info("Displaying configuration", extra={"section": section})
        click.echo()
        try:
            cli_ctx.services.display_config(cli_ctx.config, output_format=fmt, section=section, profile=cli_ctx.profile)
        except ValueError as exc:
            # display_config raises ValueError for an unknown section
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


__all__ = ["cli_config"]
