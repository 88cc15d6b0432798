"""``info`` command: installation metadata plus the resolved Postmark target."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError as PydanticValidationError

from postmark_transport import __init__conf__
from postmark_transport.adapters.postmark.transport import EMAIL_PATH

from ..context import CLICK_CONTEXT_SETTINGS, CLIContext, get_cli_context

logger = logging.getLogger(__name__)


def describe_transport(cli_ctx: CLIContext) -> list[str]:
    """Summarise where ``send`` would deliver, without revealing the token."""
    try:
        config = cli_ctx.transport_config()
    except PydanticValidationError as exc:
        return [f"    postmark = invalid configuration ({exc.error_count()} error(s))"]
    return [
        f"    endpoint     = {config.api_uri}{EMAIL_PATH}",
        f"    server_token = {'set' if config.server_token else 'missing'}",
        f"    debug_mode   = {config.debug_mode}",
        f"    timeout      = {config.timeout:g}s",
    ]


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_info(ctx: click.Context) -> None:
    """Show package metadata and the Postmark endpoint in use."""
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-info", extra=cli_ctx.log_extra("info")):
        logger.info("Displaying package information")
        __init__conf__.print_info()
        click.echo("\nPostmark transport:\n")
        click.echo("\n".join(describe_transport(cli_ctx)))


__all__ = ["cli_info", "describe_transport"]
