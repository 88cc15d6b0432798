"""The ``postmark-transport`` command group.

The group callback is the only place that touches the services factory: it
builds the services, loads the profile's configuration, starts logging and
leaves a :class:`~.context.CLIContext` behind for the subcommands.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click

from postmark_transport import __init__conf__

from .commands import cli_config, cli_info, cli_send
from .context import CLICK_CONTEXT_SETTINGS, apply_traceback_preferences, store_cli_context

if TYPE_CHECKING:
    from postmark_transport.composition import AppServices

_EPILOG = (
    "Settings come from the [postmark] configuration section; run "
    f"'{__init__conf__.shell_command} config --section postmark' to inspect them."
)


def _build_services(factory: object) -> AppServices:
    if not callable(factory):
        raise RuntimeError("Services factory not provided. This is a bug.")
    return factory()


@click.group(
    help=__init__conf__.title,
    epilog=_EPILOG,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option("--traceback/--no-traceback", default=False, help="Print the full Python traceback when a command fails")
@click.option("--profile", default=None, metavar="NAME", help="Read configuration from a named profile, e.g. 'staging'")
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None) -> None:
    """Send transactional email through the Postmark HTTP API."""
    services = _build_services(ctx.obj)
    config = services.get_config(profile=profile)
    services.init_logging(config)
    store_cli_context(ctx, traceback=traceback, config=config, services=services, profile=profile)
    apply_traceback_preferences(traceback)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


for _command in (cli_info, cli_config, cli_send):
    cli.add_command(_command)


__all__ = ["cli"]
