"""Send command: build a message from CLI options and send it through Postmark."""

from __future__ import annotations

import logging
import mimetypes
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, NoReturn

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError as PydanticValidationError

from postmark_transport.adapters.postmark.config import TransportConfig
from postmark_transport.adapters.postmark.validation import parse_address, parse_addresses
from postmark_transport.domain.errors import PostmarkError
from postmark_transport.domain.message import TAG_HEADER, Address, BodyPart, Message

from ..context import CLICK_CONTEXT_SETTINGS, get_cli_context
from ..exit_codes import ExitCode, exit_code_for

logger = logging.getLogger(__name__)

_DEFAULT_ATTACHMENT_TYPE = "application/octet-stream"


def apply_validated_overrides(base_config: TransportConfig, overrides: dict[str, Any]) -> TransportConfig:
    """Merge CLI overrides into *base_config*, re-running every validator.

    ``model_copy(update=...)`` would skip validation, so the merged dict goes
    through ``model_validate`` instead.

    Raises:
        pydantic.ValidationError: When an override is invalid.
    """
    if not overrides:
        return base_config
    return TransportConfig.model_validate({**base_config.model_dump(), **overrides})


def read_attachment(path: Path) -> BodyPart:
    """Load a file as an attachment part, guessing its MIME type from the name.

    Raises:
        FileNotFoundError: When the file does not exist.
    """
    content_type, _encoding = mimetypes.guess_type(path.name)
    return BodyPart.attachment(path.read_bytes(), content_type or _DEFAULT_ATTACHMENT_TYPE, path.name)


def build_message(
    *,
    config: TransportConfig,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    from_address: str | None,
    sender: str | None,
    reply_to: tuple[str, ...],
    subject: str | None,
    text: str,
    html: str,
    attachments: tuple[str, ...],
    tags: tuple[str, ...],
) -> Message:
    """Assemble a domain Message from raw CLI values.

    Falls back to ``config.from_address`` when no ``--from`` is given. Body
    and recipient rules are left to the transport so the CLI reports the
    same errors a library caller would get.

    Raises:
        ValidationError: When an address is malformed.
        FileNotFoundError: When an attachment is missing.
    """
    resolved_from = from_address if from_address is not None else config.from_address
    from_addresses: tuple[Address, ...] = (parse_address(resolved_from),) if resolved_from else ()

    parts: list[BodyPart] = []
    if text:
        parts.append(BodyPart.plain(text))
    if html:
        parts.append(BodyPart.html(html))
    parts.extend(read_attachment(Path(p)) for p in attachments)

    return Message(
        sender=parse_address(sender) if sender else None,
        from_addresses=from_addresses,
        to=parse_addresses(to),
        cc=parse_addresses(cc),
        bcc=parse_addresses(bcc),
        reply_to=parse_addresses(reply_to),
        subject=subject,
        body=tuple(parts),
        headers=tuple((TAG_HEADER, tag) for tag in tags),
    )


def _fail(
    exc: BaseException,
    log_message: str,
    user_message: str,
    exit_code: ExitCode,
    *,
    log_traceback: bool = False,
) -> NoReturn:
    logger.error(
        log_message,
        extra={"error": str(exc), "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code)


def execute_with_send_error_handling(operation: Callable[[], Mapping[str, Any]]) -> None:
    """Run *operation* and translate failures into exit codes.

    Exception order, most specific first:

    1. PostmarkError -> code for its kind (configuration 78, validation 22,
       auth 77, API and delivery failures 69)
    2. FileNotFoundError -> FILE_NOT_FOUND (2)
    3. Exception -> GENERAL_ERROR (1), re-raised when DEVELOPMENT_MODE is set

    Raises:
        SystemExit: On any error.
    """
    try:
        result = operation()
    except PostmarkError as exc:
        _fail(exc, f"Postmark send failed ({exc.kind.value})", "Failed to send email", exit_code_for(exc.kind))
    except FileNotFoundError as exc:
        _fail(exc, "Attachment file not found", "Attachment file not found", ExitCode.FILE_NOT_FOUND)
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _fail(exc, "Unexpected error sending email", "Unexpected error", ExitCode.GENERAL_ERROR, log_traceback=True)

    message_id = result.get("MessageID")
    logger.info("Email sent via CLI", extra={"message_id": message_id})
    click.echo("\nEmail sent successfully!")
    if message_id:
        click.echo(f"MessageID: {message_id}")


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--to", "to", multiple=True, help="Recipient address; repeat or comma-separate for several")
@click.option("--cc", "cc", multiple=True, help="Cc address (repeatable)")
@click.option("--bcc", "bcc", multiple=True, help="Bcc address (repeatable)")
@click.option(
    "--from",
    "from_address",
    default=None,
    help="From address, 'Name <addr>' accepted (default: postmark.from_address)",
)
@click.option("--sender", default=None, help="Explicit Sender address; takes precedence over --from")
@click.option("--reply-to", "reply_to", multiple=True, help="Reply-To address (repeatable)")
@click.option("--subject", default=None, help="Subject line")
@click.option("--text", default="", help="Plain-text body")
@click.option("--html", default="", help="HTML body")
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(path_type=str),
    help="File to attach (repeatable)",
)
@click.option("--tag", "tags", multiple=True, help="Postmark tag (repeatable)")
@click.option("--server-token", default=None, help="Override the configured Postmark server token")
@click.option("--debug/--no-debug", "debug_mode", default=None, help="Override debug-mode send logging")
@click.option("--timeout", type=float, default=None, help="Override the HTTP timeout in seconds")
@click.pass_context
def cli_send(
    ctx: click.Context,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    from_address: str | None,
    sender: str | None,
    reply_to: tuple[str, ...],
    subject: str | None,
    text: str,
    html: str,
    attachments: tuple[str, ...],
    tags: tuple[str, ...],
    server_token: str | None,
    debug_mode: bool | None,
    timeout: float | None,
) -> None:
    """Send one email through the Postmark API."""
    cli_ctx = get_cli_context(ctx)
    extra = cli_ctx.log_extra("send", subject=subject, attachment_count=len(attachments))

    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):
        overrides = {
            key: value
            for key, value in {"server_token": server_token, "debug_mode": debug_mode, "timeout": timeout}.items()
            if value is not None
        }
        try:
            base_config = cli_ctx.transport_config()
            config = apply_validated_overrides(base_config, overrides)
        except PydanticValidationError as exc:
            _fail(exc, "Invalid transport configuration", "Invalid configuration", ExitCode.CONFIG_ERROR)

        def _operation() -> Mapping[str, Any]:
            message = build_message(
                config=config,
                to=to,
                cc=cc,
                bcc=bcc,
                from_address=from_address,
                sender=sender,
                reply_to=reply_to,
                subject=subject,
                text=text,
                html=html,
                attachments=attachments,
                tags=tags,
            )
            return cli_ctx.services.send_message(config=config, message=message)

        logger.info("Sending email", extra={"subject": subject, "tags": list(tags)})
        execute_with_send_error_handling(_operation)


__all__ = [
    "apply_validated_overrides",
    "build_message",
    "cli_send",
    "execute_with_send_error_handling",
    "read_attachment",
]
