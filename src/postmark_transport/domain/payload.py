"""Translate a :class:`Message` into the flat record the Postmark API expects.

Each ``extract_*`` function covers one field group and raises
:class:`~postmark_transport.domain.errors.ValidationError` when the message
violates a sending invariant. :func:`build_payload` runs them in order.
"""

from __future__ import annotations

import base64
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .enums import BodyKind
from .errors import ValidationError
from .message import TAG_HEADER, Address, Message

#: Limit of recipients per message in total (To + Cc + Bcc).
RECIPIENTS_LIMIT = 20

#: Payload keys that may be written to the debug log.
DEBUG_FIELDS = ("From", "Subject", "ReplyTo", "Tag")


@dataclass(frozen=True, slots=True)
class AttachmentRecord:
    """An attachment with base64-encoded content."""

    content_type: str
    name: str | None
    content: str

    def as_api_dict(self) -> dict[str, Any]:
        return {"ContentType": self.content_type, "Name": self.name, "Content": self.content}


@dataclass(frozen=True, slots=True)
class OutboundPayload:
    """Flattened message, one field per Postmark ``/email`` key."""

    from_: str
    to: str
    cc: str
    bcc: str
    subject: str
    reply_to: str
    html_body: str
    text_body: str
    attachments: tuple[AttachmentRecord, ...]
    tag: str

    def as_api_dict(self) -> dict[str, Any]:
        """Return the request body with the exact API field names."""
        return {
            "To": self.to,
            "Cc": self.cc,
            "Bcc": self.bcc,
            "From": self.from_,
            "Subject": self.subject,
            "ReplyTo": self.reply_to,
            "HtmlBody": self.html_body,
            "TextBody": self.text_body,
            "Attachments": [attachment.as_api_dict() for attachment in self.attachments],
            "Tag": self.tag,
        }

    def debug_summary(self) -> dict[str, Any]:
        """Return the fields safe to log: no recipients, no bodies."""
        data = self.as_api_dict()
        return {key: data[key] for key in DEBUG_FIELDS}


def _join_emails(addresses: Iterable[Address]) -> str:
    return ",".join(address.email for address in addresses)


def extract_recipients(message: Message) -> tuple[str, str, str, int]:
    """Return comma-joined To, Cc and Bcc plus the total recipient count.

    Raises:
        ValidationError: When there are no recipients, or more than
            :data:`RECIPIENTS_LIMIT`.

    Example:
        >>> msg = Message(to=(Address("a@x.com"), Address("b@x.com")), bcc=(Address("c@x.com"),))
        >>> extract_recipients(msg)
        ('a@x.com,b@x.com', '', 'c@x.com', 3)
    """
    total = len(message.to) + len(message.cc) + len(message.bcc)
    if total == 0:
        raise ValidationError('Invalid email: must contain at least one of "To", "Cc", and "Bcc" headers')
    if total > RECIPIENTS_LIMIT:
        raise ValidationError(f"Exceeded Postmark recipients limit per message ({total} > {RECIPIENTS_LIMIT})")
    return _join_emails(message.to), _join_emails(message.cc), _join_emails(message.bcc), total


def extract_sender(message: Message) -> str:
    """Return the formatted sender, preferring ``Sender`` over the first ``From``.

    Raises:
        ValidationError: When no non-empty address resolves.

    Example:
        >>> extract_sender(Message(from_addresses=(Address("jane@x.com", "Jane"),)))
        'Jane <jane@x.com>'
    """
    address = message.sender
    if address is None and message.from_addresses:
        address = message.from_addresses[0]
    if address is None or not address.email:
        raise ValidationError("No from address specified")
    return address.formatted()


def extract_subject(message: Message) -> str:
    return message.subject or ""


def extract_reply_to(message: Message) -> str:
    return _join_emails(message.reply_to)


def extract_body(message: Message) -> tuple[str, str]:
    """Return the ``(html, text)`` body versions.

    A string body is plain text unless the message's ``Content-Type`` header
    says otherwise. For multi-part bodies the last part of each kind wins.

    Raises:
        ValidationError: When both versions are empty, or a text part does
            not decode with its charset.

    Example:
        >>> extract_body(Message(body="hello"))
        ('', 'hello')
        >>> extract_body(Message(body="<b>hi</b>", headers=(("Content-Type", "text/html"),)))
        ('<b>hi</b>', '')
    """
    versions = {BodyKind.HTML: "", BodyKind.TEXT: ""}

    if isinstance(message.body, str):
        content_type = message.header("Content-Type") or "text/plain"
        kind = BodyKind.from_content_type(content_type)
        if kind is not BodyKind.ATTACHMENT:
            versions[kind] = message.body
    else:
        for part in message.parts:
            if part.kind is BodyKind.ATTACHMENT:
                continue
            try:
                versions[part.kind] = part.text()
            except (UnicodeDecodeError, LookupError) as exc:
                raise ValidationError(f"Cannot decode {part.content_type} body part: {exc}") from exc

    if not versions[BodyKind.HTML] and not versions[BodyKind.TEXT]:
        raise ValidationError("No body specified")
    return versions[BodyKind.HTML], versions[BodyKind.TEXT]


def extract_attachments(message: Message) -> tuple[AttachmentRecord, ...]:
    """Turn every non-HTML, non-text part into a base64 attachment record.

    Example:
        >>> from .message import BodyPart
        >>> msg = Message(body=[BodyPart.plain("hi"), BodyPart.attachment(b"abc", "application/pdf", "f.pdf")])
        >>> extract_attachments(msg)
        (AttachmentRecord(content_type='application/pdf', name='f.pdf', content='YWJj'),)
    """
    return tuple(
        AttachmentRecord(
            content_type=part.content_type,
            name=part.filename,
            content=base64.b64encode(part.content).decode("ascii"),
        )
        for part in message.parts
        if part.kind is BodyKind.ATTACHMENT
    )


def extract_tags(message: Message) -> str:
    """Return the comma-joined values of every ``Postmark-Tag`` header."""
    return ",".join(message.header_values(TAG_HEADER))


def build_payload(message: Message) -> OutboundPayload:
    """Validate *message* and flatten it into an :class:`OutboundPayload`.

    Raises:
        ValidationError: On the first violated invariant (recipients, sender,
            body, in that order).
    """
    to, cc, bcc, _total = extract_recipients(message)
    sender = extract_sender(message)
    subject = extract_subject(message)
    reply_to = extract_reply_to(message)
    html_body, text_body = extract_body(message)
    return OutboundPayload(
        from_=sender,
        to=to,
        cc=cc,
        bcc=bcc,
        subject=subject,
        reply_to=reply_to,
        html_body=html_body,
        text_body=text_body,
        attachments=extract_attachments(message),
        tag=extract_tags(message),
    )


__all__ = [
    "DEBUG_FIELDS",
    "RECIPIENTS_LIMIT",
    "AttachmentRecord",
    "OutboundPayload",
    "build_payload",
    "extract_attachments",
    "extract_body",
    "extract_recipients",
    "extract_reply_to",
    "extract_sender",
    "extract_subject",
    "extract_tags",
]
