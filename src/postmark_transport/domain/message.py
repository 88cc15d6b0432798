"""Plain message model decoupled from any mail-object library.

A :class:`Message` is built by the caller for each send attempt. Its body is
either a single string (a one-part message whose type comes from the
``Content-Type`` header) or a sequence of :class:`BodyPart` chunks, each
tagged with a :class:`~postmark_transport.domain.enums.BodyKind`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from .enums import BodyKind

#: Custom header whose values become the comma-joined ``Tag`` field.
TAG_HEADER = "Postmark-Tag"


@dataclass(frozen=True, slots=True)
class Address:
    """An email address with an optional display name.

    Example:
        >>> Address("jane@x.com", "Jane").formatted()
        'Jane <jane@x.com>'
        >>> Address("jane@x.com").formatted()
        'jane@x.com'
    """

    email: str
    name: str | None = None

    def formatted(self) -> str:
        """Return ``"Name <email>"`` when a name is set, else the bare email."""
        return f"{self.name} <{self.email}>" if self.name else self.email


@dataclass(frozen=True, slots=True)
class BodyPart:
    """One MIME-typed chunk of a multi-part message.

    Example:
        >>> part = BodyPart.attachment(b"%PDF", "application/pdf", "f.pdf")
        >>> part.kind
        <BodyKind.ATTACHMENT: 'attachment'>
        >>> BodyPart.html("<p>Hi</p>").text()
        '<p>Hi</p>'
    """

    content: bytes
    content_type: str = "text/plain"
    filename: str | None = None
    charset: str = "utf-8"

    @property
    def kind(self) -> BodyKind:
        return BodyKind.from_content_type(self.content_type)

    def text(self) -> str:
        """Decode the raw content with the part's charset."""
        return self.content.decode(self.charset)

    @classmethod
    def html(cls, content: str, *, charset: str = "utf-8") -> BodyPart:
        return cls(content.encode(charset), "text/html", charset=charset)

    @classmethod
    def plain(cls, content: str, *, charset: str = "utf-8") -> BodyPart:
        return cls(content.encode(charset), "text/plain", charset=charset)

    @classmethod
    def attachment(cls, content: bytes, content_type: str, filename: str | None = None) -> BodyPart:
        return cls(content, content_type, filename)


def _empty_addresses() -> tuple[Address, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class Message:
    """An outgoing email as handed to the transport.

    Attributes:
        sender: Explicit ``Sender``; wins over ``from_addresses`` when set.
        from_addresses: ``From`` addresses; the first one is used as fallback.
        to: Primary recipients.
        cc: Carbon-copy recipients.
        bcc: Blind carbon-copy recipients.
        reply_to: ``Reply-To`` addresses.
        subject: Subject line, or None when the message has no subject.
        body: A plain string, a sequence of body parts, or None.
        headers: Additional ``(name, value)`` headers; names may repeat.

    Example:
        >>> msg = Message(to=(Address("a@x.com"),), body="hello")
        >>> msg = msg.with_tag("welcome").with_tag("onboarding")
        >>> msg.header_values("postmark-tag")
        ['welcome', 'onboarding']
    """

    sender: Address | None = None
    from_addresses: tuple[Address, ...] = field(default_factory=_empty_addresses)
    to: tuple[Address, ...] = field(default_factory=_empty_addresses)
    cc: tuple[Address, ...] = field(default_factory=_empty_addresses)
    bcc: tuple[Address, ...] = field(default_factory=_empty_addresses)
    reply_to: tuple[Address, ...] = field(default_factory=_empty_addresses)
    subject: str | None = None
    body: str | Sequence[BodyPart] | None = None
    headers: tuple[tuple[str, str], ...] = ()

    def header_values(self, name: str) -> list[str]:
        """Return every value of header *name*, matched case-insensitively."""
        wanted = name.lower()
        return [value for key, value in self.headers if key.lower() == wanted]

    def header(self, name: str) -> str | None:
        """Return the first value of header *name*, or None."""
        values = self.header_values(name)
        return values[0] if values else None

    def with_header(self, name: str, value: str) -> Message:
        return replace(self, headers=(*self.headers, (name, value)))

    def with_tag(self, tag: str) -> Message:
        """Return a copy carrying one more ``Postmark-Tag`` header."""
        return self.with_header(TAG_HEADER, tag)

    @property
    def parts(self) -> tuple[BodyPart, ...]:
        """Body parts of a multi-part body; empty for string or missing bodies."""
        if self.body is None or isinstance(self.body, str):
            return ()
        return tuple(self.body)


__all__ = [
    "TAG_HEADER",
    "Address",
    "BodyPart",
    "Message",
]
