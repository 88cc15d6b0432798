"""Address parsing and validation shared by the CLI and the test adapters.

Raises the domain :class:`ValidationError` rather than library-specific
exceptions.
"""

from __future__ import annotations

from collections.abc import Iterable
from email.utils import parseaddr

from btx_lib_mail import validate_email_address

from postmark_transport.domain.errors import ValidationError
from postmark_transport.domain.message import Address


def parse_address(raw: str) -> Address:
    """Parse ``"Name <email>"`` or a bare email into a validated Address.

    Raises:
        ValidationError: When the email part is invalid.

    Example:
        >>> parse_address("Jane <jane@example.com>")
        Address(email='jane@example.com', name='Jane')
        >>> parse_address("jane@example.com")
        Address(email='jane@example.com', name=None)
        >>> parse_address("invalid")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValidationError: Invalid address: invalid
    """
    name, email = parseaddr(raw.strip())
    try:
        validate_email_address(email)
    except ValueError as e:
        raise ValidationError(f"Invalid address: {raw}") from e
    return Address(email=email, name=name or None)


def parse_addresses(raw: Iterable[str]) -> tuple[Address, ...]:
    """Parse every entry of *raw*; commas inside one entry separate addresses.

    Example:
        >>> [a.email for a in parse_addresses(["a@example.com,b@example.com", "c@example.com"])]
        ['a@example.com', 'b@example.com', 'c@example.com']
    """
    addresses: list[Address] = []
    for entry in raw:
        addresses.extend(parse_address(item) for item in entry.split(",") if item.strip())
    return tuple(addresses)


__all__ = ["parse_address", "parse_addresses"]
