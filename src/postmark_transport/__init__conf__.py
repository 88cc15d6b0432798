"""Static package metadata surfaced to the CLI and configuration layers.

Keeps the identifiers used by lib_layered_config (vendor, app, slug) and the
values printed by ``postmark-transport info`` in one place.
"""

from __future__ import annotations

name = "postmark_transport"
title = "Send transactional mail through the Postmark HTTP API"
version = "1.0.0"
homepage = "https://github.com/ripen/postmark-transport"
author = "Ripen, LLC"
author_email = "opensource@ripen.com"
shell_command = "postmark-transport"

#: Identifiers used by lib_layered_config to locate configuration files.
LAYEREDCONF_VENDOR = "ripen"
LAYEREDCONF_APP = "Postmark Transport"
LAYEREDCONF_SLUG = "postmark-transport"


def print_info() -> None:
    """Print the summarised metadata block used by the CLI ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for postmark_transport:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
