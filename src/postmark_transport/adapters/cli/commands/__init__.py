"""CLI command implementations.

Contents:
    * :func:`.info.cli_info` - Display package metadata
    * :func:`.config.cli_config` - Display merged configuration
    * :func:`.send.cli_send` - Send one email through Postmark
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .send import cli_send

__all__ = [
    "cli_config",
    "cli_info",
    "cli_send",
]
