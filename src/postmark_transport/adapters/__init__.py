"""Adapters: Postmark HTTP, layered config, logging, in-memory doubles and the CLI."""

from __future__ import annotations

__all__: list[str] = []
