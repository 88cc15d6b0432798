"""lib_layered_config integration: the cached loader and the ``config`` display."""

from __future__ import annotations

from .display import display_config
from .loader import get_config, get_default_config_path, validate_profile

__all__ = [
    "display_config",
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
