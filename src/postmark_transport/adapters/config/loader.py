"""Layered configuration for ``postmark-transport``.

Reads the bundled ``defaultconfig.toml`` and then the app, host, user, dotenv
and environment layers through lib_layered_config. Results are cached per
``(profile, start_dir)`` because every CLI run and every ``send`` would
otherwise walk the filesystem again.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Final

from lib_layered_config import DEFAULT_MAX_PROFILE_LENGTH, Config, read_config, validate_profile_name

from postmark_transport import __init__conf__

DEFAULT_CONFIG_FILE: Final[str] = "defaultconfig.toml"


def validate_profile(profile: str) -> None:
    """Reject profile names that cannot be used as a directory name.

    Raises:
        ValueError: For empty or overlong names, invalid characters and
            path traversal attempts.

    Examples:
        >>> validate_profile("production")

        >>> validate_profile("../etc/passwd")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../etc/passwd
    """
    validate_profile_name(profile, max_length=DEFAULT_MAX_PROFILE_LENGTH)


def get_default_config_path() -> Path:
    """Location of the defaults shipped inside the package.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).with_name(DEFAULT_CONFIG_FILE)


class _LayeredConfigLoader:
    """Callable satisfying the ``GetConfig`` port, with an explicit cache reset."""

    def __init__(self, cache_size: int = 4) -> None:
        self._read = lru_cache(maxsize=cache_size)(self._read_uncached)

    @staticmethod
    def _read_uncached(profile: str | None, start_dir: str | None) -> Config:
        return read_config(
            vendor=__init__conf__.LAYEREDCONF_VENDOR,
            app=__init__conf__.LAYEREDCONF_APP,
            slug=__init__conf__.LAYEREDCONF_SLUG,
            profile=profile,
            default_file=get_default_config_path(),
            start_dir=start_dir,
        )

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config:
        """Return the merged configuration, later layers overriding earlier ones.

        The server token usually arrives through the dotenv or environment
        layer so it never has to be written to a shared file.

        Args:
            profile: Inserts ``profile/<name>/`` into every configuration path.
            start_dir: Where ``.env`` discovery starts; the working directory
                when omitted.

        Raises:
            ValueError: If *profile* is not a valid profile name.

        Example:
            >>> get_config().get("postmark.debug_mode")
            False
        """
        if profile is not None:
            validate_profile(profile)
        return self._read(profile, start_dir)

    def cache_clear(self) -> None:
        """Forget cached results so the next call reads the layers again."""
        self._read.cache_clear()


get_config = _LayeredConfigLoader()


__all__ = [
    "DEFAULT_CONFIG_FILE",
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
