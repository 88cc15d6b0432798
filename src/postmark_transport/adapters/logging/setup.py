"""lib_log_rich runtime for the CLI and for applications embedding the transport.

Code in this package logs through ``logging.getLogger(__name__)``. Once
:func:`init_logging` has run, those records (the transport's debug-mode send
summaries among them) are routed to lib_log_rich's console and backends.
"""

from __future__ import annotations

from typing import Any, cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from postmark_transport import __init__conf__


class LoggingConfigModel(BaseModel):
    """The ``[lib_log_rich]`` section; unknown keys go to RuntimeConfig as-is.

    Example:
        >>> LoggingConfigModel().environment
        'prod'
        >>> LoggingConfigModel(console_level="WARNING").runtime_kwargs(debug_mode=True)["console_level"]
        'WARNING'
    """

    model_config = ConfigDict(extra="allow")

    service: str | None = None
    environment: str = "prod"
    console_level: str | None = None

    def runtime_kwargs(self, *, debug_mode: bool) -> dict[str, Any]:
        """Keyword arguments for ``RuntimeConfig``.

        An explicit ``console_level`` always wins. Without one, Postmark debug
        mode lowers the console to DEBUG so send summaries are printed.
        """
        kwargs: dict[str, Any] = self.model_dump(exclude={"service"}, exclude_none=True)
        kwargs["service"] = self.service or __init__conf__.name
        if self.console_level is None and debug_mode:
            kwargs["console_level"] = "DEBUG"
        return kwargs


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    section: object = config.get("lib_log_rich", default={})
    settings = LoggingConfigModel.model_validate(cast("dict[str, object]", section) if section else {})
    debug_mode = bool(config.get("postmark.debug_mode", default=False))
    return lib_log_rich.runtime.RuntimeConfig(**settings.runtime_kwargs(debug_mode=debug_mode))


def init_logging(config: Config) -> None:
    """Start lib_log_rich from *config* and bridge stdlib logging into it.

    Only the first call has an effect; it also enables ``.env`` loading so
    ``LOG_*`` variables apply. Later calls return at once.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
