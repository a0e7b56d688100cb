"""Centralized lib_log_rich initialization for all entry points.

Module execution, the console script and CLI tests all call
:func:`init_logging`; the first call wins and later calls are no-ops.
Standard-library loggers (``logging.getLogger(__name__)`` in the engine,
resolver and store) are bridged into the lib_log_rich runtime.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from nodecfg import __init__conf__

LOGGING_SECTION = "lib_log_rich"


class LoggingConfigModel(BaseModel):
    """Pydantic model for the ``[lib_log_rich]`` settings section.

    Unknown keys pass straight through to ``lib_log_rich.runtime.RuntimeConfig``.

    Example:
        >>> LoggingConfigModel().environment
        'prod'
        >>> LoggingConfigModel(service="node-a").service
        'node-a'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the ``[lib_log_rich]`` section onto a RuntimeConfig.

    The service name falls back to the package name when unset.
    """
    section: object = config.get(LOGGING_SECTION, default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", section) if section else {})
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Initialize the lib_log_rich runtime once per process.

    Loads ``.env`` files so ``LOG_*`` variables apply, builds the runtime
    configuration from settings and attaches stdlib logging.

    Args:
        config: Loaded settings holding the ``[lib_log_rich]`` section.

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
