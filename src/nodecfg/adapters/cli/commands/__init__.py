"""CLI command implementations.

Collects all subcommand functions and re-exports them for registration
with the root CLI group.

Contents:
    * Config commands from :mod:`.config` (get/set, show, replace, profile)
    * Repository initialization from :mod:`.init_cmd`
    * Address resolution from :mod:`.resolve_cmd`
    * Info command from :mod:`.info`
"""

from __future__ import annotations

from .config import (
    cli_config,
    cli_config_profile,
    cli_config_replace,
    cli_config_show,
    cli_config_value,
)
from .info import cli_info
from .init_cmd import cli_init
from .resolve_cmd import cli_resolve

__all__ = [
    "cli_config",
    "cli_config_profile",
    "cli_config_replace",
    "cli_config_show",
    "cli_config_value",
    "cli_info",
    "cli_init",
    "cli_resolve",
]
