"""Root CLI command group and global option handling.

Defines the top-level group: loads settings once, applies ``--set``
overrides, initializes logging, decides the repository directory and stores
everything in the Click context for subcommands.

Contents:
    * :func:`cli` - Root command group with global options.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config
from pydantic import ValidationError

from nodecfg import __init__conf__
from nodecfg.adapters.config.overrides import apply_overrides
from nodecfg.adapters.config.settings import load_repo_settings

from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, store_cli_context
from .exit_codes import ExitCode

if TYPE_CHECKING:
    from nodecfg.composition import AppServices


def _apply_cli_overrides(config: Config, set_overrides: tuple[str, ...]) -> Config:
    """Apply ``--set`` overrides, turning malformed input into a UsageError."""
    try:
        return apply_overrides(config, set_overrides)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc


def _resolve_repo(config: Config, repo: str | None) -> Path:
    """``--repo`` wins over the ``[repo] path`` setting."""
    if repo:
        return Path(repo).expanduser()
    try:
        return load_repo_settings(config).directory()
    except ValidationError as exc:
        click.echo(f"Error: invalid [repo] settings: {exc}", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--repo",
    type=click.Path(file_okay=False),
    default=None,
    help="Repository directory holding the configuration document (overrides [repo] path)",
)
@click.option(
    "--settings-profile",
    type=str,
    default=None,
    help="Load nodecfg settings from a named settings profile (e.g., 'staging')",
)
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    default=(),
    metavar="SECTION.KEY=VALUE",
    help="Override a nodecfg setting (repeatable).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    traceback: bool,
    repo: str | None,
    settings_profile: str | None,
    set_overrides: tuple[str, ...],
) -> None:
    """Root command storing global flags and syncing shared traceback state.

    Example:
        >>> from click.testing import CliRunner
        >>> from nodecfg.composition import build_testing
        >>> result = CliRunner().invoke(cli, ["config", "profile", "ls"], obj=build_testing)  # doctest: +SKIP
        >>> result.exit_code  # doctest: +SKIP
        0
    """
    apply_traceback_preferences(traceback)
    # ctx.obj is always the services factory (production or test)
    if not callable(ctx.obj):
        raise RuntimeError("Services factory not provided. This is a bug.")
    services: AppServices = ctx.obj()  # type: ignore[assignment]  # Click's obj is typed as Any
    config = services.get_config(profile=settings_profile)
    config = _apply_cli_overrides(config, set_overrides)
    services.init_logging(config)
    store_cli_context(
        ctx,
        traceback=traceback,
        config=config,
        services=services,
        repo=_resolve_repo(config, repo),
        settings_profile=settings_profile,
    )

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Deferred import: command modules import from package ancestors that import this module.
def _register_commands() -> None:
    from .commands import cli_config, cli_info, cli_init, cli_resolve

    for cmd in (cli_config, cli_info, cli_init, cli_resolve):
        cli.add_command(cmd)


_register_commands()


__all__ = ["cli"]
