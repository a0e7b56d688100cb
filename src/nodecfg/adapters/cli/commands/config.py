"""Configuration document CLI commands.

``config <key> [value]`` reads or writes one key; the subcommands show,
replace and transform the whole document.

Contents:
    * :func:`cli_config` - ``config`` group; bare keys route to the value command.
    * :func:`cli_config_value` - Get or set one dotted key.
    * :func:`cli_config_show` - Print the redacted document.
    * :func:`cli_config_replace` - Replace the document from a JSON file.
    * :func:`cli_config_profile` - ``profile apply``, ``profile revert`` and ``profile ls``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import lib_log_rich.runtime
import orjson
import rich_click as click
from rich_click import RichCommand, RichGroup

from nodecfg.application.engine import ProfileEngine
from nodecfg.application.ports import ConfigStore
from nodecfg.domain.document import get_path
from nodecfg.domain.enums import OutputFormat, ValueKind
from nodecfg.domain.errors import MalformedValueError, SensitiveFieldError, StoreIOError
from nodecfg.domain.profiles import list_profiles
from nodecfg.domain.redaction import carry_sensitive, covers_sensitive, is_sensitive, redact
from nodecfg.domain.values import parse_value

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ._shared import open_store, reporting_errors

logger = logging.getLogger(__name__)

_VALUE_COMMAND = "value"
_DRY_RUN = "--dry-run"
_NO_DRY_RUN = "--no-dry-run"
_FORMAT_CHOICE = click.Choice([f.value for f in OutputFormat], case_sensitive=False)


class _ConfigGroup(RichGroup):
    """Group that treats ``config <key> ...`` as ``config value <key> ...``."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        first = next((arg for arg in args if not arg.startswith("-")), None)
        if first is not None and first not in self.commands:
            args = [_VALUE_COMMAND, *args]
        return super().parse_args(ctx, args)


class _DryRunCommand(RichCommand):
    """Command that also accepts ``--dry-run=true`` and ``--dry-run=false``."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        return super().parse_args(ctx, [_expand_dry_run(arg, ctx) for arg in args])


def _expand_dry_run(arg: str, ctx: click.Context) -> str:
    """Rewrite ``--dry-run=<bool>`` into the matching boolean flag.

    Raises:
        click.BadParameter: If the value is not a recognised boolean.
    """
    prefix = f"{_DRY_RUN}="
    if not arg.startswith(prefix):
        return arg
    enabled = click.BOOL.convert(arg[len(prefix) :], None, ctx)
    return _DRY_RUN if enabled else _NO_DRY_RUN


@click.group(
    "config",
    cls=_ConfigGroup,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.pass_context
def cli_config(ctx: click.Context) -> None:
    r"""Get and set configuration values, or transform the whole document.

    \b
    nodecfg config Addresses.API               print one value
    nodecfg config Swarm.ConnMgr.LowWater 50 --json
    nodecfg config show                        print the document
    nodecfg config profile apply server        apply a profile
    """
    if ctx.invoked_subcommand is None:
        raise click.UsageError("Not enough non-option arguments: got 0, need at least 1", ctx=ctx)


def _value_kind(as_json: bool, as_bool: bool) -> ValueKind:
    if as_json and as_bool:
        raise click.UsageError("--json and --bool are mutually exclusive")
    if as_json:
        return ValueKind.JSON
    if as_bool:
        return ValueKind.BOOL
    return ValueKind.STRING


def _read_key(store: ConfigStore, key: str) -> Any:
    if is_sensitive(key):
        raise SensitiveFieldError(key)
    return get_path(redact(store.get()), key)


def _write_key(store: ConfigStore, key: str, raw: str, kind: ValueKind) -> None:
    if covers_sensitive(key):
        raise SensitiveFieldError(key)
    value = parse_value(raw, kind)
    store.set_path(key, value.value)
    logger.info("Configuration key updated", extra={"key": key, "kind": kind.value, "store": store.location})


@click.command(_VALUE_COMMAND, hidden=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.argument("value", required=False)
@click.option("--json", "as_json", is_flag=True, default=False, help="Parse VALUE as JSON")
@click.option("--bool", "as_bool", is_flag=True, default=False, help="Parse VALUE as a boolean (true/false)")
@click.pass_context
def cli_config_value(ctx: click.Context, key: str, value: str | None, as_json: bool, as_bool: bool) -> None:
    """Print KEY, or set it to VALUE when one is given."""
    cli_ctx = get_cli_context(ctx)
    kind = _value_kind(as_json, as_bool)
    if value is None and kind is not ValueKind.STRING:
        raise click.UsageError("--json and --bool only apply when a VALUE is given")

    mode = "get" if value is None else "set"
    extra = {"command": "config", "key": key, "mode": mode}
    with lib_log_rich.runtime.bind(job_id="cli-config", extra=extra), reporting_errors():
        store = open_store(cli_ctx)
        if value is None:
            cli_ctx.services.display_value(_read_key(store, key))
        else:
            _write_key(store, key, value, kind)


@click.command("show", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=_FORMAT_CHOICE,
    default=OutputFormat.JSON.value,
    help="Output format (plain JSON or highlighted)",
)
@click.pass_context
def cli_config_show(ctx: click.Context, output_format: str) -> None:
    """Print the full configuration document without the private key."""
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "config-show", "format": fmt.value}
    with lib_log_rich.runtime.bind(job_id="cli-config-show", extra=extra), reporting_errors():
        store = open_store(cli_ctx)
        logger.info("Displaying configuration", extra={"store": store.location})
        cli_ctx.services.display_document(store.get(), output_format=fmt)


def _load_replacement(file: Path) -> dict[str, Any]:
    """Read and parse a replacement document.

    Raises:
        StoreIOError: If the file cannot be read.
        MalformedValueError: If it is not a JSON object.
    """
    try:
        raw = file.read_bytes()
    except OSError as exc:
        raise StoreIOError(str(file), "read", exc.strerror or str(exc)) from exc
    try:
        document = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedValueError(str(file), ValueKind.JSON.value, str(exc)) from exc
    if not isinstance(document, dict):
        raise MalformedValueError(str(file), ValueKind.JSON.value, "expected a JSON object at the top level")
    return document


@click.command("replace", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def cli_config_replace(ctx: click.Context, file: Path) -> None:
    """Replace the configuration document with the JSON object in FILE.

    A stored private key is kept when FILE does not contain one, so the
    output of ``config show`` can be edited and fed back.
    """
    cli_ctx = get_cli_context(ctx)

    extra = {"command": "config-replace", "file": str(file)}
    with lib_log_rich.runtime.bind(job_id="cli-config-replace", extra=extra), reporting_errors():
        replacement = _load_replacement(file)
        store = open_store(cli_ctx)
        previous = store.get() if store.exists() else {}
        store.set(carry_sensitive(previous, replacement))
        logger.info("Configuration replaced", extra={"file": str(file), "store": store.location})
        click.echo(f"Configuration replaced from {file}.")


@click.group("profile", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_config_profile() -> None:
    """Apply, revert and list configuration profiles."""


@cli_config_profile.command("apply", cls=_DryRunCommand, context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--dry-run/--no-dry-run",
    default=False,
    help="Print the result without writing it (also accepts --dry-run=true|false)",
)
@click.option("--format", "output_format", type=_FORMAT_CHOICE, default=OutputFormat.HUMAN.value)
@click.pass_context
def cli_config_profile_apply(ctx: click.Context, names: tuple[str, ...], dry_run: bool, output_format: str) -> None:
    """Apply one or more profiles in order and save the result once."""
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "config-profile-apply", "profiles": list(names), "dry_run": dry_run}
    with lib_log_rich.runtime.bind(job_id="cli-config-profile-apply", extra=extra), reporting_errors():
        engine = ProfileEngine(open_store(cli_ctx))
        result = engine.apply_profiles(names, dry_run=dry_run)
        cli_ctx.services.display_result(result, output_format=fmt)


@cli_config_profile.command("revert", cls=_DryRunCommand, context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("name")
@click.option(
    "--dry-run/--no-dry-run",
    default=False,
    help="Print the result without writing it (also accepts --dry-run=true|false)",
)
@click.option("--format", "output_format", type=_FORMAT_CHOICE, default=OutputFormat.HUMAN.value)
@click.pass_context
def cli_config_profile_revert(ctx: click.Context, name: str, dry_run: bool, output_format: str) -> None:
    """Undo a profile by running its revert transform."""
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "config-profile-revert", "profile": name, "dry_run": dry_run}
    with lib_log_rich.runtime.bind(job_id="cli-config-profile-revert", extra=extra), reporting_errors():
        engine = ProfileEngine(open_store(cli_ctx))
        result = engine.revert_profile(name, dry_run=dry_run)
        cli_ctx.services.display_result(result, output_format=fmt)


@cli_config_profile.command("ls", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_config_profile_ls() -> None:
    """List available profiles."""
    with lib_log_rich.runtime.bind(job_id="cli-config-profile-ls", extra={"command": "config-profile-ls"}):
        profiles = list_profiles()
        width = max(len(profile.name) for profile in profiles)
        for profile in profiles:
            click.echo(f"{profile.name:<{width}}  {profile.description}")


cli_config.add_command(cli_config_value)
cli_config.add_command(cli_config_show)
cli_config.add_command(cli_config_replace)
cli_config.add_command(cli_config_profile)


__all__ = [
    "cli_config",
    "cli_config_profile",
    "cli_config_replace",
    "cli_config_show",
    "cli_config_value",
]
