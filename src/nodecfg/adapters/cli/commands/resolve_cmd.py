"""Address resolution command.

Contents:
    * :func:`cli_resolve` - Resolve a ``/dnsaddr/`` multiaddr.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError

from nodecfg.adapters.config.settings import ResolverSettings, load_resolver_settings
from nodecfg.application.resolver import AddressResolver
from nodecfg.domain.enums import AddressFormat

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode
from ._shared import reporting_errors

logger = logging.getLogger(__name__)


def _resolver_settings(cli_ctx: CLIContext) -> ResolverSettings:
    try:
        return load_resolver_settings(cli_ctx.config)
    except ValidationError as exc:
        click.echo(f"Error: invalid [resolver] settings: {exc}", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc


@click.command("resolve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("address")
@click.option(
    "--recursive/--no-recursive",
    default=True,
    help="Follow indirections until a concrete address remains (default) or stop after one lookup",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Overall deadline in seconds (default: [resolver] timeout)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in AddressFormat], case_sensitive=False),
    default=AddressFormat.TEXT.value,
    help="Output format (plain address or JSON)",
)
@click.pass_context
def cli_resolve(
    ctx: click.Context,
    address: str,
    recursive: bool,
    timeout: float | None,
    output_format: str,
) -> None:
    """Resolve ADDRESS through its ``/dnsaddr/`` TXT records.

    Addresses without a ``dnsaddr`` segment are printed unchanged without
    any network traffic.
    """
    cli_ctx = get_cli_context(ctx)
    settings = _resolver_settings(cli_ctx)
    effective_timeout = timeout if timeout is not None else settings.timeout
    fmt = AddressFormat(output_format.lower())

    extra = {"command": "resolve", "address": address, "recursive": recursive, "timeout": effective_timeout}
    with lib_log_rich.runtime.bind(job_id="cli-resolve", extra=extra), reporting_errors():
        lookup = cli_ctx.services.make_dns_lookup(endpoint=settings.doh_endpoint)
        resolver = AddressResolver(lookup, max_hops=settings.max_hops)
        resolved = resolver.resolve(address, recursive=recursive, timeout=effective_timeout)
        if fmt is AddressFormat.JSON:
            cli_ctx.services.display_value({"Address": address, "Resolved": resolved})
        else:
            cli_ctx.services.display_value(resolved)


__all__ = ["cli_resolve"]
