"""Repository initialization command.

Contents:
    * :func:`cli_init` - Write the default configuration document.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from nodecfg.domain.defaults import default_document
from nodecfg.domain.redaction import carry_sensitive

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode
from ._shared import open_store, reporting_errors

logger = logging.getLogger(__name__)


@click.command("init", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing configuration document")
@click.pass_context
def cli_init(ctx: click.Context, force: bool) -> None:
    """Write the default configuration document into the repository.

    An existing document is left alone unless ``--force`` is given; even
    then its private key is carried over.
    """
    cli_ctx = get_cli_context(ctx)

    extra = {"command": "init", "force": force, "repo": str(cli_ctx.repo)}
    with lib_log_rich.runtime.bind(job_id="cli-init", extra=extra), reporting_errors():
        store = open_store(cli_ctx)
        if store.exists() and not force:
            logger.warning("Configuration already present", extra={"store": store.location})
            click.echo(f"Error: configuration already exists at {store.location} (use --force to overwrite)", err=True)
            raise SystemExit(ExitCode.ALREADY_EXISTS)

        previous = store.get() if store.exists() else {}
        store.set(carry_sensitive(previous, default_document()))
        logger.info("Configuration initialized", extra={"store": store.location})
        click.echo(f"Initialized configuration at {store.location}")


__all__ = ["cli_init"]
