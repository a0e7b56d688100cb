"""Shared helpers for CLI command modules.

Internal module (underscore prefix) providing common patterns used across
multiple command implementations.

Contents:
    * :func:`exit_code_for` - Map a domain error to its POSIX exit code.
    * :func:`fail_with` - Report a domain error on stderr and exit.
    * :func:`reporting_errors` - Context manager converting domain errors to exits.
    * :func:`open_store` - Open the configuration store of the current repository.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn

import rich_click as click

from nodecfg.application.ports import ConfigStore
from nodecfg.domain.errors import (
    ConfigKeyNotFoundError,
    MalformedDocumentError,
    MalformedValueError,
    NodeCfgError,
    ProfileScopeError,
    ResolutionFailedError,
    ResolutionTimeoutError,
    SensitiveFieldError,
    StoreIOError,
    UnknownProfileError,
)

from ..context import CLIContext
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

# Order matters: subclasses before their bases.
_EXIT_CODES: tuple[tuple[type[NodeCfgError], ExitCode], ...] = (
    (UnknownProfileError, ExitCode.INVALID_ARGUMENT),
    (MalformedValueError, ExitCode.INVALID_ARGUMENT),
    (SensitiveFieldError, ExitCode.PERMISSION_DENIED),
    (MalformedDocumentError, ExitCode.DATA_ERROR),
    (ProfileScopeError, ExitCode.DATA_ERROR),
    (StoreIOError, ExitCode.STORE_IO_ERROR),
    (ConfigKeyNotFoundError, ExitCode.GENERAL_ERROR),
    (ResolutionTimeoutError, ExitCode.TIMEOUT),
    (ResolutionFailedError, ExitCode.UNAVAILABLE),
)


def exit_code_for(exc: NodeCfgError) -> ExitCode:
    """Return the exit code a domain error maps to.

    Example:
        >>> exit_code_for(UnknownProfileError("turbo"))
        <ExitCode.INVALID_ARGUMENT: 22>
        >>> exit_code_for(ResolutionTimeoutError("/dnsaddr/x", 1.0))
        <ExitCode.TIMEOUT: 110>
    """
    for error_type, code in _EXIT_CODES:
        if isinstance(exc, error_type):
            return code
    return ExitCode.GENERAL_ERROR


def fail_with(exc: NodeCfgError) -> NoReturn:
    """Log ``exc``, print it on stderr and exit with its mapped code.

    Raises:
        SystemExit: Always.
    """
    code = exit_code_for(exc)
    logger.error("Command failed: %s", exc, extra={"error": type(exc).__name__, "exit_code": int(code)})
    click.echo(f"Error: {exc}", err=True)
    raise SystemExit(code) from exc


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn any :class:`NodeCfgError` raised in the block into a clean exit."""
    try:
        yield
    except NodeCfgError as exc:
        fail_with(exc)


def open_store(cli_ctx: CLIContext) -> ConfigStore:
    """Open the store for the repository chosen at the root command."""
    return cli_ctx.services.open_store(cli_ctx.repo)


__all__ = [
    "exit_code_for",
    "fail_with",
    "open_store",
    "reporting_errors",
]
