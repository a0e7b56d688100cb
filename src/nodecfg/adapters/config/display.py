"""Render configuration documents and profile results.

Every renderer here redacts before it serializes, so no caller can route a
private key to the terminal by forgetting to do it first. Pending log output
is flushed before rendering so log lines never interleave with documents.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

import lib_log_rich.runtime
import orjson
import rich_click as click
from rich.console import Console
from rich.table import Table

from nodecfg.domain.document import MISSING, FieldChange
from nodecfg.domain.enums import OutputFormat
from nodecfg.domain.redaction import is_sensitive, redact
from nodecfg.domain.results import ApplyResult

_JSON_OPTIONS: Final = orjson.OPT_INDENT_2
_UNSET: Final = "(unset)"


def _flush_logs() -> None:
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()


def render_json(value: Any) -> str:
    """Serialize ``value`` as indented JSON text.

    Example:
        >>> print(render_json({"Bootstrap": []}))
        {
          "Bootstrap": []
        }
    """
    return orjson.dumps(value, option=_JSON_OPTIONS).decode("utf-8")


def _cell(value: Any) -> str:
    if value is MISSING:
        return _UNSET
    return orjson.dumps(value).decode("utf-8")


def _visible_changes(result: ApplyResult) -> list[FieldChange]:
    return [change for change in result.changes if not is_sensitive(change.path)]


def result_payload(result: ApplyResult) -> dict[str, Any]:
    """Build the redacted JSON payload for a profile run.

    Example:
        >>> from nodecfg.domain.results import ApplyResult
        >>> doc = {"Identity": {"PrivKey": "secret"}, "Bootstrap": []}
        >>> payload = result_payload(ApplyResult(("test",), "apply", doc, doc, applied=False))
        >>> "PrivKey" in render_json(payload)
        False
    """
    return {
        "Profiles": list(result.profiles),
        "Direction": result.direction,
        "Applied": result.applied,
        "Changes": [
            {
                "Path": change.path,
                "Before": None if change.before is MISSING else change.before,
                "After": None if change.after is MISSING else change.after,
            }
            for change in _visible_changes(result)
        ],
        "OldCfg": redact(result.previous),
        "NewCfg": redact(result.document),
    }


def display_document(
    document: Mapping[str, Any],
    *,
    output_format: OutputFormat = OutputFormat.JSON,
    console: Console | None = None,
) -> None:
    """Print a redacted configuration document.

    Args:
        document: Document to show; sensitive fields are removed first.
        output_format: ``JSON`` prints plain indented JSON suitable for
            piping into ``config replace``; ``HUMAN`` pretty-prints it with
            Rich highlighting.
        console: Optional Rich Console, mainly for tests.
    """
    _flush_logs()
    text = render_json(redact(document))
    if output_format is OutputFormat.JSON:
        click.echo(text)
        return
    (console or Console()).print_json(text)


def display_value(value: Any) -> None:
    """Print one configuration value: strings as-is, anything else as JSON.

    Example:
        >>> display_value({"LowWater": 20})  # doctest: +NORMALIZE_WHITESPACE
        {
          "LowWater": 20
        }
    """
    _flush_logs()
    click.echo(value if isinstance(value, str) else render_json(value))


def display_result(
    result: ApplyResult,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    console: Console | None = None,
) -> None:
    """Print the outcome of a profile run.

    ``HUMAN`` shows a table of changed fields followed by a status line;
    ``JSON`` prints :func:`result_payload`.
    """
    _flush_logs()
    if output_format is OutputFormat.JSON:
        click.echo(render_json(result_payload(result)))
        return

    changes = _visible_changes(result)
    names = ", ".join(result.profiles)
    if changes:
        table = Table(title=f"profile {result.direction}: {names}", title_justify="left")
        table.add_column("Field", no_wrap=True)
        table.add_column("Before", overflow="fold")
        table.add_column("After", overflow="fold")
        for change in changes:
            table.add_row(change.path, _cell(change.before), _cell(change.after))
        (console or Console()).print(table)

    if not changes:
        click.echo(f"No changes: configuration already matches {names}.")
    elif result.applied:
        click.echo(f"Configuration updated ({len(changes)} field(s) changed).")
    else:
        click.echo(f"Dry run: {len(changes)} field(s) would change; nothing was written.")


__all__ = [
    "display_document",
    "display_result",
    "display_value",
    "render_json",
    "result_payload",
]
