"""Tagged values decided at the CLI boundary before reaching the store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import orjson

from .enums import ValueKind
from .errors import MalformedValueError

_BOOL_LITERALS = {"true": True, "false": False}


@dataclass(frozen=True, slots=True)
class ConfigValue:
    """A parsed user value together with the type hint that produced it."""

    kind: ValueKind
    value: Any


def parse_value(raw: str, kind: ValueKind = ValueKind.STRING) -> ConfigValue:
    """Coerce a raw CLI argument according to ``kind``.

    Unlike override coercion there is no silent fallback: a value that does
    not parse under the requested hint is rejected.

    Args:
        raw: Argument exactly as typed by the user.
        kind: Requested interpretation.

    Returns:
        ConfigValue holding the typed value.

    Raises:
        MalformedValueError: If ``raw`` is not valid for ``kind``.

    Examples:
        >>> parse_value("bar").value
        'bar'
        >>> parse_value("false", ValueKind.BOOL).value
        False
        >>> parse_value('{"bar":0}', ValueKind.JSON).value
        {'bar': 0}
        >>> parse_value("null", ValueKind.JSON).value is None
        True
        >>> parse_value("yes", ValueKind.BOOL)  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        MalformedValueError: Invalid bool value 'yes': expected 'true' or 'false'
    """
    if kind is ValueKind.BOOL:
        try:
            return ConfigValue(kind, _BOOL_LITERALS[raw.strip().lower()])
        except KeyError:
            raise MalformedValueError(raw, kind.value, "expected 'true' or 'false'") from None
    if kind is ValueKind.JSON:
        try:
            return ConfigValue(kind, orjson.loads(raw))
        except orjson.JSONDecodeError as exc:
            raise MalformedValueError(raw, kind.value, str(exc)) from exc
    return ConfigValue(kind, raw)


__all__ = ["ConfigValue", "parse_value"]
