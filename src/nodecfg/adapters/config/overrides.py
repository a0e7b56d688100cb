"""Parse and apply root ``--set SECTION.KEY=VALUE`` overrides to settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import orjson
from lib_layered_config import Config

from nodecfg.domain.document import Document, set_path, split_path
from nodecfg.domain.errors import MalformedDocumentError, MalformedValueError

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class SettingOverride:
    """A single parsed ``--set`` override."""

    path: str
    value: CoercedValue

    @property
    def section(self) -> str:
        return self.path.split(".", 1)[0]


def coerce_value(raw: str) -> CoercedValue:
    """Interpret a raw override value as JSON, falling back to the plain string.

    Settings overrides are forgiving on purpose; ``config <key> <value>``
    uses the strict :func:`nodecfg.domain.values.parse_value` instead.

    Examples:
        >>> coerce_value("5")
        5
        >>> coerce_value("false")
        False
        >>> coerce_value("https://dns.google/resolve")
        'https://dns.google/resolve'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def parse_override(raw: str) -> SettingOverride:
    """Split ``SECTION.KEY[.SUBKEY...]=VALUE`` into a SettingOverride.

    Raises:
        ValueError: If ``=`` is missing, the key has no section, or a path
            segment is empty.

    Examples:
        >>> parse_override("resolver.timeout=2.5")
        SettingOverride(path='resolver.timeout', value=2.5)
        >>> parse_override("repo.path=/srv/node").section
        'repo'
    """
    if "=" not in raw:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")
    path, value = raw.split("=", maxsplit=1)
    if "." not in path:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    try:
        split_path(path)
    except MalformedValueError as exc:
        raise ValueError(f"Invalid override {raw!r}: {exc.reason}") from exc
    return SettingOverride(path=path, value=coerce_value(value))


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Deep-merge ``--set`` overrides into a Config.

    Returns:
        A new Config, or ``config`` itself when there is nothing to apply.

    Raises:
        ValueError: If any override is malformed or two overrides conflict
            (one sets a scalar where another needs an object).

    Examples:
        >>> cfg = Config({"resolver": {"max_hops": 32}}, {})
        >>> apply_overrides(cfg, ("resolver.max_hops=4",))["resolver"]["max_hops"]
        4
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    merged: Document = {}
    for raw in raw_overrides:
        override = parse_override(raw)
        try:
            set_path(merged, override.path, override.value)
        except MalformedDocumentError as exc:
            raise ValueError(f"Invalid override {raw!r}: {exc.reason}") from exc

    overrides: dict[str, Any] = merged
    return config.with_overrides(overrides)


__all__ = [
    "CoercedValue",
    "SettingOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
