"""Pure helpers for dotted-path access to a configuration document.

A document is a plain ``dict`` of JSON values. Paths use ``.`` between
segments (``Discovery.MDNS.Enabled``). Nothing in this module performs I/O;
mutating helpers only ever operate on copies handed to them by the caller.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Final, cast

from .errors import ConfigKeyNotFoundError, MalformedDocumentError, MalformedValueError

Document = dict[str, Any]
"""A configuration document: JSON object with string keys."""


class _Missing:
    """Sentinel type for absent values."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


@dataclass(frozen=True, slots=True)
class FieldChange:
    """A single leaf difference between two documents.

    ``segments`` holds the raw keys leading to the leaf. It defaults to
    ``path`` split on dots, and differs from that only when a key itself
    contains a dot.
    """

    path: str
    before: Any
    after: Any
    segments: tuple[str, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        if not self.segments:
            object.__setattr__(self, "segments", tuple(self.path.split(".")))


def split_path(path: str) -> tuple[str, ...]:
    """Split a dotted key path into segments.

    Raises:
        MalformedValueError: If the path is empty or has an empty segment.

    Example:
        >>> split_path("Swarm.ConnMgr.LowWater")
        ('Swarm', 'ConnMgr', 'LowWater')
    """
    parts = tuple(path.split("."))
    if not path or not all(parts):
        raise MalformedValueError(path, "key", "key path contains an empty segment")
    return parts


def copy_document(document: Mapping[str, Any]) -> Document:
    """Return a deep copy so callers can never observe in-place mutation."""
    return copy.deepcopy(dict(document))


def get_path(document: Mapping[str, Any], path: str, default: Any = MISSING) -> Any:
    """Return the value stored at ``path``.

    Args:
        document: Document to read.
        path: Dotted key path.
        default: Returned when the path is absent. When left as ``MISSING``
            an absent path raises instead.

    Raises:
        ConfigKeyNotFoundError: If the path is absent and no default was given.

    Example:
        >>> get_path({"Swarm": {"ConnMgr": {"LowWater": 200}}}, "Swarm.ConnMgr.LowWater")
        200
        >>> get_path({}, "Bootstrap", default=None) is None
        True
    """
    node: Any = document
    for part in split_path(path):
        if not isinstance(node, Mapping) or part not in node:
            if default is MISSING:
                raise ConfigKeyNotFoundError(path)
            return default
        node = cast("Mapping[str, Any]", node)[part]
    return node


def set_path(document: Document, path: str, value: Any) -> None:
    """Store ``value`` at ``path``, creating intermediate objects as needed.

    Raises:
        MalformedDocumentError: If an intermediate segment holds a non-object.

    Example:
        >>> doc: Document = {}
        >>> set_path(doc, "Discovery.MDNS.Enabled", False)
        >>> doc
        {'Discovery': {'MDNS': {'Enabled': False}}}
    """
    parts = split_path(path)
    node = document
    for depth, part in enumerate(parts[:-1]):
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            prefix = ".".join(parts[: depth + 1])
            raise MalformedDocumentError(prefix, f"expected an object, found {json_type(child)}")
        node = cast("Document", child)
    node[parts[-1]] = value


def json_type(value: Any) -> str:
    """Name the JSON type of a Python value.

    Example:
        >>> [json_type(v) for v in (None, True, 3, 2.5, "x", [], {})]
        ['null', 'boolean', 'number', 'number', 'string', 'array', 'object']
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def iter_leaves(
    document: Mapping[str, Any], prefix: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], Any]]:
    """Yield ``(segments, value)`` for every leaf; arrays and empty objects are leaves.

    Keys are kept whole, so a literal ``"a.b"`` key and a nested ``a -> b``
    path stay distinct.
    """
    for key, value in document.items():
        segments = (*prefix, str(key))
        if isinstance(value, Mapping) and value:
            yield from iter_leaves(cast("Mapping[str, Any]", value), segments)
        else:
            yield segments, value


def diff_documents(before: Mapping[str, Any], after: Mapping[str, Any]) -> tuple[FieldChange, ...]:
    """List leaf-level differences between two documents, sorted by path.

    Example:
        >>> diff_documents({"a": {"b": 1, "c": 2}}, {"a": {"b": 1, "c": 3}, "d": True})
        (FieldChange(path='a.c', before=2, after=3), FieldChange(path='d', before=<missing>, after=True))
    """
    old = dict(iter_leaves(before))
    new = dict(iter_leaves(after))
    changes: list[FieldChange] = []
    for segments in sorted(old.keys() | new.keys()):
        left = old.get(segments, MISSING)
        right = new.get(segments, MISSING)
        if left is MISSING or right is MISSING or left != right or json_type(left) != json_type(right):
            changes.append(FieldChange(path=".".join(segments), before=left, after=right, segments=segments))
    return tuple(changes)


__all__ = [
    "MISSING",
    "Document",
    "FieldChange",
    "copy_document",
    "diff_documents",
    "get_path",
    "iter_leaves",
    "json_type",
    "set_path",
    "split_path",
]
