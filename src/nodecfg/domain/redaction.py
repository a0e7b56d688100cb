"""Strip secret-bearing fields from documents before they reach any output."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Final

from .document import Document, copy_document, get_path, set_path, split_path

SENSITIVE_PATHS: Final[tuple[str, ...]] = ("Identity.PrivKey",)
"""Dotted paths that must never be rendered, logged or returned."""

_ABSENT: Final = object()


def _segments(path: str) -> tuple[str, ...]:
    return tuple(part.casefold() for part in split_path(path))


def is_sensitive(path: str, sensitive_paths: tuple[str, ...] = SENSITIVE_PATHS) -> bool:
    """Return True when ``path`` is, or lies below, a sensitive path.

    Comparison is per segment and case-insensitive.

    Example:
        >>> is_sensitive("Identity.PrivKey")
        True
        >>> is_sensitive("identity.privkey.bytes")
        True
        >>> is_sensitive("Identity.PeerID")
        False
    """
    parts = _segments(path)
    return any(parts[: len(secret)] == secret for secret in map(_segments, sensitive_paths))


def covers_sensitive(path: str, sensitive_paths: tuple[str, ...] = SENSITIVE_PATHS) -> bool:
    """Return True when writing ``path`` would replace a sensitive field.

    Extends :func:`is_sensitive` to the ancestors of sensitive paths.

    Example:
        >>> covers_sensitive("Identity")
        True
        >>> covers_sensitive("Identity.PeerID")
        False
    """
    parts = _segments(path)
    return any(
        parts[: len(secret)] == secret or secret[: len(parts)] == parts
        for secret in map(_segments, sensitive_paths)
    )


def _key_segments(key: str) -> tuple[str, ...]:
    return tuple(part.casefold() for part in key.split("."))


def _drop(node: dict[str, Any], parts: tuple[str, ...]) -> None:
    """Remove ``parts`` from ``node``, also through keys that contain dots.

    A key spelled ``"Identity.PrivKey"`` (or ``"Identity.PrivKey.x"``) covers
    the secret itself; a key spelled ``"Identity"`` leads towards it.
    """
    for key in list(node):
        segments = _key_segments(key)
        if segments[: len(parts)] == parts:
            del node[key]
        elif len(segments) < len(parts) and parts[: len(segments)] == segments and isinstance(node[key], dict):
            _drop(node[key], parts[len(segments) :])


def redact(document: Mapping[str, Any], sensitive_paths: tuple[str, ...] = SENSITIVE_PATHS) -> Document:
    """Return a deep copy of ``document`` without any sensitive field.

    The key is removed rather than masked, so neither the secret nor the
    field name appears in serialized output. Sibling fields are kept. Keys
    that themselves contain dots are matched segment by segment, so
    ``{"Identity.PrivKey": ...}`` is removed too.

    Example:
        >>> doc = {"Identity": {"PeerID": "QmPeer", "PrivKey": "CAASqAkw"}}
        >>> redact(doc)
        {'Identity': {'PeerID': 'QmPeer'}}
        >>> doc["Identity"]["PrivKey"]
        'CAASqAkw'
        >>> redact({"identity.privkey": "CAASqAkw", "Identity": {"PeerID": "QmPeer"}})
        {'Identity': {'PeerID': 'QmPeer'}}
    """
    result = copy_document(document)
    for secret in sensitive_paths:
        _drop(result, _segments(secret))
    return result


def carry_sensitive(
    previous: Mapping[str, Any],
    replacement: Mapping[str, Any],
    sensitive_paths: tuple[str, ...] = SENSITIVE_PATHS,
) -> Document:
    """Copy sensitive fields from ``previous`` into a replacement document.

    Documents produced by ``config show`` never contain the private key, so
    feeding one back through ``config replace`` must not erase the stored key.
    Fields the replacement sets explicitly are kept as given.

    Raises:
        MalformedDocumentError: If the replacement holds a non-object where
            a sensitive field's parent should be.

    Example:
        >>> carry_sensitive({"Identity": {"PrivKey": "k"}}, {"Identity": {"PeerID": "p"}})
        {'Identity': {'PeerID': 'p', 'PrivKey': 'k'}}
    """
    result = copy_document(replacement)
    for secret in sensitive_paths:
        kept = get_path(previous, secret, default=_ABSENT)
        if kept is not _ABSENT and get_path(result, secret, default=_ABSENT) is _ABSENT:
            set_path(result, secret, copy.deepcopy(kept))
    return result


__all__ = ["SENSITIVE_PATHS", "carry_sensitive", "covers_sensitive", "is_sensitive", "redact"]
