"""Profile engine use case: load, transform, verify, then persist or discard.

The engine never mutates the caller's document and never writes a partially
transformed one: every transform, scope check and type check runs in memory
before the single ``store.set`` call. A dry run follows the exact same path
and stops right before that call. A real run always writes, even when
nothing changed, so ``applied`` always means the document was persisted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Final

from ..domain.document import FieldChange, copy_document, diff_documents, get_path, json_type, split_path
from ..domain.errors import MalformedDocumentError, ProfileScopeError
from ..domain.profiles import PROFILES, Profile, get_profile
from ..domain.results import ApplyResult
from .ports import ConfigStore

logger = logging.getLogger(__name__)

APPLY: Final = "apply"
REVERT: Final = "revert"

_ABSENT: Final = object()


def _is_in_scope(change: FieldChange, fields: tuple[str, ...]) -> bool:
    """Allow declared fields, plus empty parent objects filled in to reach them.

    Compares raw key segments, so a literal dotted key never passes for the
    nested field of the same spelling.
    """
    depth = len(change.segments)
    for field in map(split_path, fields):
        if change.segments[: len(field)] == field:
            return True
        if depth < len(field) and field[:depth] == change.segments and change.before == {}:
            return True
    return False


def _check_scope(profile: Profile, before: Mapping[str, Any], after: Mapping[str, Any]) -> None:
    stray = [change.path for change in diff_documents(before, after) if not _is_in_scope(change, profile.fields)]
    if stray:
        raise ProfileScopeError(profile.name, stray)


def _check_types(profile: Profile, before: Mapping[str, Any], after: Mapping[str, Any]) -> None:
    """Reject transforms that change the JSON type of an existing non-null field."""
    for field in profile.fields:
        old = get_path(before, field, default=_ABSENT)
        new = get_path(after, field, default=_ABSENT)
        if old is _ABSENT or old is None or new is _ABSENT:
            continue
        if json_type(old) != json_type(new):
            raise MalformedDocumentError(
                field, f"holds a {json_type(old)} but profile {profile.name!r} writes a {json_type(new)}"
            )


class ProfileEngine:
    """Apply and revert registered profiles against a configuration store.

    Args:
        store: Store the document is loaded from and persisted to.
        registry: Profile catalogue; defaults to the built-in profiles.

    Example:
        >>> from nodecfg.adapters.memory import InMemoryConfigStore
        >>> store = InMemoryConfigStore({"Discovery": {"MDNS": {"Enabled": True}}})
        >>> engine = ProfileEngine(store)
        >>> engine.apply_profile("server", dry_run=True).document["Discovery"]["MDNS"]["Enabled"]
        False
        >>> store.get_path("Discovery.MDNS.Enabled")
        True
    """

    def __init__(self, store: ConfigStore, registry: Mapping[str, Profile] = PROFILES) -> None:
        self._store = store
        self._registry = registry

    @property
    def registry(self) -> Mapping[str, Profile]:
        return self._registry

    def apply_profile(
        self, name: str, *, dry_run: bool = False, document: Mapping[str, Any] | None = None
    ) -> ApplyResult:
        """Run the ``apply`` transform of ``name``.

        Args:
            name: Registered profile name.
            dry_run: Compute the result without persisting it.
            document: Document to transform. Loaded from the store when omitted.

        Returns:
            ApplyResult with ``applied`` True only when the store was written.

        Raises:
            UnknownProfileError: If ``name`` is not registered.
            MalformedDocumentError: If the document cannot hold the profile's values.
            StoreIOError: If loading or persisting fails.
        """
        return self._run((name,), APPLY, dry_run=dry_run, document=document)

    def revert_profile(
        self, name: str, *, dry_run: bool = False, document: Mapping[str, Any] | None = None
    ) -> ApplyResult:
        """Run the ``revert`` transform of ``name``; see :meth:`apply_profile`."""
        return self._run((name,), REVERT, dry_run=dry_run, document=document)

    def apply_profiles(
        self, names: Iterable[str], *, dry_run: bool = False, document: Mapping[str, Any] | None = None
    ) -> ApplyResult:
        """Apply several profiles in order and persist the combined result once.

        Every name is validated before the first transform runs, so an unknown
        name anywhere in the list leaves the store untouched.
        """
        return self._run(tuple(names), APPLY, dry_run=dry_run, document=document)

    def _run(
        self,
        names: tuple[str, ...],
        direction: str,
        *,
        dry_run: bool,
        document: Mapping[str, Any] | None,
    ) -> ApplyResult:
        if not names:
            raise ValueError("At least one profile name is required")
        profiles = [get_profile(name, self._registry) for name in names]

        previous = copy_document(document) if document is not None else self._store.get()
        current = copy_document(previous)
        for profile in profiles:
            transform = profile.apply if direction == APPLY else profile.revert
            result = transform(copy_document(current))
            _check_scope(profile, current, result)
            _check_types(profile, current, result)
            current = result

        changes = diff_documents(previous, current)
        extra = {
            "profiles": list(names),
            "direction": direction,
            "dry_run": dry_run,
            "changed": [change.path for change in changes],
            "store": self._store.location,
        }
        if dry_run:
            logger.info("Computed profile %s without persisting", direction, extra=extra)
        else:
            self._store.set(current)
            logger.info("Persisted profile %s", direction, extra=extra)

        return ApplyResult(
            profiles=names,
            direction=direction,
            previous=previous,
            document=current,
            applied=not dry_run,
            changes=changes,
        )


__all__ = ["APPLY", "REVERT", "ProfileEngine"]
