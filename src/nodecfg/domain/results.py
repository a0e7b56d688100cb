"""Outcome of a profile run."""

from __future__ import annotations

from dataclasses import dataclass

from .document import Document, FieldChange


@dataclass(frozen=True, slots=True)
class ApplyResult:
    """Result of applying or reverting one or more profiles.

    Attributes:
        profiles: Profile names in the order they ran.
        direction: ``"apply"`` or ``"revert"``.
        previous: Document as loaded before the run.
        document: Computed document after the run.
        applied: True when ``document`` was persisted, False for a dry run.
        changes: Leaf-level differences between ``previous`` and ``document``.

    Note:
        ``previous`` and ``document`` are unredacted. Anything that renders
        them must pass them through :func:`nodecfg.domain.redaction.redact`.
    """

    profiles: tuple[str, ...]
    direction: str
    previous: Document
    document: Document
    applied: bool
    changes: tuple[FieldChange, ...] = ()

    @property
    def dry_run(self) -> bool:
        """True when the result was computed but not persisted."""
        return not self.applied

    @property
    def changed_paths(self) -> tuple[str, ...]:
        return tuple(change.path for change in self.changes)


__all__ = ["ApplyResult"]
