"""In-memory configuration store for testing.

Satisfies the ConfigStore protocol without touching the filesystem. Every
read and write copies the document, so tests observe the same isolation the
file store provides.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from nodecfg.domain.document import Document, copy_document, get_path, set_path
from nodecfg.domain.errors import StoreIOError


class InMemoryConfigStore:
    """Configuration store backed by a private dict.

    Attributes:
        writes: Number of successful ``set`` calls.
        fail_writes: When True, ``set`` raises StoreIOError and keeps the
            current document.

    Example:
        >>> store = InMemoryConfigStore({"Bootstrap": ["/ip4/1.2.3.4/tcp/4001"]})
        >>> doc = store.get()
        >>> doc["Bootstrap"].clear()
        >>> store.get_path("Bootstrap")
        ['/ip4/1.2.3.4/tcp/4001']
    """

    location = "memory://config"

    def __init__(self, document: Mapping[str, Any] | None = None, *, fail_writes: bool = False) -> None:
        self._document = copy_document(document) if document is not None else None
        self.writes = 0
        self.fail_writes = fail_writes

    def exists(self) -> bool:
        return self._document is not None

    def get(self) -> Document:
        if self._document is None:
            raise StoreIOError(self.location, "read", "no configuration document")
        return copy_document(self._document)

    def set(self, document: Mapping[str, Any]) -> None:
        if self.fail_writes:
            raise StoreIOError(self.location, "write", "simulated write failure")
        self._document = copy_document(document)
        self.writes += 1

    def get_path(self, path: str) -> Any:
        return get_path(self.get(), path)

    def set_path(self, path: str, value: Any) -> None:
        document = self.get()
        set_path(document, path, value)
        self.set(document)


__all__ = ["InMemoryConfigStore"]
