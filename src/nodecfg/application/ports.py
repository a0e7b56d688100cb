"""Application ports: Protocol definitions for adapter objects and functions.

Callable ports define a ``__call__`` method whose signature exactly matches
the corresponding adapter function, so module-level functions satisfy them
via structural subtyping (PEP 544). :class:`ConfigStore` is the one stateful
port: an object owning a persisted configuration document.

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``) are
    imported under ``TYPE_CHECKING`` only so that import-linter layer
    contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.document import Document
from ..domain.enums import OutputFormat
from ..domain.results import ApplyResult

if TYPE_CHECKING:
    from lib_layered_config import Config


class ConfigStore(Protocol):
    """Persisted configuration document with atomic replace semantics.

    ``set`` must replace the whole document atomically: a concurrent reader
    sees either the old or the new document, never a mix. ``get`` returns a
    fresh copy on every call.
    """

    @property
    def location(self) -> str:
        """Human-readable location used in error messages and logs."""
        ...

    def exists(self) -> bool: ...

    def get(self) -> Document: ...

    def set(self, document: Mapping[str, Any]) -> None: ...

    def get_path(self, path: str) -> Any: ...

    def set_path(self, path: str, value: Any) -> None: ...


class OpenStore(Protocol):
    """Open the configuration store living in a repository directory."""

    def __call__(self, repo: Path) -> ConfigStore: ...


class DnsLookup(Protocol):
    """Return the TXT record strings published under ``name``.

    Implementations raise ``TimeoutError`` when ``timeout`` seconds elapse
    and any other exception for lookup failures.
    """

    def __call__(self, name: str, *, timeout: float | None = ...) -> list[str]: ...


class MakeDnsLookup(Protocol):
    """Build a DNS lookup bound to a resolver endpoint."""

    def __call__(self, *, endpoint: str) -> DnsLookup: ...


class GetConfig(Protocol):
    """Load layered application settings with bundled defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayDocument(Protocol):
    """Render a configuration document (already redacted by the caller or not)."""

    def __call__(self, document: Mapping[str, Any], *, output_format: OutputFormat = ...) -> None: ...


class DisplayResult(Protocol):
    """Render the outcome of a profile run."""

    def __call__(self, result: ApplyResult, *, output_format: OutputFormat = ...) -> None: ...


class DisplayValue(Protocol):
    """Render a single configuration value."""

    def __call__(self, value: Any) -> None: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "ConfigStore",
    "DisplayDocument",
    "DisplayResult",
    "DisplayValue",
    "DnsLookup",
    "GetConfig",
    "InitLogging",
    "MakeDnsLookup",
    "OpenStore",
]
