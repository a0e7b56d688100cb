"""In-memory settings and display adapters for testing.

Provide functions that satisfy the same Protocols as production adapters
but operate entirely in memory: no filesystem, no lib_layered_config
discovery, no terminal output.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lib_layered_config import Config

from ...domain.enums import OutputFormat
from ...domain.results import ApplyResult


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config; every section falls back to defaults."""
    return Config({}, {})


def display_document_in_memory(
    document: Mapping[str, Any],
    *,
    output_format: OutputFormat = OutputFormat.JSON,
) -> None:
    """No-op display -- satisfies the DisplayDocument protocol."""


def display_result_in_memory(
    result: ApplyResult,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
) -> None:
    """No-op display -- satisfies the DisplayResult protocol."""


def display_value_in_memory(value: Any) -> None:
    """No-op display -- satisfies the DisplayValue protocol."""


__all__ = [
    "display_document_in_memory",
    "display_result_in_memory",
    "display_value_in_memory",
    "get_config_in_memory",
]
