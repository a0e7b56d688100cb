"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.store` - JSON file configuration store
    * :mod:`.dns` - DNS-over-HTTPS lookups
    * :mod:`.config` - Settings loading, overrides, and display
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
