"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no network, no logging framework.

Contents:
    * :mod:`.store` - In-memory configuration store
    * :mod:`.dns` - Table-driven DNS lookup (StaticDnsLookup)
    * :mod:`.config` - In-memory settings and display adapters
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_document_in_memory,
    display_result_in_memory,
    display_value_in_memory,
    get_config_in_memory,
)
from .dns import StaticDnsLookup
from .logging import init_logging_in_memory
from .store import InMemoryConfigStore

# Static conformance assertions
if TYPE_CHECKING:
    from nodecfg.application.ports import (
        ConfigStore,
        DisplayDocument,
        DisplayResult,
        DisplayValue,
        DnsLookup,
        GetConfig,
        InitLogging,
    )

    _assert_store: ConfigStore = InMemoryConfigStore()
    _assert_dns_lookup: DnsLookup = StaticDnsLookup()
    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_document: DisplayDocument = display_document_in_memory
    _assert_display_result: DisplayResult = display_result_in_memory
    _assert_display_value: DisplayValue = display_value_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory

__all__ = [
    "InMemoryConfigStore",
    "StaticDnsLookup",
    "display_document_in_memory",
    "display_result_in_memory",
    "display_value_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
]
