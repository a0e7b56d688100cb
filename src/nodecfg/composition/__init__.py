"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Display services
from ..adapters.config.display import display_document, display_result, display_value

# Settings services
from ..adapters.config.loader import get_config

# Lookup services
from ..adapters.dns.doh import make_doh_lookup

# Logging services
from ..adapters.logging.setup import init_logging

# Store services
from ..adapters.store.json_file import open_json_store

# Static conformance assertions: pyright checks that each adapter structurally
# satisfies its Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory import InMemoryConfigStore, StaticDnsLookup
    from ..application.ports import (
        DisplayDocument,
        DisplayResult,
        DisplayValue,
        GetConfig,
        InitLogging,
        MakeDnsLookup,
        OpenStore,
    )

    _assert_get_config: GetConfig = get_config
    _assert_init_logging: InitLogging = init_logging
    _assert_open_store: OpenStore = open_json_store
    _assert_make_dns_lookup: MakeDnsLookup = make_doh_lookup
    _assert_display_document: DisplayDocument = display_document
    _assert_display_result: DisplayResult = display_result
    _assert_display_value: DisplayValue = display_value


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    init_logging: InitLogging
    open_store: OpenStore
    make_dns_lookup: MakeDnsLookup
    display_document: DisplayDocument
    display_result: DisplayResult
    display_value: DisplayValue


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        init_logging=init_logging,
        open_store=open_json_store,
        make_dns_lookup=make_doh_lookup,
        display_document=display_document,
        display_result=display_result,
        display_value=display_value,
    )


def build_testing(
    *,
    store: InMemoryConfigStore | None = None,
    lookup: StaticDnsLookup | None = None,
) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        store: Store returned for every repository. When None, a fresh store
            seeded with the default document is created.
        lookup: DNS table used for every endpoint. When None, an empty
            table (every name answers with no records) is used.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        InMemoryConfigStore,
        StaticDnsLookup,
        display_document_in_memory,
        display_result_in_memory,
        display_value_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
    )
    from ..domain.defaults import default_document

    memory_store = store if store is not None else InMemoryConfigStore(default_document())
    memory_lookup = lookup if lookup is not None else StaticDnsLookup()

    return AppServices(
        get_config=get_config_in_memory,
        init_logging=init_logging_in_memory,
        open_store=lambda repo: memory_store,
        make_dns_lookup=lambda *, endpoint: memory_lookup,
        display_document=display_document_in_memory,
        display_result=display_result_in_memory,
        display_value=display_value_in_memory,
    )


__all__ = [
    # Settings
    "get_config",
    # Logging
    "init_logging",
    # Store
    "open_json_store",
    # Lookup
    "make_doh_lookup",
    # Display
    "display_document",
    "display_result",
    "display_value",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
