"""Application layer - use cases and port definitions.

Contents:
    * :mod:`.ports` - Protocol definitions for adapter implementations
    * :mod:`.engine` - Profile apply/revert use case
    * :mod:`.resolver` - DNS-link address resolution use case
"""

from __future__ import annotations

from .engine import ProfileEngine
from .ports import (
    ConfigStore,
    DisplayDocument,
    DisplayResult,
    DisplayValue,
    DnsLookup,
    GetConfig,
    InitLogging,
    MakeDnsLookup,
    OpenStore,
)
from .resolver import DEFAULT_MAX_HOPS, AddressResolver

__all__ = [
    # Use cases
    "AddressResolver",
    "DEFAULT_MAX_HOPS",
    "ProfileEngine",
    # Ports
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
