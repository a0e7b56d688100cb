"""Public package surface: profile engine, redaction, resolution and settings.

Imports are routed through the architectural layers:
- Domain exports: profiles, redaction and default document
- Application exports: profile engine and address resolver
- Composition exports: wired settings loader
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Application exports
from .application import AddressResolver, ProfileEngine

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    PROFILES,
    ApplyResult,
    NodeCfgError,
    default_document,
    list_profiles,
    redact,
)

__all__ = [
    "PROFILES",
    "AddressResolver",
    "ApplyResult",
    "NodeCfgError",
    "ProfileEngine",
    "default_document",
    "get_config",
    "list_profiles",
    "print_info",
    "redact",
]
