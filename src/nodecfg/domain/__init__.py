"""Domain layer - pure configuration logic with no I/O or framework dependencies.

Contents:
    * :mod:`.document` - Dotted-path access, copying and diffing of documents
    * :mod:`.defaults` - The default node configuration document
    * :mod:`.profiles` - Built-in profile registry of pure transform pairs
    * :mod:`.redaction` - Sensitive field removal
    * :mod:`.results` - Profile run results
    * :mod:`.values` - Tagged CLI values
    * :mod:`.addresses` - ``/dnsaddr/`` multiaddr helpers
    * :mod:`.enums` - Domain enumerations
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .defaults import default_document
from .document import MISSING, Document, FieldChange, diff_documents, get_path, set_path
from .enums import AddressFormat, OutputFormat, ValueKind
from .errors import (
    ConfigKeyNotFoundError,
    MalformedDocumentError,
    MalformedValueError,
    NodeCfgError,
    ProfileScopeError,
    ResolutionFailedError,
    ResolutionTimeoutError,
    SensitiveFieldError,
    StoreIOError,
    UnknownProfileError,
)
from .profiles import PROFILES, Profile, get_profile, list_profiles, opposite_of
from .redaction import SENSITIVE_PATHS, carry_sensitive, covers_sensitive, is_sensitive, redact
from .results import ApplyResult
from .values import ConfigValue, parse_value

__all__ = [
    # Document
    "MISSING",
    "Document",
    "FieldChange",
    "default_document",
    "diff_documents",
    "get_path",
    "set_path",
    # Profiles
    "PROFILES",
    "Profile",
    "get_profile",
    "list_profiles",
    "opposite_of",
    # Results
    "ApplyResult",
    # Redaction
    "SENSITIVE_PATHS",
    "carry_sensitive",
    "covers_sensitive",
    "is_sensitive",
    "redact",
    # Values
    "ConfigValue",
    "parse_value",
    # Enums
    "AddressFormat",
    "OutputFormat",
    "ValueKind",
    # Errors
    "ConfigKeyNotFoundError",
    "MalformedDocumentError",
    "MalformedValueError",
    "NodeCfgError",
    "ProfileScopeError",
    "ResolutionFailedError",
    "ResolutionTimeoutError",
    "SensitiveFieldError",
    "StoreIOError",
    "UnknownProfileError",
]
