"""Configuration adapter - settings loading, overrides, and document display.

Contents:
    * :mod:`.loader` - Layered application settings with caching
    * :mod:`.settings` - Pydantic models for the ``[repo]`` and ``[resolver]`` sections
    * :mod:`.overrides` - CLI ``--set`` override parsing and application
    * :mod:`.display` - Redacting renderers for documents and profile results
"""

from __future__ import annotations

from .display import display_document, display_result, display_value
from .loader import get_config, get_default_config_path
from .overrides import apply_overrides
from .settings import load_repo_settings, load_resolver_settings

__all__ = [
    "apply_overrides",
    "display_document",
    "display_result",
    "display_value",
    "get_config",
    "get_default_config_path",
    "load_repo_settings",
    "load_resolver_settings",
]
