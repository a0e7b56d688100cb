"""Configuration store adapters.

Contents:
    * :mod:`.json_file` - JSON file store with atomic replace
"""

from __future__ import annotations

from .json_file import CONFIG_FILENAME, JsonFileConfigStore, open_json_store

__all__ = ["CONFIG_FILENAME", "JsonFileConfigStore", "open_json_store"]
