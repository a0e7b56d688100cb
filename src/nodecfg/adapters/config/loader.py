"""Application settings loader with caching and settings-profile support.

These are nodecfg's *own* settings (repository location, resolver limits,
logging), not the node configuration document that profiles transform.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from nodecfg import __init__conf__


class ConfigLoaderProtocol(Protocol):
    """Protocol for the settings loader with its cache_clear method."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_settings_profile(profile: str, max_length: int | None = None) -> None:
    """Validate a settings-profile name using lib_layered_config rules.

    Rejects empty names, names that are too long, path traversal attempts and
    Windows reserved names.

    Raises:
        ValueError: If the profile name is invalid.

    Examples:
        >>> validate_settings_profile("staging-v2")

        >>> validate_settings_profile("../etc/passwd")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../etc/passwd
    """
    length = max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH
    validate_profile_name(profile, max_length=length)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the path to the bundled ``defaultconfig.toml``.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


# One load per (profile, start_dir) for the lifetime of a short CLI process.
@lru_cache(maxsize=4)
def _get_config_impl(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load layered settings: defaults -> app -> host -> user -> dotenv -> env.

    Args:
        profile: Optional settings profile; inserts a ``profile/<name>/``
            directory into every search path.
        start_dir: Directory that seeds .env discovery. Defaults to the
            current working directory.

    Returns:
        Immutable Config with provenance tracking.

    Example:
        >>> config = get_config()
        >>> config.get("nonexistent", default="fallback")
        'fallback'
    """
    if profile is not None:
        validate_settings_profile(profile)
    return _get_config_impl(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Drop cached settings so the next ``get_config()`` re-reads from disk."""
    _get_config_impl.cache_clear()


# lru_cache's cache_clear is invisible to type checkers once the function is
# cast to the Protocol, hence the explicit attribute.
_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "get_config",
    "get_default_config_path",
    "validate_settings_profile",
]
