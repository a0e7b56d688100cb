"""Typed views over the ``[repo]`` and ``[resolver]`` settings sections.

Sections are validated once at the boundary with Pydantic; the rest of the
code only sees the typed models.
"""

from __future__ import annotations

from pathlib import Path
from typing import Final, cast

from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_REPO_PATH: Final = "~/.nodecfg"
DEFAULT_DOH_ENDPOINT: Final = "https://cloudflare-dns.com/dns-query"


class RepoSettings(BaseModel):
    """Location of the node repository.

    Example:
        >>> RepoSettings(path="/srv/node").directory()
        PosixPath('/srv/node')
    """

    path: str = DEFAULT_REPO_PATH

    model_config = ConfigDict(extra="forbid")

    def directory(self) -> Path:
        return Path(self.path).expanduser()


class ResolverSettings(BaseModel):
    """Address resolution limits and lookup endpoint.

    Example:
        >>> ResolverSettings().max_hops
        32
        >>> ResolverSettings(timeout=0)  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValidationError: ...
    """

    max_hops: int = Field(default=32, ge=1, le=1024)
    timeout: float = Field(default=10.0, gt=0)
    doh_endpoint: str = DEFAULT_DOH_ENDPOINT

    model_config = ConfigDict(extra="forbid")


def _section(config: Config, name: str) -> dict[str, object]:
    raw: object = config.get(name, default={})
    return cast("dict[str, object]", raw) if raw else {}


def load_repo_settings(config: Config) -> RepoSettings:
    """Parse the ``[repo]`` section.

    Raises:
        pydantic.ValidationError: If the section holds unknown or invalid keys.
    """
    return RepoSettings.model_validate(_section(config, "repo"))


def load_resolver_settings(config: Config) -> ResolverSettings:
    """Parse the ``[resolver]`` section.

    Raises:
        pydantic.ValidationError: If the section holds unknown or invalid keys.
    """
    return ResolverSettings.model_validate(_section(config, "resolver"))


__all__ = [
    "RepoSettings",
    "ResolverSettings",
    "load_repo_settings",
    "load_resolver_settings",
]
