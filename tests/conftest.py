"""Shared pytest fixtures for domain, adapter and CLI tests.

Centralizes test infrastructure following clean architecture principles:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from nodecfg.adapters.memory import InMemoryConfigStore, StaticDnsLookup
from nodecfg.domain.defaults import default_document
from nodecfg.domain.document import Document

if TYPE_CHECKING:
    from nodecfg.composition import AppServices


def _load_dotenv() -> None:
    """Load .env file when it exists for local test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

PEER_ID = "QmNodeCfgTestPeer1111111111111111111111111111"
PRIVATE_KEY = "CAASqAkwggSkAgEAAoIBAQC-private-key-material"


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


def make_node_document() -> Document:
    """Default document plus an identity, as an initialized repository holds it."""
    document = default_document()
    document["Identity"] = {"PeerID": PEER_ID, "PrivKey": PRIVATE_KEY}
    return document


@pytest.fixture
def peer_id() -> str:
    """Provide the peer id stored in :func:`node_document`."""
    return PEER_ID


@pytest.fixture
def private_key() -> str:
    """Provide the private key stored in :func:`node_document`."""
    return PRIVATE_KEY


@pytest.fixture
def node_document() -> Document:
    """Provide a fresh initialized-repository document with a private key."""
    return make_node_document()


@pytest.fixture
def memory_store(node_document: Document) -> InMemoryConfigStore:
    """Provide an in-memory store seeded with :func:`node_document`."""
    return InMemoryConfigStore(node_document)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Click 8.2+ provides separate result.stdout and result.stderr attributes.
    Use result.stdout for clean output (e.g., JSON parsing) so log lines and
    error messages on stderr never contaminate it.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests.

    Use this when invoking CLI commands that don't need custom injection.
    """
    from nodecfg.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test.

    Use this whenever a test reads or mutates the global
    ``lib_cli_exit_tools.config`` traceback flags.
    """
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before each test.

    Note: Only clears before, not after, to avoid errors when the function
    has been monkeypatched during the test (losing cache_clear method).
    """
    from nodecfg.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts.

    Builds actual ``lib_layered_config.Config`` objects without filesystem I/O.
    The second argument (empty dict) represents no source provenance info.
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


ServicesFactory = Callable[..., Callable[[], "AppServices"]]


@pytest.fixture
def cli_services(clear_config_cache: None) -> ServicesFactory:
    """Return a builder for CLI services with injected store, DNS table and settings.

    Production logging and display adapters stay in place so the CLI output
    is the real output; only the I/O boundaries are replaced.

    Keyword Args:
        store: Store returned for any repository. When omitted the real
            JSON file store is used, so ``--repo`` decides where it lives.
        lookup: DNS table used for every endpoint.
        settings: Settings dict served by ``get_config``.
        captured_profiles: List receiving every settings profile requested.

    Example:
        def test_show(cli_runner, cli_services, memory_store) -> None:
            factory = cli_services(store=memory_store)
            result = cli_runner.invoke(cli, ["config", "show"], obj=factory)
            assert result.exit_code == 0
    """
    from nodecfg.composition import AppServices, build_production

    def _build(
        *,
        store: InMemoryConfigStore | None = None,
        lookup: StaticDnsLookup | None = None,
        settings: dict[str, Any] | None = None,
        captured_profiles: list[str | None] | None = None,
    ) -> Callable[[], AppServices]:
        config = Config(settings or {}, {})
        prod = build_production()

        def _fake_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            if captured_profiles is not None:
                captured_profiles.append(profile)
            return config

        memory_lookup = lookup if lookup is not None else StaticDnsLookup()
        test_services = AppServices(
            get_config=_fake_get_config,
            init_logging=prod.init_logging,
            open_store=(lambda repo: store) if store is not None else prod.open_store,
            make_dns_lookup=lambda *, endpoint: memory_lookup,
            display_document=prod.display_document,
            display_result=prod.display_result,
            display_value=prod.display_value,
        )
        return lambda: test_services

    return _build
