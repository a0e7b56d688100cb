"""CLI config stories: reading and writing keys, show, replace, redaction."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import orjson
import pytest
from click.testing import CliRunner, Result

from nodecfg.adapters import cli as cli_mod
from nodecfg.adapters.memory import InMemoryConfigStore
from nodecfg.domain.document import Document
from nodecfg.domain.redaction import redact

if TYPE_CHECKING:
    from conftest import ServicesFactory


def _invoke(runner: CliRunner, factory: object, *args: str) -> Result:
    return runner.invoke(cli_mod.cli, list(args), obj=factory)


# ======================== reading keys ========================


@pytest.mark.os_agnostic
def test_when_a_string_key_is_read_it_is_printed_verbatim(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Addresses.API")

    assert result.exit_code == 0
    assert result.stdout == "/ip4/127.0.0.1/tcp/5002\n"


@pytest.mark.os_agnostic
def test_when_an_object_key_is_read_it_is_printed_as_json(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Swarm.ConnMgr")

    assert result.exit_code == 0
    assert orjson.loads(result.stdout) == {"LowWater": 200, "HighWater": 500}


@pytest.mark.os_agnostic
def test_when_identity_is_read_the_private_key_is_left_out(
    cli_runner: CliRunner,
    cli_services: ServicesFactory,
    memory_store: InMemoryConfigStore,
    private_key: str,
    peer_id: str,
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Identity")

    assert result.exit_code == 0
    assert orjson.loads(result.stdout) == {"PeerID": peer_id}
    assert private_key not in result.output


@pytest.mark.os_agnostic
def test_when_the_private_key_is_read_it_exits_with_code_13(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore, private_key: str
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Identity.PrivKey")

    assert result.exit_code == 13
    assert "Identity.PrivKey" in result.stderr
    assert private_key not in result.output


@pytest.mark.os_agnostic
def test_when_a_missing_key_is_read_it_exits_with_code_1(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Addresses.Nope")

    assert result.exit_code == 1
    assert "Error: Configuration key 'Addresses.Nope' not found" in result.stderr


@pytest.mark.os_agnostic
def test_when_a_key_has_an_empty_segment_it_exits_with_code_22(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Addresses..API")

    assert result.exit_code == 22


# ======================== writing keys ========================


@pytest.mark.os_agnostic
def test_when_a_value_is_given_it_is_stored_as_a_string(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Addresses.API", "/ip4/0.0.0.0/tcp/5002")

    assert result.exit_code == 0
    assert memory_store.get_path("Addresses.API") == "/ip4/0.0.0.0/tcp/5002"


@pytest.mark.os_agnostic
def test_when_a_numeric_looking_value_has_no_hint_it_stays_a_string(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    _invoke(cli_runner, cli_services(store=memory_store), "config", "Swarm.ConnMgr.LowWater", "50")

    assert memory_store.get_path("Swarm.ConnMgr.LowWater") == "50"


@pytest.mark.os_agnostic
@pytest.mark.parametrize(("raw", "expected"), [("true", True), ("false", False)])
def test_when_bool_is_given_the_value_is_a_boolean(
    cli_runner: CliRunner,
    cli_services: ServicesFactory,
    memory_store: InMemoryConfigStore,
    raw: str,
    expected: bool,
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Pubsub.Enabled", raw, "--bool")

    assert result.exit_code == 0
    assert memory_store.get_path("Pubsub.Enabled") is expected


@pytest.mark.os_agnostic
def test_when_bool_value_is_not_a_boolean_it_exits_with_code_22(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Pubsub.Enabled", "yes", "--bool")

    assert result.exit_code == 22
    assert memory_store.writes == 0


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("50", 50),
        ("null", None),
        ('{"LowWater": 5, "HighWater": 10}', {"LowWater": 5, "HighWater": 10}),
        ('["/ip4/1.2.3.4/tcp/4001"]', ["/ip4/1.2.3.4/tcp/4001"]),
    ],
)
def test_when_json_is_given_the_value_is_parsed(
    cli_runner: CliRunner,
    cli_services: ServicesFactory,
    memory_store: InMemoryConfigStore,
    raw: str,
    expected: object,
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "--json", "Custom.Value", raw)

    assert result.exit_code == 0
    assert memory_store.get_path("Custom.Value") == expected


@pytest.mark.os_agnostic
def test_when_json_is_invalid_it_exits_with_code_22(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Custom.Value", '{"bar:0}', "--json")

    assert result.exit_code == 22
    assert "Invalid json value" in result.stderr
    assert memory_store.writes == 0


@pytest.mark.os_agnostic
def test_when_json_and_bool_are_combined_it_is_a_usage_error(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "A.B", "true", "--json", "--bool")

    assert result.exit_code == 2
    assert "mutually exclusive" in result.output


@pytest.mark.os_agnostic
def test_when_a_hint_is_given_without_value_it_is_a_usage_error(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Pubsub.Enabled", "--bool")

    assert result.exit_code == 2


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    "args",
    [
        ("Identity.PrivKey", "replaced"),
        ("Identity", "{}", "--json"),
        ("Identity.PrivKey.Nested", "x"),
    ],
)
def test_when_the_private_key_would_be_written_it_exits_with_code_13(
    cli_runner: CliRunner,
    cli_services: ServicesFactory,
    memory_store: InMemoryConfigStore,
    node_document: Document,
    args: tuple[str, ...],
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", *args)

    assert result.exit_code == 13
    assert memory_store.get() == node_document


@pytest.mark.os_agnostic
def test_when_peer_id_is_written_it_is_allowed(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    """Only the private key is protected, not its siblings."""
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "Identity.PeerID", "QmOther")

    assert result.exit_code == 0
    assert memory_store.get_path("Identity.PeerID") == "QmOther"


@pytest.mark.os_agnostic
def test_when_config_runs_without_arguments_it_is_a_usage_error(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config")

    assert result.exit_code == 2
    assert "Not enough non-option arguments: got 0, need at least 1" in result.output


@pytest.mark.os_agnostic
def test_when_the_store_cannot_be_written_it_exits_with_code_74(
    cli_runner: CliRunner, cli_services: ServicesFactory, node_document: Document
) -> None:
    store = InMemoryConfigStore(node_document, fail_writes=True)

    result = _invoke(cli_runner, cli_services(store=store), "config", "Addresses.API", "/ip4/0.0.0.0/tcp/1")

    assert result.exit_code == 74


# ======================== show ========================


@pytest.mark.os_agnostic
def test_when_show_runs_it_prints_the_redacted_document(
    cli_runner: CliRunner,
    cli_services: ServicesFactory,
    memory_store: InMemoryConfigStore,
    node_document: Document,
    private_key: str,
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "show")

    assert result.exit_code == 0
    assert orjson.loads(result.stdout) == redact(node_document)
    assert private_key not in result.output


@pytest.mark.os_agnostic
def test_when_show_runs_in_human_format_it_still_redacts(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore, private_key: str
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "show", "--format", "human")

    assert result.exit_code == 0
    assert "Bootstrap" in result.stdout
    assert private_key not in result.output


@pytest.mark.os_agnostic
def test_when_show_runs_without_a_document_it_exits_with_code_74(
    cli_runner: CliRunner, cli_services: ServicesFactory, tmp_path: Path
) -> None:
    result = _invoke(cli_runner, cli_services(), "--repo", str(tmp_path), "config", "show")

    assert result.exit_code == 74
    assert "Cannot read configuration" in result.stderr


# ======================== replace ========================


@pytest.mark.os_agnostic
def test_when_replace_runs_the_document_is_swapped_and_the_key_kept(
    cli_runner: CliRunner,
    cli_services: ServicesFactory,
    memory_store: InMemoryConfigStore,
    private_key: str,
    peer_id: str,
    tmp_path: Path,
) -> None:
    """Feeding ``config show`` output back must not lose the identity."""
    replacement = tmp_path / "new.json"
    replacement.write_bytes(orjson.dumps({"Bootstrap": [], "Identity": {"PeerID": peer_id}}))

    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "replace", str(replacement))

    assert result.exit_code == 0
    assert f"Configuration replaced from {replacement}." in result.stdout
    assert memory_store.get() == {"Bootstrap": [], "Identity": {"PeerID": peer_id, "PrivKey": private_key}}


@pytest.mark.os_agnostic
def test_when_show_output_is_replaced_the_document_is_unchanged(
    cli_runner: CliRunner,
    cli_services: ServicesFactory,
    memory_store: InMemoryConfigStore,
    node_document: Document,
    tmp_path: Path,
) -> None:
    factory = cli_services(store=memory_store)
    shown = _invoke(cli_runner, factory, "config", "show")
    exported = tmp_path / "exported.json"
    exported.write_text(shown.stdout, encoding="utf-8")

    result = _invoke(cli_runner, factory, "config", "replace", str(exported))

    assert result.exit_code == 0
    assert memory_store.get() == node_document


@pytest.mark.os_agnostic
def test_when_replaced_document_spells_the_key_with_a_dot_show_still_hides_it(
    cli_runner: CliRunner,
    cli_services: ServicesFactory,
    memory_store: InMemoryConfigStore,
    tmp_path: Path,
) -> None:
    factory = cli_services(store=memory_store)
    replacement = tmp_path / "dotted.json"
    replacement.write_bytes(orjson.dumps({"Bootstrap": [], "Identity.PrivKey": "SECRETKEY"}))
    _invoke(cli_runner, factory, "config", "replace", str(replacement))

    result = _invoke(cli_runner, factory, "config", "show")

    assert result.exit_code == 0
    assert "SECRETKEY" not in result.output
    assert "Identity.PrivKey" not in orjson.loads(result.stdout)

@pytest.mark.os_agnostic
@pytest.mark.parametrize("content", [b"{not json", b"[1, 2]", b"null"])
def test_when_replace_file_is_not_a_json_object_it_exits_with_code_22(
    cli_runner: CliRunner,
    cli_services: ServicesFactory,
    memory_store: InMemoryConfigStore,
    tmp_path: Path,
    content: bytes,
) -> None:
    replacement = tmp_path / "bad.json"
    replacement.write_bytes(content)

    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "replace", str(replacement))

    assert result.exit_code == 22
    assert memory_store.writes == 0


@pytest.mark.os_agnostic
def test_when_replace_file_is_missing_it_exits_with_code_74(
    cli_runner: CliRunner, cli_services: ServicesFactory, memory_store: InMemoryConfigStore, tmp_path: Path
) -> None:
    result = _invoke(cli_runner, cli_services(store=memory_store), "config", "replace", str(tmp_path / "absent.json"))

    assert result.exit_code == 74
    assert memory_store.writes == 0


@pytest.mark.os_agnostic
def test_when_replace_targets_an_empty_repository_it_creates_the_document(
    cli_runner: CliRunner, cli_services: ServicesFactory, tmp_path: Path
) -> None:
    replacement = tmp_path / "new.json"
    replacement.write_bytes(b'{"Bootstrap": []}')
    repo = tmp_path / "repo"

    result = _invoke(cli_runner, cli_services(), "--repo", str(repo), "config", "replace", str(replacement))

    assert result.exit_code == 0
    assert orjson.loads((repo / "config").read_bytes()) == {"Bootstrap": []}
