"""Domain enum tests: member values, string equality, and exhaustive member counts."""

from __future__ import annotations

from enum import Enum

import pytest

from nodecfg.domain.enums import AddressFormat, OutputFormat, ValueKind


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("member", "expected_value"),
    [
        (OutputFormat.HUMAN, "human"),
        (OutputFormat.JSON, "json"),
        (ValueKind.STRING, "string"),
        (ValueKind.BOOL, "bool"),
        (ValueKind.JSON, "json"),
        (AddressFormat.TEXT, "text"),
        (AddressFormat.JSON, "json"),
    ],
)
def test_member_values_compare_equal_to_strings(member: Enum, expected_value: str) -> None:
    """Members carry their CLI spelling and compare equal to it."""
    assert member.value == expected_value
    assert member == expected_value


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("enum_type", "count"),
    [(OutputFormat, 2), (ValueKind, 3), (AddressFormat, 2)],
)
def test_member_counts(enum_type: type[Enum], count: int) -> None:
    assert len(enum_type) == count


@pytest.mark.os_agnostic
def test_output_format_from_cli_choice() -> None:
    """CLI choices are lower-cased before conversion."""
    assert OutputFormat("JSON".lower()) is OutputFormat.JSON
