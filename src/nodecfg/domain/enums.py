"""Type-safe domain enums for output formats and value coercion."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for document and result display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Rich-rendered tables and pretty JSON.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class ValueKind(str, Enum):
    """Type hint chosen at the CLI boundary for a ``config <key> <value>`` write.

    Attributes:
        STRING: Store the raw argument as a string.
        BOOL: Accept only ``true`` or ``false``.
        JSON: Parse the argument as a JSON document (objects, arrays, null, numbers).

    Example:
        >>> ValueKind("bool") is ValueKind.BOOL
        True
    """

    STRING = "string"
    BOOL = "bool"
    JSON = "json"


class AddressFormat(str, Enum):
    """Output format for resolved addresses."""

    TEXT = "text"
    JSON = "json"


__all__ = [
    "AddressFormat",
    "OutputFormat",
    "ValueKind",
]
