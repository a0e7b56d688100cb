"""In-memory DNS lookup for testing."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field


def _empty_queries() -> list[str]:
    return []


@dataclass
class StaticDnsLookup:
    """TXT lookup answering from a fixed table and recording every query.

    Names absent from the table answer with no records. Set ``error`` to make
    every query raise it.

    Example:
        >>> lookup = StaticDnsLookup({"_dnsaddr.example.com": ["dnsaddr=/ip4/10.0.0.1/tcp/4001"]})
        >>> lookup("_dnsaddr.example.com")
        ['dnsaddr=/ip4/10.0.0.1/tcp/4001']
        >>> lookup.queries
        ['_dnsaddr.example.com']
    """

    records: Mapping[str, Sequence[str]] = field(default_factory=dict)
    error: Exception | None = None
    queries: list[str] = field(default_factory=_empty_queries)

    def __call__(self, name: str, *, timeout: float | None = None) -> list[str]:
        self.queries.append(name)
        if self.error is not None:
            raise self.error
        return list(self.records.get(name, ()))


__all__ = ["StaticDnsLookup"]
