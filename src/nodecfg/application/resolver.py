"""Resolve ``/dnsaddr/`` indirections into concrete multiaddrs."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Final

from ..domain.addresses import dnsaddr_host, has_indirection, select_candidate, txt_record_name
from ..domain.errors import ResolutionFailedError, ResolutionTimeoutError
from .ports import DnsLookup

logger = logging.getLogger(__name__)

DEFAULT_MAX_HOPS: Final[int] = 32
"""Upper bound on lookups per resolution; stops misconfigured or adversarial chains."""


class AddressResolver:
    """Follow DNS-link indirections through a :class:`DnsLookup`.

    Args:
        lookup: TXT record lookup.
        max_hops: Maximum number of lookups per :meth:`resolve` call.
        clock: Monotonic clock, injectable for tests.

    Example:
        >>> table = {"_dnsaddr.example.com": ["dnsaddr=/ip4/10.0.0.1/tcp/4001/p2p/QmPeer"]}
        >>> resolver = AddressResolver(lambda name, *, timeout=None: table[name])
        >>> resolver.resolve("/dnsaddr/example.com/p2p/QmPeer")
        '/ip4/10.0.0.1/tcp/4001/p2p/QmPeer'
        >>> resolver.resolve("/ip4/127.0.0.1/tcp/4001")
        '/ip4/127.0.0.1/tcp/4001'
    """

    def __init__(
        self,
        lookup: DnsLookup,
        *,
        max_hops: int = DEFAULT_MAX_HOPS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_hops < 1:
            raise ValueError(f"max_hops must be at least 1, got {max_hops}")
        self._lookup = lookup
        self._max_hops = max_hops
        self._clock = clock

    @property
    def max_hops(self) -> int:
        return self._max_hops

    def resolve(self, address: str, *, recursive: bool = True, timeout: float | None = None) -> str:
        """Return the concrete address behind ``address``.

        Args:
            address: Multiaddr, possibly containing a ``/dnsaddr/`` segment.
            recursive: Keep resolving until no indirection remains. When False,
                exactly one lookup is performed.
            timeout: Overall budget in seconds shared by all lookups. None
                leaves timing to the lookup itself.

        Returns:
            The resolved address; ``address`` itself when it has no indirection.

        Raises:
            ResolutionTimeoutError: If the budget runs out or a lookup times out.
            ResolutionFailedError: If a lookup fails, yields no usable record,
                loops back to an earlier address, or the hop cap is exceeded.
        """
        if not has_indirection(address):
            return address

        deadline = None if timeout is None else self._clock() + timeout
        current = address
        seen = {address}
        hops = 0
        while has_indirection(current):
            if hops >= self._max_hops:
                raise ResolutionFailedError(address, f"still indirect after {self._max_hops} lookups")
            current = self._hop(address, current, deadline, timeout)
            hops += 1
            if not recursive:
                break
            if current in seen:
                raise ResolutionFailedError(address, f"indirection loops back to {current!r}")
            seen.add(current)

        logger.info("Resolved address", extra={"address": address, "resolved": current, "hops": hops})
        return current

    def _hop(self, original: str, current: str, deadline: float | None, timeout: float | None) -> str:
        host = dnsaddr_host(current)
        if host is None:
            raise ResolutionFailedError(original, f"{current!r} has no host after /dnsaddr")

        remaining: float | None = None
        if deadline is not None:
            remaining = deadline - self._clock()
            if remaining <= 0:
                raise ResolutionTimeoutError(original, timeout)

        name = txt_record_name(host)
        logger.debug("Looking up dnsaddr records", extra={"name": name, "timeout": remaining})
        try:
            records = self._lookup(name, timeout=remaining)
        except TimeoutError as exc:
            raise ResolutionTimeoutError(original, timeout) from exc
        except Exception as exc:
            raise ResolutionFailedError(original, f"lookup of {name} failed: {exc}") from exc

        replacement = select_candidate(current, records)
        if replacement is None:
            raise ResolutionFailedError(original, f"no usable dnsaddr record for {current!r} under {name}")
        return replacement


__all__ = ["DEFAULT_MAX_HOPS", "AddressResolver"]
