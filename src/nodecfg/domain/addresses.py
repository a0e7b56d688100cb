"""Pure multiaddr helpers for DNS-link (``/dnsaddr/``) indirection."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

DNSADDR_PROTOCOL: Final = "dnsaddr"
TXT_RECORD_PREFIX: Final = "dnsaddr="
_PEER_PROTOCOLS: Final = ("p2p", "ipfs")


def has_indirection(address: str) -> bool:
    """Return True when the address contains a ``dnsaddr`` segment.

    Example:
        >>> has_indirection("/dnsaddr/bootstrap.libp2p.io/p2p/QmNnoo")
        True
        >>> has_indirection("/ip4/127.0.0.1/tcp/4001")
        False
    """
    return DNSADDR_PROTOCOL in address.split("/")


def dnsaddr_host(address: str) -> str | None:
    """Return the hostname following the ``dnsaddr`` segment, if any.

    Example:
        >>> dnsaddr_host("/dnsaddr/bootstrap.libp2p.io/p2p/QmNnoo")
        'bootstrap.libp2p.io'
        >>> dnsaddr_host("/dnsaddr") is None
        True
    """
    segments = address.split("/")
    try:
        host = segments[segments.index(DNSADDR_PROTOCOL) + 1]
    except (ValueError, IndexError):
        return None
    return host or None


def txt_record_name(host: str) -> str:
    """Name of the TXT record holding dnsaddr entries for ``host``."""
    return f"_{DNSADDR_PROTOCOL}.{host}"


def peer_id(address: str) -> str | None:
    """Return the trailing peer id (``/p2p/<id>`` or ``/ipfs/<id>``), if present.

    Example:
        >>> peer_id("/ip4/1.2.3.4/tcp/4001/p2p/QmPeer")
        'QmPeer'
        >>> peer_id("/ip4/1.2.3.4/tcp/4001") is None
        True
    """
    segments = [part for part in address.split("/") if part]
    if len(segments) >= 2 and segments[-2] in _PEER_PROTOCOLS:
        return segments[-1]
    return None


def select_candidate(address: str, records: Iterable[str]) -> str | None:
    """Pick the replacement address for ``address`` from raw TXT strings.

    Only ``dnsaddr=<multiaddr>`` records count. When ``address`` names a
    peer, the first record ending in the same peer id wins; otherwise the
    first record does.

    Example:
        >>> records = [
        ...     "dnsaddr=/ip4/1.1.1.1/tcp/4001/p2p/QmOther",
        ...     "dnsaddr=/ip4/2.2.2.2/tcp/4001/p2p/QmWanted",
        ...     "v=spf1 -all",
        ... ]
        >>> select_candidate("/dnsaddr/example.com/p2p/QmWanted", records)
        '/ip4/2.2.2.2/tcp/4001/p2p/QmWanted'
        >>> select_candidate("/dnsaddr/example.com", records)
        '/ip4/1.1.1.1/tcp/4001/p2p/QmOther'
    """
    candidates = [
        record.strip()[len(TXT_RECORD_PREFIX) :] for record in records if record.strip().startswith(TXT_RECORD_PREFIX)
    ]
    wanted = peer_id(address)
    if wanted is not None:
        candidates = [candidate for candidate in candidates if peer_id(candidate) == wanted]
    return candidates[0] if candidates else None


__all__ = [
    "DNSADDR_PROTOCOL",
    "TXT_RECORD_PREFIX",
    "dnsaddr_host",
    "has_indirection",
    "peer_id",
    "select_candidate",
    "txt_record_name",
]
