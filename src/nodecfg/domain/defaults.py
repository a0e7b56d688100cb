"""Default node configuration document.

These are the values the restoring profiles (``default-networking``,
``default-power``) write back, and the document ``nodecfg init`` creates.
"""

from __future__ import annotations

import copy
from typing import Any, Final

from .document import Document, copy_document, get_path

DEFAULT_BOOTSTRAP: Final[tuple[str, ...]] = (
    "/ip4/104.236.176.52/tcp/4001/p2p/QmSoLnSGccFuZQJzRadHn95W2CrSFmZuTdDWP8HXaHca9z",
    "/ip4/104.131.131.82/tcp/4001/p2p/QmaCpDMGvV2BGHeYERUEnRQAwe3N8SzbUtfsmvsqQLuvuJ",
    "/ip4/104.236.179.241/tcp/4001/p2p/QmSoLPppuBtQSGwKDZT2M73ULpjvfd3aZ6ha4oFGL1KrGM",
    "/ip4/162.243.248.213/tcp/4001/p2p/QmSoLueR4xBeUbY9WZ9xGUUxunbKWcrNFTDAadQJmocnWm",
    "/ip4/128.199.219.111/tcp/4001/p2p/QmSoLSafTMBsPKadTEgaXctDQVcqN88CNLHXMkTNwMKPnu",
    "/ip4/104.236.76.40/tcp/4001/p2p/QmSoLV4Bbm51jM9C4gDYZQ9Cy3U6aXMJDAbzgu2fzaDs64",
    "/ip4/178.62.158.247/tcp/4001/p2p/QmSoLer265NRgSp2LA3dPaeykiS1J6DifTC88f5uVQKNAd",
    "/dnsaddr/bootstrap.libp2p.io/p2p/QmNnooDu7bfjPFoTZYxMNLWUQJyrVwtbZg5gBMjTezGAJN",
    "/dnsaddr/bootstrap.libp2p.io/p2p/QmbLHAnMoJPWSCR5Zhtx6BHJX9KiKNN6tpvbUcqanj75Nb",
)

_DEFAULT_DOCUMENT: Final[Document] = {
    "Addresses": {
        "Swarm": ["/ip4/0.0.0.0/tcp/4002", "/ip4/127.0.0.1/tcp/4003/ws"],
        "API": "/ip4/127.0.0.1/tcp/5002",
        "Gateway": "/ip4/127.0.0.1/tcp/9090",
        "Delegates": [],
    },
    "Discovery": {
        "MDNS": {"Enabled": True, "Interval": 10},
        "webRTCStar": {"Enabled": True},
    },
    "Bootstrap": list(DEFAULT_BOOTSTRAP),
    "Pubsub": {"Router": "gossipsub", "Enabled": True},
    "Swarm": {
        "ConnMgr": {"LowWater": 200, "HighWater": 500},
    },
}


def default_document() -> Document:
    """Return a fresh deep copy of the default document.

    Example:
        >>> doc = default_document()
        >>> doc["Swarm"]["ConnMgr"]["LowWater"]
        200
        >>> doc["Bootstrap"].clear()
        >>> len(default_document()["Bootstrap"]) > 0
        True
    """
    return copy_document(_DEFAULT_DOCUMENT)


def default_value(path: str) -> Any:
    """Return a copy of the default value stored at ``path``."""
    return copy.deepcopy(get_path(_DEFAULT_DOCUMENT, path))


__all__ = [
    "DEFAULT_BOOTSTRAP",
    "default_document",
    "default_value",
]
