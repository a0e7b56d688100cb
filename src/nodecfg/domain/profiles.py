"""Built-in configuration profiles as pure transform pairs.

Each :class:`Profile` owns a fixed set of dotted field paths and two pure
functions, ``apply`` and ``revert``, that map a document to a new document.
Neither function mutates its input or reads anything but its input.

Named opposites undo each other on the declared fields:

* ``server`` / ``local-discovery``
* ``test`` / ``default-networking``
* ``lowpower`` / ``default-power``

``default-networking`` and ``default-power`` restore defaults in both
directions; reverting them restores defaults again.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final

from .defaults import default_value
from .document import Document, copy_document, set_path
from .errors import UnknownProfileError

Transform = Callable[[Mapping[str, Any]], Document]
"""Pure document-to-document function."""

LOOPBACK_EPHEMERAL: Final = "/ip4/127.0.0.1/tcp/0"

DISCOVERY_FIELDS: Final[tuple[str, ...]] = (
    "Discovery.MDNS.Enabled",
    "Discovery.webRTCStar.Enabled",
)

NETWORKING_FIELDS: Final[tuple[str, ...]] = (
    "Addresses.API",
    "Addresses.Gateway",
    "Addresses.Swarm",
    "Bootstrap",
    *DISCOVERY_FIELDS,
)

POWER_FIELDS: Final[tuple[str, ...]] = (
    "Swarm.ConnMgr.LowWater",
    "Swarm.ConnMgr.HighWater",
)

LOWPOWER_LOW_WATER: Final = 20
LOWPOWER_HIGH_WATER: Final = 40


@dataclass(frozen=True, slots=True)
class Profile:
    """A named, reversible transform over the configuration document.

    Attributes:
        name: Registry key used on the command line.
        description: One-line summary shown by ``config profile ls``.
        fields: Dotted paths this profile is allowed to change.
        apply: Transform run by ``config profile apply``.
        revert: Transform run by ``config profile revert``.
        opposite: Name of the profile whose ``apply`` undoes this one, if any.
    """

    name: str
    description: str
    fields: tuple[str, ...]
    apply: Transform
    revert: Transform
    opposite: str | None = None


def assign(values: Mapping[str, Any]) -> Transform:
    """Build a transform that writes each ``path -> value`` pair into a copy.

    Values are deep-copied on every call so results never share list or
    object instances with each other or with the constants they came from.

    Example:
        >>> disable = assign({"Discovery.MDNS.Enabled": False})
        >>> source = {"Discovery": {"MDNS": {"Enabled": True, "Interval": 10}}}
        >>> disable(source)
        {'Discovery': {'MDNS': {'Enabled': False, 'Interval': 10}}}
        >>> source["Discovery"]["MDNS"]["Enabled"]
        True
    """
    frozen = MappingProxyType(copy.deepcopy(dict(values)))

    def _transform(document: Mapping[str, Any]) -> Document:
        result = copy_document(document)
        for path, value in frozen.items():
            set_path(result, path, copy.deepcopy(value))
        return result

    return _transform


def restore_defaults(fields: tuple[str, ...]) -> Transform:
    """Build a transform that writes the default value of every field."""
    return assign({path: default_value(path) for path in fields})


_discovery_off = assign(dict.fromkeys(DISCOVERY_FIELDS, False))
_discovery_on = assign(dict.fromkeys(DISCOVERY_FIELDS, True))
_networking_defaults = restore_defaults(NETWORKING_FIELDS)
_power_defaults = restore_defaults(POWER_FIELDS)

_test_networking = assign(
    {
        "Addresses.API": LOOPBACK_EPHEMERAL,
        "Addresses.Gateway": LOOPBACK_EPHEMERAL,
        "Addresses.Swarm": [LOOPBACK_EPHEMERAL],
        "Bootstrap": [],
        "Discovery.MDNS.Enabled": False,
        "Discovery.webRTCStar.Enabled": False,
    }
)

_lowpower = assign(
    {
        "Swarm.ConnMgr.LowWater": LOWPOWER_LOW_WATER,
        "Swarm.ConnMgr.HighWater": LOWPOWER_HIGH_WATER,
    }
)

_BUILTIN: Final[tuple[Profile, ...]] = (
    Profile(
        name="server",
        description="Disable local host discovery; recommended when running on public infrastructure.",
        fields=DISCOVERY_FIELDS,
        apply=_discovery_off,
        revert=_discovery_on,
        opposite="local-discovery",
    ),
    Profile(
        name="local-discovery",
        description="Enable local host discovery (mDNS and webRTCStar).",
        fields=DISCOVERY_FIELDS,
        apply=_discovery_on,
        revert=_discovery_off,
        opposite="server",
    ),
    Profile(
        name="test",
        description="Loopback-only ephemeral addresses, no bootstrap peers, no discovery.",
        fields=NETWORKING_FIELDS,
        apply=_test_networking,
        revert=_networking_defaults,
        opposite="default-networking",
    ),
    Profile(
        name="default-networking",
        description="Restore default addresses, bootstrap peers and discovery settings.",
        fields=NETWORKING_FIELDS,
        apply=_networking_defaults,
        revert=_networking_defaults,
    ),
    Profile(
        name="lowpower",
        description="Reduce connection-manager watermarks to save resources.",
        fields=POWER_FIELDS,
        apply=_lowpower,
        revert=_power_defaults,
        opposite="default-power",
    ),
    Profile(
        name="default-power",
        description="Restore default connection-manager watermarks.",
        fields=POWER_FIELDS,
        apply=_power_defaults,
        revert=_power_defaults,
    ),
)

PROFILES: Final[Mapping[str, Profile]] = MappingProxyType({profile.name: profile for profile in _BUILTIN})
"""Immutable registry of built-in profiles keyed by name."""


def get_profile(name: str, registry: Mapping[str, Profile] = PROFILES) -> Profile:
    """Look up a profile by name.

    Raises:
        UnknownProfileError: If ``name`` is not registered.

    Example:
        >>> get_profile("lowpower").fields
        ('Swarm.ConnMgr.LowWater', 'Swarm.ConnMgr.HighWater')
    """
    try:
        return registry[name]
    except KeyError:
        raise UnknownProfileError(name, known=sorted(registry)) from None


def opposite_of(name: str, registry: Mapping[str, Profile] = PROFILES) -> Profile | None:
    """Return the profile whose ``apply`` undoes ``name``, if it has one.

    Raises:
        UnknownProfileError: If ``name`` is not registered.

    Example:
        >>> opposite_of("lowpower").name
        'default-power'
        >>> opposite_of("default-power") is None
        True
    """
    profile = get_profile(name, registry)
    if profile.opposite is None:
        return None
    return get_profile(profile.opposite, registry)


def list_profiles(registry: Mapping[str, Profile] = PROFILES) -> list[Profile]:
    """Return registered profiles sorted by name."""
    return [registry[name] for name in sorted(registry)]


__all__ = [
    "DISCOVERY_FIELDS",
    "LOOPBACK_EPHEMERAL",
    "LOWPOWER_HIGH_WATER",
    "LOWPOWER_LOW_WATER",
    "NETWORKING_FIELDS",
    "POWER_FIELDS",
    "PROFILES",
    "Profile",
    "Transform",
    "assign",
    "get_profile",
    "list_profiles",
    "opposite_of",
    "restore_defaults",
]
