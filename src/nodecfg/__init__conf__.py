"""Static package metadata surfaced to CLI commands and documentation.

Values mirror ``pyproject.toml`` so ``nodecfg info`` works without reading
installed distribution metadata. The ``LAYEREDCONF_*`` identifiers select the
platform directories lib_layered_config searches for settings files.
"""

from __future__ import annotations

name = "nodecfg"
title = "Configuration profile engine for peer-to-peer node repositories"
version = "0.3.0"
homepage = "https://github.com/nodecfg/nodecfg"
author = "nodecfg developers"
author_email = "maintainers@nodecfg.dev"
shell_command = "nodecfg"

LAYEREDCONF_VENDOR = "nodecfg"
LAYEREDCONF_APP = "nodecfg"
LAYEREDCONF_SLUG = "nodecfg"


def print_info() -> None:
    """Print the summarised metadata block used by ``nodecfg info``.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for nodecfg:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
