"""DNS lookup adapters.

Contents:
    * :mod:`.doh` - DNS-over-HTTPS TXT lookups with httpx
"""

from __future__ import annotations

from .doh import DohLookup, make_doh_lookup, unquote_txt

__all__ = ["DohLookup", "make_doh_lookup", "unquote_txt"]
