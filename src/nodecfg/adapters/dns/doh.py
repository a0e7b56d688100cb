"""DNS-over-HTTPS TXT lookups using the JSON wire format.

Queries ``<endpoint>?name=<name>&type=TXT`` with ``accept:
application/dns-json`` (supported by Cloudflare, Google and most public
resolvers) and returns the TXT strings of the answer section.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from typing import Any, Final, cast

import httpx
import orjson

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_TIMEOUT: Final[float] = 10.0
TXT_RECORD_TYPE: Final[int] = 16
_RCODE_NOERROR: Final[int] = 0
_RCODE_NXDOMAIN: Final[int] = 3
_DNS_JSON: Final = "application/dns-json"
_QUOTED_CHUNK: Final = re.compile(r'"((?:[^"\\]|\\.)*)"')


def unquote_txt(data: str) -> str:
    """Join the quoted character-strings of a TXT record.

    Example:
        >>> unquote_txt('"dnsaddr=/ip4/1.2.3.4" "/tcp/4001"')
        'dnsaddr=/ip4/1.2.3.4/tcp/4001'
        >>> unquote_txt("dnsaddr=/ip4/1.2.3.4")
        'dnsaddr=/ip4/1.2.3.4'
    """
    chunks = _QUOTED_CHUNK.findall(data)
    if not chunks:
        return data
    return "".join(chunk.replace('\\"', '"') for chunk in chunks)


class DohLookup:
    """TXT lookup against a DNS-over-HTTPS JSON endpoint.

    Args:
        endpoint: Resolver URL, e.g. ``https://cloudflare-dns.com/dns-query``.
        client: Optional preconfigured ``httpx.Client`` (tests inject one
            with a ``MockTransport``). Module-level ``httpx.get`` is used
            when omitted.
        clock: Monotonic clock the per-query deadline is measured with.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        client: httpx.Client | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._endpoint = endpoint
        self._client = client
        self._clock = clock

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def __call__(self, name: str, *, timeout: float | None = None) -> list[str]:
        """Return TXT strings for ``name``; an NXDOMAIN answer yields an empty list.

        Raises:
            TimeoutError: If the whole HTTP exchange, connect through the
                last byte read, takes longer than ``timeout`` seconds.
            httpx.HTTPError: On transport or HTTP status failures.
            LookupError: If the resolver reports a DNS error code.
            orjson.JSONDecodeError: If the response body is not JSON.
        """
        effective_timeout = timeout if timeout is not None else DEFAULT_LOOKUP_TIMEOUT
        deadline = self._clock() + effective_timeout
        timed_out = f"DNS query for {name} timed out after {effective_timeout:g}s"
        params = {"name": name, "type": "TXT"}
        headers = {"accept": _DNS_JSON}
        # httpx bounds each phase separately; the deadline bounds their sum.
        limits = httpx.Timeout(effective_timeout)
        try:
            if self._client is not None:
                response = self._client.get(self._endpoint, params=params, headers=headers, timeout=limits)
            else:
                response = httpx.get(self._endpoint, params=params, headers=headers, timeout=limits)
        except httpx.TimeoutException as exc:
            raise TimeoutError(timed_out) from exc
        if self._clock() > deadline:
            raise TimeoutError(timed_out)
        response.raise_for_status()

        payload = cast("dict[str, Any]", orjson.loads(response.content))
        status = payload.get("Status", _RCODE_NOERROR)
        if status == _RCODE_NXDOMAIN:
            logger.debug("No such domain", extra={"name": name})
            return []
        if status != _RCODE_NOERROR:
            raise LookupError(f"DNS query for {name} failed with rcode {status}")

        answers = cast("list[dict[str, Any]]", payload.get("Answer") or [])
        records = [unquote_txt(str(answer.get("data", ""))) for answer in answers if answer.get("type") == TXT_RECORD_TYPE]
        logger.debug("TXT lookup complete", extra={"name": name, "records": len(records)})
        return records


def make_doh_lookup(*, endpoint: str) -> DohLookup:
    """Build a DNS-over-HTTPS lookup for ``endpoint``."""
    return DohLookup(endpoint)


__all__ = ["DEFAULT_LOOKUP_TIMEOUT", "DohLookup", "make_doh_lookup", "unquote_txt"]
