"""DNS-over-HTTPS lookup against a mocked HTTP transport."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import orjson
import pytest

from nodecfg.adapters.dns import DohLookup, make_doh_lookup, unquote_txt

ENDPOINT = "https://resolver.example/dns-query"

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _answer(*records: str, status: int = 0) -> Handler:
    body = {
        "Status": status,
        "Answer": [{"name": "_dnsaddr.example.com.", "type": 16, "TTL": 300, "data": data} for data in records],
    }

    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=orjson.dumps(body))

    return _handler


@pytest.mark.os_agnostic
def test_query_uses_json_wire_format() -> None:
    """Name and record type go in the query string, JSON is requested."""
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b'{"Status": 0}')

    DohLookup(ENDPOINT, client=_client(_handler))("_dnsaddr.example.com")

    request = seen[0]
    assert request.method == "GET"
    assert request.url.host == "resolver.example"
    assert request.url.params["name"] == "_dnsaddr.example.com"
    assert request.url.params["type"] == "TXT"
    assert request.headers["accept"] == "application/dns-json"


@pytest.mark.os_agnostic
def test_txt_answers_are_unquoted() -> None:
    lookup = DohLookup(ENDPOINT, client=_client(_answer('"dnsaddr=/ip4/1.2.3.4/tcp/4001"')))

    assert lookup("_dnsaddr.example.com") == ["dnsaddr=/ip4/1.2.3.4/tcp/4001"]


@pytest.mark.os_agnostic
def test_non_txt_answers_are_ignored() -> None:
    """CNAME hops in the answer section are not records."""
    body = {
        "Status": 0,
        "Answer": [
            {"name": "_dnsaddr.example.com.", "type": 5, "data": "alias.example.com."},
            {"name": "alias.example.com.", "type": 16, "data": '"dnsaddr=/ip4/5.6.7.8/tcp/4001"'},
        ],
    }
    lookup = DohLookup(ENDPOINT, client=_client(lambda request: httpx.Response(200, content=orjson.dumps(body))))

    assert lookup("_dnsaddr.example.com") == ["dnsaddr=/ip4/5.6.7.8/tcp/4001"]


@pytest.mark.os_agnostic
def test_nxdomain_yields_no_records() -> None:
    lookup = DohLookup(ENDPOINT, client=_client(_answer(status=3)))

    assert lookup("_dnsaddr.missing.example") == []


@pytest.mark.os_agnostic
def test_other_dns_errors_raise_lookup_error() -> None:
    lookup = DohLookup(ENDPOINT, client=_client(_answer(status=2)))

    with pytest.raises(LookupError, match="rcode 2"):
        lookup("_dnsaddr.example.com")


@pytest.mark.os_agnostic
def test_http_error_status_raises() -> None:
    lookup = DohLookup(ENDPOINT, client=_client(lambda request: httpx.Response(502)))

    with pytest.raises(httpx.HTTPStatusError):
        lookup("_dnsaddr.example.com")


@pytest.mark.os_agnostic
def test_transport_timeout_becomes_timeout_error() -> None:
    """The resolver maps TimeoutError to its own timeout outcome."""

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    lookup = DohLookup(ENDPOINT, client=_client(_handler))

    with pytest.raises(TimeoutError, match="timed out after 1.5s"):
        lookup("_dnsaddr.example.com", timeout=1.5)


@pytest.mark.os_agnostic
def test_each_phase_gets_the_full_timeout() -> None:
    """connect, write, read and pool are all bounded by the query timeout."""
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b'{"Status": 0}')

    DohLookup(ENDPOINT, client=_client(_handler))("_dnsaddr.example.com", timeout=1.5)

    assert seen[0].extensions["timeout"] == {"connect": 1.5, "read": 1.5, "write": 1.5, "pool": 1.5}


@pytest.mark.os_agnostic
def test_slow_exchange_past_the_deadline_becomes_timeout_error() -> None:
    """Phases that each stay under the limit can still add up past it."""
    ticks = iter([100.0, 101.6])
    lookup = DohLookup(ENDPOINT, client=_client(_answer('"dnsaddr=/ip4/1.2.3.4/tcp/4001"')), clock=lambda: next(ticks))

    with pytest.raises(TimeoutError, match="timed out after 1.5s"):
        lookup("_dnsaddr.example.com", timeout=1.5)


@pytest.mark.os_agnostic
def test_exchange_inside_the_deadline_returns_records() -> None:
    ticks = iter([100.0, 101.4])
    lookup = DohLookup(ENDPOINT, client=_client(_answer('"dnsaddr=/ip4/1.2.3.4/tcp/4001"')), clock=lambda: next(ticks))

    assert lookup("_dnsaddr.example.com", timeout=1.5) == ["dnsaddr=/ip4/1.2.3.4/tcp/4001"]


@pytest.mark.os_agnostic
def test_make_doh_lookup_keeps_endpoint() -> None:
    assert make_doh_lookup(endpoint=ENDPOINT).endpoint == ENDPOINT


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ('"dnsaddr=/ip4/1.2.3.4/tcp/4001"', "dnsaddr=/ip4/1.2.3.4/tcp/4001"),
        ('"dnsaddr=/ip4/1.2.3.4" "/tcp/4001"', "dnsaddr=/ip4/1.2.3.4/tcp/4001"),
        ('"say \\"hi\\""', 'say "hi"'),
        ("bare", "bare"),
    ],
)
def test_unquote_txt(data: str, expected: str) -> None:
    assert unquote_txt(data) == expected
