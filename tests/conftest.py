# tests/conftest.py
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import json

import pytest

from hlproxy.aggregator import ProxyHandler, ProxySettings
from hlproxy.data import ExchangeRatesClient, HyperliquidClient


class FakeResponse:
    """Stands in for requests.Response and counts body reads."""

    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._text = text if text is not None else json.dumps(payload)
        self.text_reads = 0

    @property
    def text(self):
        self.text_reads += 1
        return self._text


class FakeSession:
    """
    Routes requests to canned responses.

    Keys are the JSON-RPC method for single POSTs, "batch" for list bodies
    and "GET" for the exchange-rate API. A value may be a FakeResponse, an
    exception to raise, or a callable taking the request body.
    """

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def request(self, method, url, timeout=None, **kwargs):
        body = kwargs.get("json")
        self.calls.append({"method": method, "url": url, "json": body, "timeout": timeout})

        if method == "GET":
            key = "GET"
        elif isinstance(body, list):
            key = "batch"
        else:
            key = body["method"]

        route = self.routes.get(key)
        if route is None:
            raise AssertionError(f"Unexpected upstream call: {key}")
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(body)
        return route

    def rpc_methods(self):
        return [c["json"]["method"] if isinstance(c["json"], dict) else "batch"
                for c in self.calls if c["method"] == "POST"]


def rpc_ok(result, request_id=1):
    return FakeResponse(200, {"jsonrpc": "2.0", "id": request_id, "result": result})


def position(coin, szi, entry_px, position_value=None, liquidation_px=None):
    return {"position": {
        "coin": coin,
        "szi": szi,
        "entryPx": entry_px,
        "positionValue": position_value,
        "liquidationPx": liquidation_px,
    }}


SNAPSHOT_RESULT = [
    {"coin": "BTC", "price": "61000.00"},
    {"coin": "ETH", "price": "3950.00"},
    {"coin": "SOL", "price": "160.00"},
]


@pytest.fixture
def snapshot_response():
    return rpc_ok(SNAPSHOT_RESULT)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def make_handler():
    """Build a ProxyHandler wired to a FakeSession with a frozen clock."""

    def _make(routes, **settings_kwargs):
        session = FakeSession(routes)
        settings = ProxySettings(**settings_kwargs)
        handler = ProxyHandler(
            settings,
            hl_client=HyperliquidClient(rpc_url="https://hl.test/info", timeout=settings.timeout, session=session),
            rates_client=ExchangeRatesClient(url="https://rates.test/usd", timeout=settings.timeout, session=session),
            clock=lambda: 1700000000.5,
        )
        return handler, session

    return _make
