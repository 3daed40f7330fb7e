# tests/integration/test_web_app.py
import pytest

from web.app import create_app

from conftest import FakeResponse, SNAPSHOT_RESULT, rpc_ok


@pytest.fixture
def client(make_handler):
    def factory():
        handler, _ = make_handler({"exchangeSnapshot": rpc_ok(SNAPSHOT_RESULT)})
        return handler

    app = create_app(proxy_factory=factory)
    app.config["TESTING"] = True
    return app.test_client()


def test_options_preflight(client):
    response = client.options("/api/hyperliquid")

    assert response.status_code == 200
    assert response.data == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "OPTIONS" in response.headers["Access-Control-Allow-Methods"]
    assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"


@pytest.mark.parametrize("method", ["get", "post"])
def test_dashboard_payload(client, method):
    response = getattr(client, method)("/api/hyperliquid")

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    data = response.get_json()
    assert isinstance(data["markets"], list)
    assert isinstance(data["openPositions"], list)
    assert {p["Asset"] for p in data["openPositions"]} == {"BTC", "ETH", "SOL"}


def test_upstream_failure_is_502(make_handler):
    def factory():
        handler, _ = make_handler({"exchangeSnapshot": FakeResponse(500, text="down")})
        return handler

    client = create_app(proxy_factory=factory).test_client()
    response = client.get("/api/hyperliquid")

    assert response.status_code == 502
    assert response.get_json()["details"] == "down"
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_health_reports_strategies(client):
    data = client.get("/api/health").get_json()
    assert data["status"] == "ok"
    assert data["price_strategy"] in {"meta", "all_mids", "snapshot", "exchange_rates"}
