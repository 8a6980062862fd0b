"""Endpoint tests through FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from cryptodash.main import app

API = "/api/v1/indicators"


def _payload(candles):
    return [c.model_dump() for c in candles]


@pytest.fixture
def client():
    with TestClient(app) as client:
        yield client


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["docs"] == "/docs"


def test_sma_endpoint(client, make_candles):
    candles = make_candles(range(1, 11))
    resp = client.post(f"{API}/sma", params={"period": 3}, json=_payload(candles))

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert len(data) == 8
    assert data[0]["time"] == candles[2].time
    assert data[0]["value"] == pytest.approx(2.0)


def test_short_input_returns_empty_list(client, make_candles):
    resp = client.post(f"{API}/macd", json=_payload(make_candles(range(10))))
    assert resp.status_code == 200
    assert resp.json() == []


def test_rsi_endpoint(client, make_candles):
    resp = client.post(f"{API}/rsi", params={"period": 14}, json=_payload(make_candles(range(1, 41))))

    assert resp.status_code == 200
    data = resp.json()
    assert len(data) == 26
    assert all(0 <= p["rsi"] <= 100 for p in data)


def test_invalid_candle_rejected(client):
    resp = client.post(f"{API}/sma", json=[{"time": 1, "open": 1.0, "high": 1.0, "low": 1.0}])
    assert resp.status_code == 422


def test_analyze_endpoint(client, ramp_candles):
    body = {
        "symbol": "BTCUSDT",
        "fear_greed_index": 90,
        "candles": {"1h": _payload(ramp_candles)},
    }
    resp = client.post(f"{API}/analyze", json=body)

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["symbol"] == "BTCUSDT"
    assert data["fear_greed_classification"] == "Extreme Greed"
    assert "1h" in data["timeframes"]
    assert any(a["type"] == "fearGreed" for a in data["alerts"])


def test_analyze_without_candles_is_bad_request(client):
    resp = client.post(f"{API}/analyze", json={"symbol": "BTCUSDT", "candles": {"1h": []}})
    assert resp.status_code == 400


def test_crosses_endpoint(client, make_series):
    short = make_series([1, 2, 3, 4, 5, 6])
    long = make_series([3.5] * 6)
    resp = client.post(
        f"{API}/crosses",
        json={
            "short_series": [p.model_dump() for p in short],
            "long_series": [p.model_dump() for p in long],
        },
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["last_golden_cross"]["time"] == short[3].time
    assert data["last_death_cross"] is None


def test_closest_level_endpoint(client):
    resp = client.post(
        f"{API}/closest-level",
        json={"price": 102.0, "levels": {"A": 100.0, "B": 105.0}},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "A"
    assert data["distance"]["is_above"] is False


def test_fear_greed_endpoint(client):
    resp = client.get(f"{API}/fear-greed/15")
    assert resp.status_code == 200
    assert resp.json() == {"value": 15.0, "classification": "Extreme Fear"}

    assert client.get(f"{API}/fear-greed/150").status_code == 422


def test_precision_endpoints(client):
    resp = client.post(f"{API}/precision/apitestusdt", params={"price": "0.00012300"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["symbol"] == "APITESTUSDT"
    assert data["decimals"] == 6
    assert data["formatted"] == "0.000123"

    # A coarser price never lowers the learned precision
    client.post(f"{API}/precision/APITESTUSDT", params={"price": "0.5"})
    resp = client.get(f"{API}/precision/APITESTUSDT")
    assert resp.json()["decimals"] == 6
    assert resp.json()["observed"] is True


def test_precision_rejects_invalid_price(client):
    resp = client.post(f"{API}/precision/BTCUSDT", params={"price": "abc"})
    assert resp.status_code == 400
