from fastapi.testclient import TestClient

from tradedesk.api import create_app


BACKTEST_BODY = {
    "symbol": "BTC/USD",
    "timeframe": "1h",
    "start_date": "2024-01-01",
    "end_date": "2024-01-31",
    "initial_balance": 10000,
    "strategy_rules": "BUY when RSI < 30\nSELL when RSI > 70",
    "stop_loss_percent": 2,
    "take_profit_percent": 4,
    "seed": 42,
}


def test_health():
    client = TestClient(create_app())
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "Trade Desk"}


def test_risk_returns_position_size():
    client = TestClient(create_app())
    response = client.post(
        "/api/risk",
        json={
            "symbol": "ETH/USD",
            "account_balance": 10000,
            "entry_price": 100,
            "stop_loss_price": 95,
            "target_price": 115,
            "direction": "Long",
            "risk_method": "FixedPercentage",
            "risk_percentage": 1,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["position_size_asset"] == 20
    assert data["reward_risk_ratio"] == 3
    assert data["asset_name"] == "ETH"
    assert len(data["take_profit_levels"]) == 3


def test_risk_validation_error_maps_to_422():
    client = TestClient(create_app())
    response = client.post(
        "/api/risk",
        json={"account_balance": 10000, "entry_price": 100, "stop_loss_price": 100, "target_price": 115},
    )

    assert response.status_code == 422
    assert response.json()["error"] == "ValidationError"


def test_malformed_body_is_rejected():
    client = TestClient(create_app())
    response = client.post("/api/risk", json={"account_balance": "lots"})
    assert response.status_code == 422


def test_backtest_is_deterministic_for_a_seed():
    client = TestClient(create_app())
    first = client.post("/api/backtest", json=BACKTEST_BODY)
    second = client.post("/api/backtest", json=BACKTEST_BODY)

    assert first.status_code == 200
    data = first.json()
    assert data == second.json()
    assert data["seed"] == 42
    assert data["total_candles"] == 30 * 24 + 1
    assert len(data["equity_curve"]) == data["total_candles"] - 1
    assert "win_rate" in data["metrics"]


def test_backtest_missing_rule_maps_to_400():
    client = TestClient(create_app())
    response = client.post("/api/backtest", json={**BACKTEST_BODY, "strategy_rules": "BUY when RSI < 30"})

    assert response.status_code == 400
    assert response.json()["error"] == "ConfigurationError"


def test_backtest_short_range_maps_to_422():
    client = TestClient(create_app())
    response = client.post("/api/backtest", json={**BACKTEST_BODY, "end_date": "2024-01-01"})

    assert response.status_code == 422
    assert response.json()["error"] == "InsufficientDataError"


def test_profit_tool():
    client = TestClient(create_app())
    response = client.post("/api/tools/profit", json={"buy_price": 100, "sell_price": 110, "quantity": 10})

    assert response.status_code == 200
    assert response.json()["net_profit"] == 100


def test_compounding_tool():
    client = TestClient(create_app())
    response = client.post(
        "/api/tools/compounding",
        json={"initial_capital": 1000, "target_profit_percent": 10, "periods": 2},
    )

    assert response.status_code == 200
    periods = response.json()
    assert [p["period"] for p in periods] == [1, 2]
    assert abs(periods[-1]["end_capital"] - 1210) < 1e-9


def test_sheet_stats():
    client = TestClient(create_app())
    response = client.post(
        "/api/sheet/stats",
        json={
            "initial_capital": 1000,
            "trades": [
                {"trade_date": "2024-01-01", "trade_time": "10:00:00", "entry": 100, "stop_loss": 99,
                 "take_profit": 102, "result": 100, "rr": 2, "session": "London", "win": True},
                {"trade_date": "2024-01-02", "entry": 100, "stop_loss": 99,
                 "take_profit": 102, "result": -50, "rr": -1, "session": "New York", "win": False},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_trades"] == 2
    assert data["net_profit"] == 50
    assert data["most_profitable_session"]["key"] == "London"


def test_backtest_negative_seed_maps_to_422():
    client = TestClient(create_app())
    response = client.post("/api/backtest", json={**BACKTEST_BODY, "seed": -1})

    assert response.status_code == 422
    assert response.json()["error"] == "ValidationError"


def test_risk_nan_balance_maps_to_422():
    client = TestClient(create_app())
    response = client.post(
        "/api/risk",
        content='{"account_balance": NaN, "entry_price": 100, "stop_loss_price": 95, "target_price": 115}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert response.json()["error"] == "ValidationError"
