import json
import pytest
import httpx
from fastapi.testclient import TestClient
from wallet_balance.config import Config
from wallet_balance.main import create_app
from wallet_balance.portfolio.exchanges.binance import BinanceClient

FIXED_TS = 1700000000000
API_KEY = "test-api-key"
SECRET = "test-secret"

ACCOUNT_PAYLOAD = {
    "makerCommission": 10,
    "takerCommission": 10,
    "buyerCommission": 0,
    "sellerCommission": 0,
    "canTrade": True,
    "canWithdraw": False,
    "canDeposit": True,
    "updateTime": 1699999999000,
    "permissions": ["SPOT"],
    "balances": [
        {"asset": "BTC", "free": "0.50000000", "locked": "0.10000000"},
        {"asset": "USDT", "free": "100.00000000", "locked": "0.00000000"},
        {"asset": "LTC", "free": "0.00000000", "locked": "0.00000000"},
    ],
}

PRICES_PAYLOAD = [
    {"symbol": "BTCUSDT", "price": "30000.00000000"},
    {"symbol": "ETHUSDT", "price": "2000.00000000"},
]


class FakeBinance:
    """Routes httpx requests to canned Binance responses and records them."""

    def __init__(self):
        self.requests = []
        self.routes = {
            "/api/v3/ticker/price": (200, PRICES_PAYLOAD),
            "/api/v3/account": (200, ACCOUNT_PAYLOAD),
            "/api/v3/openOrders": (200, []),
        }

    def set(self, path, status, payload):
        self.routes[path] = (status, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"code": -1, "msg": "Not found"})
        status, payload = route
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, content=json.dumps(payload).encode(), headers={"Content-Type": "application/json"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last(self, path):
        return [r for r in self.requests if r.url.path == path][-1]


@pytest.fixture
def fake_binance():
    return FakeBinance()


@pytest.fixture
def config():
    return Config(
        BINANCE_API_KEY=API_KEY,
        BINANCE_SECRET_KEY=SECRET,
        BINANCE_BASE_URL="https://api.binance.test/api/v3",
    )


@pytest.fixture
def binance(config, fake_binance):
    return BinanceClient(config, clock=lambda: FIXED_TS, transport=fake_binance.transport())


@pytest.fixture
def make_client(fake_binance):
    def _make(config):
        binance = BinanceClient(config, clock=lambda: FIXED_TS, transport=fake_binance.transport())
        return TestClient(create_app(config, binance))
    return _make


@pytest.fixture
def client(make_client, config):
    return make_client(config)
