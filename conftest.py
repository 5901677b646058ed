import pytest
from httpx import ASGITransport, AsyncClient

from autoquote.main import app
from autoquote.core import redis as redis_module
from autoquote.core.config import settings
from autoquote.schemas.quote import QuoteInput
from autoquote.services.quote_store import JsonQuoteStore, QuoteIdGenerator, get_quote_store


class InMemoryRedis:
    """Async stand-in for the handful of Redis calls the service makes."""

    def __init__(self):
        self.data = {}
        self.expiry = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.data[key] = value.encode() if isinstance(value, str) else value
        self.expiry[key] = ex
        return True

    async def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0


@pytest.fixture
def quotes_path(tmp_path):
    return tmp_path / "data" / "quotes.json"


@pytest.fixture
def quote_store(quotes_path):
    return JsonQuoteStore(str(quotes_path))


@pytest.fixture
def fixed_clock_store(quotes_path):
    """Store whose clock never advances, so ids can only differ by the generator's bump."""
    return JsonQuoteStore(str(quotes_path), QuoteIdGenerator(clock=lambda: 1_700_000_000_000_000_000))


@pytest.fixture
async def test_client(quote_store):
    app.dependency_overrides[get_quote_store] = lambda: quote_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_redis(monkeypatch):
    fake = InMemoryRedis()
    monkeypatch.setattr(redis_module, "redis", fake)
    return fake


@pytest.fixture
def default_quote_data():
    return {
        "cost": 26906,
        "profit": 1500,
        "sellingPrice": 28406,
        "term": 36,
        "rate": 5.7,
        "outOfPocket": 2000,
        "taxRate": 7.5,
        "quoteName": "Default sedan",
    }


@pytest.fixture
def default_quote(default_quote_data):
    return QuoteInput.model_validate(default_quote_data)


@pytest.fixture
def app_settings():
    """Return application settings"""
    return settings


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to quote calculation"
    )
    config.addinivalue_line(
        "markers", "sync: marks tests related to cost/profit/price synchronization"
    )
    config.addinivalue_line(
        "markers", "store: marks tests related to saved quote storage"
    )
    config.addinivalue_line(
        "markers", "idempotency: marks tests related to idempotency"
    )
