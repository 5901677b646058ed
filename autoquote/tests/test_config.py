"""
Settings defaults and environment overrides
"""

from autoquote.core.config import Settings
from autoquote.services.quote_store import JsonQuoteStore, get_quote_store
from autoquote.services import quote_store as quote_store_module


class TestSettings:

    def test_cache_config(self, app_settings):
        assert app_settings.PRICE_CACHE_TTL == 60
        assert app_settings.IDEMPOTENCY_TTL == 300

    def test_default_session_is_consistent(self, app_settings):
        assert app_settings.DEFAULT_SELLING_PRICE == app_settings.DEFAULT_COST + app_settings.DEFAULT_PROFIT

    def test_redis_optional(self, monkeypatch):
        monkeypatch.delenv("REDIS_URL", raising=False)
        assert Settings(_env_file=None).REDIS_URL is None

    def test_env_override(self, monkeypatch, tmp_path):
        path = str(tmp_path / "elsewhere.json")
        monkeypatch.setenv("QUOTES_FILE", path)
        monkeypatch.setenv("DEFAULT_TAX_RATE", "8.25")
        monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:5173"]')

        overridden = Settings(_env_file=None)

        assert overridden.QUOTES_FILE == path
        assert overridden.DEFAULT_TAX_RATE == 8.25
        assert overridden.CORS_ORIGINS == ["http://localhost:5173"]


class TestStoreDependency:

    def test_store_built_once_from_settings(self, monkeypatch, tmp_path, app_settings):
        monkeypatch.setattr(quote_store_module, "_store", None)
        monkeypatch.setattr(app_settings, "QUOTES_FILE", str(tmp_path / "quotes.json"))

        store = get_quote_store()

        assert isinstance(store, JsonQuoteStore)
        assert store.path == str(tmp_path / "quotes.json")
        assert get_quote_store() is store
