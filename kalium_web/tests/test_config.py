"""Test config.py environment handling."""

import importlib

import pytest

from kalium_web import config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload config after env changes, restoring the original afterwards."""
    # .env values must not leak into these tests
    monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **kw: False)

    def _reload():
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


class TestConfigDefaults:
    def test_defaults(self, monkeypatch, reload_config):
        for name in ("MONGODB_URI", "MONGO_URI", "PORT", "FLASK_PORT", "REWRITE_PROFILE", "ORIGINAL_SITE_URL"):
            monkeypatch.delenv(name, raising=False)
        cfg = reload_config()
        assert cfg.MONGODB_URI == "mongodb://127.0.0.1:27017/kalium_furniture"
        assert cfg.FLASK_PORT == 8000
        assert cfg.REWRITE_PROFILE == "routes"
        assert cfg.ORIGINAL_SITE_URL == "https://sites.kaliumtheme.com/elementor/furniture"

    def test_template_names(self):
        assert config.PRODUCT_TEMPLATE == "index_tact-mirror.html"
        assert config.CATEGORY_TEMPLATE == "index_decor.html"
        assert config.ROOT_TEMPLATE == "index.html"
        assert config.NON_PRODUCT_SLUGS == frozenset({"decor", "mirrors", "rugs"})


class TestConfigOverrides:
    def test_mongodb_uri_wins_over_mongo_uri(self, monkeypatch, reload_config):
        monkeypatch.setenv("MONGO_URI", "mongodb://old:27017/a")
        monkeypatch.setenv("MONGODB_URI", "mongodb://new:27017/b")
        assert reload_config().MONGODB_URI == "mongodb://new:27017/b"

    def test_mongo_uri_fallback(self, monkeypatch, reload_config):
        monkeypatch.delenv("MONGODB_URI", raising=False)
        monkeypatch.setenv("MONGO_URI", "mongodb://old:27017/a")
        assert reload_config().MONGODB_URI == "mongodb://old:27017/a"

    def test_port_from_env(self, monkeypatch, reload_config):
        monkeypatch.setenv("PORT", "9123")
        assert reload_config().FLASK_PORT == 9123

    def test_origin_trailing_slash_stripped(self, monkeypatch, reload_config):
        monkeypatch.setenv("ORIGINAL_SITE_URL", "https://example.com/shop/")
        assert reload_config().ORIGINAL_SITE_URL == "https://example.com/shop"
