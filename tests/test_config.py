"""Tests for utils/config.py: env-driven configuration."""
from pathlib import Path

import pytest

from utils.config import AppConfig, BoardConfig, Config


class TestAppConfig:
    def test_defaults(self, monkeypatch):
        for var in ("APP_DB_PATH", "APP_PORT", "APP_HOST", "APP_LOG_FORMAT",
                    "APP_CORS_ORIGINS", "RATE_LIMIT_VOTE", "RATE_LIMIT_SUBMIT",
                    "RATE_LIMIT_DEFAULT", "TRUSTED_PROXIES"):
            monkeypatch.delenv(var, raising=False)
        cfg = AppConfig.from_env()
        assert cfg.db_path == Path("facts.sqlite")
        assert cfg.api_port == 8000
        assert cfg.api_host == "127.0.0.1"
        assert cfg.log_format == "text"
        assert cfg.cors_origins == ["*"]
        assert cfg.rate_limit_vote == 60
        assert cfg.rate_limit_submit == 10
        assert cfg.rate_limit_default == 120
        assert cfg.trusted_proxies == set()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("APP_DB_PATH", "/data/f.sqlite")
        monkeypatch.setenv("APP_PORT", "9001")
        monkeypatch.setenv("APP_CORS_ORIGINS", "https://a.example, https://b.example")
        monkeypatch.setenv("TRUSTED_PROXIES", "10.0.0.1,10.0.0.2")
        cfg = AppConfig.from_env()
        assert cfg.db_path == Path("/data/f.sqlite")
        assert cfg.api_port == 9001
        assert cfg.cors_origins == ["https://a.example", "https://b.example"]
        assert cfg.trusted_proxies == {"10.0.0.1", "10.0.0.2"}

    def test_bad_integer_names_variable(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_VOTE", "lots")
        with pytest.raises(ValueError, match="RATE_LIMIT_VOTE"):
            AppConfig.from_env()


class TestBoardConfig:
    def test_defaults(self, monkeypatch):
        for var in ("FACTS_API_URL", "FACTS_FETCH_LIMIT", "FACTS_REQUEST_TIMEOUT"):
            monkeypatch.delenv(var, raising=False)
        cfg = BoardConfig.from_env()
        assert cfg.api_url == "http://127.0.0.1:8000/api/v1"
        assert cfg.fetch_limit == 1000
        assert cfg.request_timeout is None

    @pytest.mark.parametrize("raw,expected", [("0", 1), ("5000", 1000), ("250", 250)])
    def test_fetch_limit_clamped(self, monkeypatch, raw, expected):
        monkeypatch.setenv("FACTS_FETCH_LIMIT", raw)
        assert BoardConfig.from_env().fetch_limit == expected

    def test_timeout(self, monkeypatch):
        monkeypatch.setenv("FACTS_REQUEST_TIMEOUT", "7.5")
        assert BoardConfig.from_env().request_timeout == 7.5


class TestConfigBase:
    def test_roundtrip_json(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FACTS_FETCH_LIMIT", raising=False)
        cfg = BoardConfig.from_env()
        cfg.fetch_limit = 42
        path = tmp_path / "board.json"
        cfg.save_json(path)

        loaded = BoardConfig.load_json(path)
        assert isinstance(loaded, BoardConfig)
        assert loaded.fetch_limit == 42

    def test_to_dict_skips_private(self):
        cfg = Config()
        cfg.visible = 1
        cfg._hidden = 2
        assert cfg.to_dict() == {"visible": 1}
