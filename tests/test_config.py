"""Tests for config.py: environment parsing and bounds."""

import importlib

import pytest

import config


@pytest.fixture
def reload_config(monkeypatch):
    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config).Config

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


class TestConfig:
    def test_defaults(self, reload_config, monkeypatch):
        monkeypatch.delenv("FORECAST_DAYS", raising=False)
        monkeypatch.delenv("DEFAULT_HUMIDITY", raising=False)
        cfg = reload_config()
        assert cfg.FORECAST_DAYS == 7
        assert cfg.DEFAULT_HUMIDITY == 70.0
        assert cfg.WEATHER_LOCATION == "Salitre, Ecuador"

    @pytest.mark.parametrize("raw, expected", [("20", 14), ("14", 14), ("0", 1), ("-3", 1), ("3", 3)])
    def test_forecast_days_within_provider_range(self, reload_config, raw, expected):
        assert reload_config(FORECAST_DAYS=raw).FORECAST_DAYS == expected

    def test_cors_origins_split(self, reload_config):
        cfg = reload_config(CORS_ORIGINS="http://a.test, http://b.test,")
        assert cfg.CORS_ORIGINS == ["http://a.test", "http://b.test"]
