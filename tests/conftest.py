import json

import pytest

from d2rtz_bot.classes.app_config import AppConfig
from d2rtz_bot.classes.openai import appraisal, ocr


@pytest.fixture
def make_config(tmp_path):
    """Build an AppConfig backed by a throwaway config.json; the cache lives under tmp_path."""
    def _make(overrides=None):
        config_path = tmp_path / "config.json"
        settings = {"terror_zone": {"cache_path": str(tmp_path / "cache" / "tz_online.json")}}
        settings = AppConfig.merge_dicts(settings, overrides or {})
        config_path.write_text(json.dumps(settings, ensure_ascii=False), encoding="utf-8")
        return AppConfig(config_path=str(config_path))
    return _make


@pytest.fixture
def app_config(make_config):
    return make_config()


@pytest.fixture(autouse=True)
def no_mock_delay(monkeypatch):
    monkeypatch.setattr(ocr, "MOCK_DELAY", 0)
    monkeypatch.setattr(appraisal, "MOCK_DELAY", 0)
