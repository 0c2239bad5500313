import json

import pytest
from pydantic import ValidationError

from clipfetch.config.settings import Config, LoggingConfig
from clipfetch.i18n import i18n
from clipfetch.utils.locale import get_locale, safe_url_for_log


def test_defaults():
    cfg = Config()
    assert cfg.extractor.timeout_seconds is None
    assert cfg.download.filename == "video.mp4"
    assert cfg.download.media_type == "video/mp4"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CLIPFETCH_EXTRACTOR__BINARY", "/opt/bin/yt-dlp")
    monkeypatch.setenv("CLIPFETCH_EXTRACTOR__TIMEOUT_SECONDS", "120")
    cfg = Config()
    assert cfg.extractor.binary == "/opt/bin/yt-dlp"
    assert cfg.extractor.timeout_seconds == 120


def test_load_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"download": {"temp_dir": str(tmp_path)}, "logging": {"level": "debug"}}))

    cfg = Config.load_from_file(str(path))
    assert cfg.download.temp_dir == str(tmp_path)
    assert cfg.logging.level == "DEBUG"


def test_unreadable_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{broken")
    assert Config.load_from_file(str(path)).download.filename == "video.mp4"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        LoggingConfig(level="LOUD")


def test_locale_negotiation():
    assert get_locale(None) == "en"
    assert get_locale("ja-JP,ja;q=0.9,en;q=0.8") == "ja"
    assert get_locale("fr-FR,fr;q=0.9") == "en"


def test_translation_fallbacks():
    assert i18n.get("error.invalid_url", locale="ja") == "URLを入力してください"
    # ja has no log messages; en is used
    assert i18n.get("log.download_finished", locale="ja", size=3) == "Download finished: 3 bytes"
    assert i18n.get("error.no_such_key") == "error.no_such_key"


def test_safe_url_for_log_drops_query():
    assert safe_url_for_log("https://cdn.example.com/v.mp4?sig=secret") == "https://cdn.example.com/v.mp4?..."
    assert safe_url_for_log("https://example.com/v") == "https://example.com/v"
