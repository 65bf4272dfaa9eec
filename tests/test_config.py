"""Tests for environment configuration and logger setup."""
import logging
from pathlib import Path

from config import DEFAULT_FRONTEND_DIR, Settings
from logger_setup import ConfigureLogger


def test_defaults():
    settings = Settings.from_env({})
    assert settings.photos_dir == Path("/app/data/photos")
    assert settings.cache_dir == Path("/app/cache")
    assert settings.port == 3000
    assert settings.frontend_dir == DEFAULT_FRONTEND_DIR
    assert settings.cors_origins == ["*"]
    assert settings.log_level == logging.INFO
    assert settings.log_dir is None


def test_environment_overrides(tmp_path):
    settings = Settings.from_env({
        "PHOTOS_DIR": str(tmp_path / "p"),
        "CACHE_DIR": str(tmp_path / "c"),
        "PORT": "8080",
        "CORS_ORIGINS": "http://a.test, http://b.test",
        "LOG_LEVEL": "debug",
        "LOG_DIR": str(tmp_path / "logs"),
    })
    assert settings.photos_dir == tmp_path / "p"
    assert settings.cache_dir == tmp_path / "c"
    assert settings.port == 8080
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.log_level == logging.DEBUG
    assert settings.log_dir == tmp_path / "logs"


def test_bad_values_fall_back():
    settings = Settings.from_env({"PORT": "eighty", "LOG_LEVEL": "chatty"})
    assert settings.port == 3000
    assert settings.log_level == logging.INFO


def test_configure_logger_writes_errors_to_file(tmp_path):
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        configured = ConfigureLogger(log_name="test", log_dir=str(tmp_path))
        logging.getLogger("kerpic.test").error("boom")
        for handler in configured.logger.handlers:
            handler.flush()
        assert "boom" in (tmp_path / "test.log").read_text()
    finally:
        for handler in root.handlers:
            if handler not in saved[0]:
                handler.close()
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
