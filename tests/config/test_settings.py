"""Tests for src/config — settings and logging configuration."""

import logging

import pytest
from pydantic import ValidationError

from src.config.logging_config import configure_logging
from src.config.settings import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("DEBUG", "LOG_LEVEL", "MAX_DICE_PER_TYPE", "RANDOM_SEED"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.max_dice_per_type == 100
        assert settings.random_seed is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MAX_DICE_PER_TYPE", "12")
        monkeypatch.setenv("RANDOM_SEED", "7")
        settings = Settings(_env_file=None)
        assert settings.max_dice_per_type == 12
        assert settings.random_seed == 7

    def test_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_dice_per_type=0)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_level(self):
        root = logging.getLogger()
        level = root.level
        yield
        root.setLevel(level)

    def test_log_level(self):
        settings = Settings(_env_file=None, debug=False, log_level="warning")
        assert configure_logging(settings) == logging.WARNING
        assert logging.getLogger().level == logging.WARNING

    def test_debug_overrides_level(self):
        settings = Settings(_env_file=None, debug=True, log_level="ERROR")
        assert configure_logging(settings) == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        settings = Settings(_env_file=None, debug=False, log_level="CHATTY")
        assert configure_logging(settings) == logging.INFO
