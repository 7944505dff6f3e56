import logging

from runtracker.core.config import Settings
from runtracker.core.logging_config import configure_logging


def test_settings_derived_values():
    settings = Settings(CORS_ORIGINS="http://a, http://b", TARGET_HOURS=80)
    assert settings.cors_origins_list == ["http://a", "http://b"]
    assert settings.target_time_ms == 288_000_000


def test_configure_logging_adds_one_handler():
    configure_logging("debug")
    configure_logging("debug")
    logger = logging.getLogger("runtracker")
    names = [h.get_name() for h in logger.handlers]
    assert names.count("runtracker:console") == 1
    assert logger.level == logging.DEBUG
