import importlib
import sys

import pytest


def reload_config_module():
    config_module = sys.modules.get("app.config")
    if config_module:
        config_module.get_settings.cache_clear()
        sys.modules.pop("app.config", None)
    return importlib.import_module("app.config")


def test_unknown_log_level_fails_at_startup(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    config_module = reload_config_module()
    config_module.get_settings.cache_clear()

    with pytest.raises(Exception, match="LOG_LEVEL"):
        config_module.get_settings()


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", " debug ")

    config_module = reload_config_module()
    config_module.get_settings.cache_clear()

    assert config_module.get_settings().log_level == "DEBUG"


def test_import_limits_must_be_positive(monkeypatch):
    monkeypatch.setenv("IMPORT_MAX_ERRORS", "0")

    config_module = reload_config_module()
    config_module.get_settings.cache_clear()

    with pytest.raises(Exception, match="positive"):
        config_module.get_settings()


def test_defaults_point_at_bundled_seed_file(monkeypatch):
    monkeypatch.delenv("SEED_FILE", raising=False)

    config_module = reload_config_module()
    config_module.get_settings.cache_clear()
    settings = config_module.get_settings()

    assert settings.app_name == "VisaFlow"
    assert settings.seed_file.name == "seed_employees.yaml"
    assert settings.seed_file.exists()
