"""Tests for configuration and logging setup."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from formlogic.config import (
    LOG_LEVEL_ENV,
    REGISTRY_ENV,
    SCHEMA_DIR_ENV,
    Settings,
    get_questionnaire_registry_path,
    get_questionnaire_schema_path,
    load_settings,
)
from formlogic.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (REGISTRY_ENV, SCHEMA_DIR_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Tests for load_settings."""

    def test_defaults(self) -> None:
        settings = load_settings()
        assert settings.questionnaire_registry_path == Path("questionnaire-registry")
        assert settings.schema_dir == Path("schemas")
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv(REGISTRY_ENV, str(tmp_path / "registry"))
        monkeypatch.setenv(SCHEMA_DIR_ENV, str(tmp_path / "schemas"))
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")

        settings = load_settings()
        assert settings.questionnaire_registry_path == tmp_path / "registry"
        assert settings.log_level == "DEBUG"
        assert get_questionnaire_registry_path() == tmp_path / "registry"
        assert get_questionnaire_schema_path() == tmp_path / "schemas" / "questionnaire_spec.schema.json"

    def test_empty_variable_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(REGISTRY_ENV, "")
        assert load_settings().questionnaire_registry_path == Path("questionnaire-registry")

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV, "LOUD")
        with pytest.raises(ValidationError):
            load_settings()

    def test_schema_path_property(self) -> None:
        settings = Settings(schema_dir=Path("/tmp/schemas"))
        assert settings.questionnaire_schema_path == Path("/tmp/schemas/questionnaire_spec.schema.json")


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_repeated_calls_do_not_add_handlers(self) -> None:
        root = logging.getLogger()
        before = len(root.handlers)
        original_level = root.level
        try:
            configure_logging("INFO")
            configure_logging("info")
            assert len(root.handlers) <= max(before, 1)
            assert root.level == logging.INFO
        finally:
            root.setLevel(original_level)
