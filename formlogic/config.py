"""Configuration for formlogic.

Settings come from environment variables with defaults relative to the
current working directory:

- FORMLOGIC_QUESTIONNAIRE_REGISTRY: questionnaire registry directory
- FORMLOGIC_SCHEMA_DIR: directory holding questionnaire_spec.schema.json
- FORMLOGIC_LOG_LEVEL: log level used by the CLI
"""

import os
from pathlib import Path

from pydantic import BaseModel, field_validator

REGISTRY_ENV = "FORMLOGIC_QUESTIONNAIRE_REGISTRY"
SCHEMA_DIR_ENV = "FORMLOGIC_SCHEMA_DIR"
LOG_LEVEL_ENV = "FORMLOGIC_LOG_LEVEL"

QUESTIONNAIRE_SCHEMA_FILENAME = "questionnaire_spec.schema.json"
LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseModel):
    """Resolved formlogic settings."""

    questionnaire_registry_path: Path = Path("questionnaire-registry")
    schema_dir: Path = Path("schemas")
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def questionnaire_schema_path(self) -> Path:
        return self.schema_dir / QUESTIONNAIRE_SCHEMA_FILENAME


def load_settings() -> Settings:
    """Build Settings from the environment."""
    values: dict[str, str] = {}
    if os.environ.get(REGISTRY_ENV):
        values["questionnaire_registry_path"] = os.environ[REGISTRY_ENV]
    if os.environ.get(SCHEMA_DIR_ENV):
        values["schema_dir"] = os.environ[SCHEMA_DIR_ENV]
    if os.environ.get(LOG_LEVEL_ENV):
        values["log_level"] = os.environ[LOG_LEVEL_ENV]
    return Settings.model_validate(values)


def get_questionnaire_registry_path() -> Path:
    """Return the questionnaire registry path."""
    return load_settings().questionnaire_registry_path


def get_questionnaire_schema_path() -> Path:
    """Return the questionnaire_spec schema path."""
    return load_settings().questionnaire_schema_path
