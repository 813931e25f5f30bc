"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from formlogic.registry import Question


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def schemas_dir(project_root: Path) -> Path:
    """Return the schemas directory."""
    return project_root / "schemas"


@pytest.fixture
def questionnaire_registry_path(project_root: Path) -> Path:
    """Return the questionnaire registry path."""
    return project_root / "questionnaire-registry"


@pytest.fixture
def questionnaire_schema_path(schemas_dir: Path) -> Path:
    """Return the questionnaire spec schema path."""
    return schemas_dir / "questionnaire_spec.schema.json"


@pytest.fixture
def base_questions() -> list[Question]:
    """Four unconditional questions: name, age, skills, remote."""
    return [
        Question(id="q1", type="short-answer", text="Name"),
        Question(id="q2", type="numeric", text="Age"),
        Question(id="q3", type="multiple-choice", text="Skills"),
        Question(id="q4", type="true-false", text="Remote?"),
    ]
