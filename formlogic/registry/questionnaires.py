"""Questionnaire registry for loading and caching questionnaire specifications."""

import json
from pathlib import Path

import jsonschema
from pydantic import ValidationError

from formlogic.registry.models import QuestionnaireSpec


class QuestionnaireNotFoundError(Exception):
    """Raised when a questionnaire specification is not found."""

    pass


class QuestionnaireValidationError(Exception):
    """Raised when a questionnaire specification fails validation."""

    pass


def _version_key(version: str) -> tuple[int, ...]:
    """Numeric sort key for dotted versions, so 1.10.0 sorts after 1.9.0."""
    return tuple(int(part) if part.isdigit() else -1 for part in version.split("."))


def load_questionnaire_file(
    spec_path: Path | str,
    schema: dict | None = None,
) -> QuestionnaireSpec:
    """Load a single questionnaire spec file.

    Args:
        spec_path: Path to the JSON spec.
        schema: Optional JSON schema to validate against before parsing.

    Returns:
        The parsed QuestionnaireSpec.

    Raises:
        QuestionnaireNotFoundError: If the file doesn't exist.
        QuestionnaireValidationError: If the file is not valid JSON or fails validation.
    """
    spec_path = Path(spec_path)
    if not spec_path.exists():
        raise QuestionnaireNotFoundError(f"Questionnaire spec not found: {spec_path}")

    try:
        with open(spec_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise QuestionnaireValidationError(f"Invalid JSON in {spec_path}: {e}") from e

    if schema:
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise QuestionnaireValidationError(
                f"Questionnaire spec validation failed for {spec_path}: {e.message}"
            ) from e

    try:
        return QuestionnaireSpec.model_validate(data)
    except ValidationError as e:
        raise QuestionnaireValidationError(
            f"Questionnaire spec could not be parsed from {spec_path}: {e}"
        ) from e


class QuestionnaireRegistry:
    """Registry for loading and caching questionnaire specifications.

    Loads questionnaire specs from a directory structure:
        <registry_path>/questionnaires/<questionnaire_id>/<version>.json

    Where version uses dashes instead of dots (e.g., 1-0-0.json for 1.0.0).
    """

    def __init__(
        self,
        registry_path: Path | str,
        schema_path: Path | str | None = None,
    ) -> None:
        """Initialize the questionnaire registry.

        Args:
            registry_path: Path to the questionnaire registry directory.
            schema_path: Optional path to the questionnaire_spec schema for validation.
        """
        self.registry_path = Path(registry_path)
        self.questionnaires_path = self.registry_path / "questionnaires"
        self._cache: dict[tuple[str, str], QuestionnaireSpec] = {}
        self._schema: dict | None = None

        if schema_path:
            with open(schema_path) as f:
                self._schema = json.load(f)

    def _version_to_filename(self, version: str) -> str:
        """Convert version string to filename (1.0.0 -> 1-0-0.json)."""
        return version.replace(".", "-") + ".json"

    def _get_spec_path(self, questionnaire_id: str, version: str) -> Path:
        filename = self._version_to_filename(version)
        return self.questionnaires_path / questionnaire_id / filename

    def get(self, questionnaire_id: str, version: str) -> QuestionnaireSpec:
        """Get a questionnaire specification by ID and version.

        Args:
            questionnaire_id: The questionnaire identifier (e.g., 'employment_intake').
            version: The version string (e.g., '1.0.0').

        Returns:
            The loaded QuestionnaireSpec.

        Raises:
            QuestionnaireNotFoundError: If the spec file doesn't exist.
            QuestionnaireValidationError: If the spec fails schema validation.
        """
        cache_key = (questionnaire_id, version)
        if cache_key in self._cache:
            return self._cache[cache_key]

        spec_path = self._get_spec_path(questionnaire_id, version)
        if not spec_path.exists():
            raise QuestionnaireNotFoundError(
                f"Questionnaire spec not found: {questionnaire_id}@{version} "
                f"(expected at {spec_path})"
            )

        spec = load_questionnaire_file(spec_path, self._schema)
        self._cache[cache_key] = spec
        return spec

    def list_questionnaires(self) -> list[str]:
        """List all available questionnaire IDs."""
        if not self.questionnaires_path.exists():
            return []
        return sorted(d.name for d in self.questionnaires_path.iterdir() if d.is_dir())

    def list_versions(self, questionnaire_id: str) -> list[str]:
        """List all available versions for a questionnaire."""
        questionnaire_path = self.questionnaires_path / questionnaire_id
        if not questionnaire_path.exists():
            return []
        versions = []
        for f in questionnaire_path.glob("*.json"):
            # 1-0-0.json -> 1.0.0
            versions.append(f.stem.replace("-", "."))
        return sorted(versions, key=_version_key)

    def get_latest(self, questionnaire_id: str) -> QuestionnaireSpec:
        """Get the latest version of a questionnaire.

        Raises:
            QuestionnaireNotFoundError: If no versions exist.
        """
        versions = self.list_versions(questionnaire_id)
        if not versions:
            raise QuestionnaireNotFoundError(
                f"No versions found for questionnaire: {questionnaire_id}"
            )
        latest = versions[-1]
        return self.get(questionnaire_id, latest)
