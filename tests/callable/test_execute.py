"""Tests for the execute() interface."""

from pathlib import Path

import pytest

from formlogic import execute
from formlogic.callable import CallableResult
from formlogic.io import read_jsonl
from formlogic.registry import QuestionnaireNotFoundError


@pytest.fixture
def questions() -> list[dict]:
    """Questions as a caller would send them over the wire."""
    return [
        {"id": "q1", "type": "short-answer", "text": "Name"},
        {"id": "q2", "type": "numeric", "text": "Age", "required": True},
        {
            "id": "q5",
            "text": "Senior benefits",
            "conditions": [
                {"question_id": "q2", "operator": "greater-than-or-equal", "value": 65, "action": "show"}
            ],
        },
        {
            "id": "q6",
            "text": "Employer",
            "conditions": [
                {"question_id": "q5", "operator": "equals", "value": True, "action": "require"}
            ],
        },
    ]


class TestExecuteInterface:
    """Tests for execute() function interface."""

    def test_returns_state_per_question(self, questions: list[dict]) -> None:
        result = execute({"questions": questions, "responses": {"q2": {"value": 70}}})

        assert result["schema_version"] == "1.0"
        assert "items_ref" not in result
        assert [item["question_id"] for item in result["items"]] == ["q1", "q2", "q5", "q6"]
        q5 = result["items"][2]
        assert q5 == {"question_id": "q5", "visible": True, "required": False, "disabled": False}

    def test_stats(self, questions: list[dict]) -> None:
        result = execute({"questions": questions, "responses": {"q2": {"value": 40}}})

        assert result["stats"] == {"input": 4, "output": 3, "skipped": 1, "errors": 0}
        assert result["diagnostics"]["status"] == "success"

    def test_responses_as_list(self, questions: list[dict]) -> None:
        result = execute({
            "questions": questions,
            "responses": [
                {"question_id": "q2", "value": 70},
                {"question_id": "q5", "value": True},
            ],
        })

        states = {item["question_id"]: item for item in result["items"]}
        assert states["q6"]["required"] is True

    def test_no_responses(self, questions: list[dict]) -> None:
        result = execute({"questions": questions})
        states = {item["question_id"]: item for item in result["items"]}
        assert states["q5"]["visible"] is False
        assert states["q2"]["required"] is True

    def test_invalid_response_recorded(self, questions: list[dict]) -> None:
        result = execute({
            "questions": questions,
            "responses": [{"value": 70}, {"question_id": "q1", "value": "Ada"}],
        })

        assert result["stats"]["errors"] == 1
        assert result["diagnostics"]["status"] == "failed"
        assert result["diagnostics"]["errors"][0]["code"] == "INVALID_RESPONSE"
        assert result["diagnostics"]["response_count"] == 1

    def test_warnings_in_diagnostics(self) -> None:
        result = execute({
            "questions": [
                {"id": "a", "conditions": [{"question_id": "ghost", "operator": "matches", "action": "show"}]}
            ],
        })

        codes = [w["code"] for w in result["diagnostics"]["warnings"]]
        assert "UNKNOWN_QUESTION_REFERENCE" in codes
        assert "UNKNOWN_OPERATOR" in codes
        assert result["diagnostics"]["status"] == "partial"

    def test_result_validates_as_callable_result(self, questions: list[dict]) -> None:
        result = execute({"questions": questions})
        validated = CallableResult.model_validate(result)
        assert len(validated.items) == 4

    def test_items_written_to_path(self, questions: list[dict], tmp_path: Path) -> None:
        """With items_path, states go to JSONL and the result carries items_ref."""
        items_path = tmp_path / "states.jsonl"
        result = execute({
            "questions": questions,
            "responses": {"q2": {"value": 70}},
            "config": {"items_path": str(items_path)},
        })

        assert "items" not in result
        assert result["items_ref"] == str(items_path)
        assert result["stats"]["input"] == 4

        rows = list(read_jsonl(items_path))
        assert [row["question_id"] for row in rows] == ["q1", "q2", "q5", "q6"]
        assert rows[2]["visible"] is True
        assert CallableResult.model_validate(result).items is None

    def test_questionnaire_from_registry(
        self, questionnaire_registry_path: Path, questionnaire_schema_path: Path
    ) -> None:
        result = execute({
            "questionnaire": "employment_intake",
            "version": "1.0.0",
            "responses": {"age": {"value": 70}, "skills": {"value": ["react"]}},
            "config": {
                "questionnaire_registry_path": str(questionnaire_registry_path),
                "schema_path": str(questionnaire_schema_path),
            },
        })

        states = {item["question_id"]: item for item in result["items"]}
        assert states["senior-benefits"]["visible"] is True
        assert states["react-version"]["visible"] is True
        assert states["company"]["visible"] is False

    def test_latest_questionnaire(self, questionnaire_registry_path: Path) -> None:
        result = execute({
            "questionnaire": "employment_intake",
            "config": {"questionnaire_registry_path": str(questionnaire_registry_path)},
        })
        assert [item["question_id"] for item in result["items"]] == [
            "employed", "company", "remote", "office-city",
        ]


class TestExecuteErrors:
    """Tests for execute() error handling."""

    def test_missing_questions_raises(self) -> None:
        with pytest.raises(ValueError, match="'questions' or 'questionnaire'"):
            execute({})

    def test_questions_must_be_list(self) -> None:
        with pytest.raises(ValueError, match="must be a list"):
            execute({"questions": {"id": "q1"}})

    def test_responses_must_be_mapping_or_list(self) -> None:
        with pytest.raises(ValueError, match="'responses' must be"):
            execute({"questions": [], "responses": "q1=yes"})

    def test_unknown_questionnaire_raises(self, questionnaire_registry_path: Path) -> None:
        with pytest.raises(QuestionnaireNotFoundError):
            execute({
                "questionnaire": "nonexistent",
                "config": {"questionnaire_registry_path": str(questionnaire_registry_path)},
            })
