"""Execute interface for the formlogic callable protocol.

Provides an in-proc execute() function for callers that hold questions
and responses as plain dicts.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from formlogic.callable.result import CallableResult
from formlogic.config import get_questionnaire_registry_path, get_questionnaire_schema_path
from formlogic.diagnostics import DiagnosticsCollector
from formlogic.io import write_jsonl
from formlogic.logic import ConditionalLogicEngine
from formlogic.registry import QuestionnaireRegistry, Response


def _resolve_questions(params: dict[str, Any], config: dict[str, Any]) -> list[Any]:
    questions = params.get("questions")
    if questions is not None:
        if not isinstance(questions, list):
            raise ValueError("'questions' must be a list of question dicts")
        return questions

    questionnaire_id = params.get("questionnaire")
    if not questionnaire_id:
        raise ValueError("Either 'questions' or 'questionnaire' is required in params")

    registry_path = Path(config.get("questionnaire_registry_path", get_questionnaire_registry_path()))
    schema_path = config.get("schema_path")
    if schema_path is None:
        default_schema = get_questionnaire_schema_path()
        schema_path = default_schema if default_schema.exists() else None

    registry = QuestionnaireRegistry(registry_path, schema_path=schema_path)
    version = params.get("version")
    if version:
        spec = registry.get(questionnaire_id, version)
    else:
        spec = registry.get_latest(questionnaire_id)
    return spec.all_questions()


def _resolve_responses(
    raw: dict[str, Any] | list[dict[str, Any]] | None,
    collector: DiagnosticsCollector,
) -> dict[str, Response]:
    if raw is None:
        return {}

    if isinstance(raw, dict):
        records = [(question_id, record) for question_id, record in raw.items()]
    elif isinstance(raw, list):
        records = [(None, record) for record in raw]
    else:
        raise ValueError("'responses' must be a mapping or a list of response dicts")

    responses: dict[str, Response] = {}
    for index, (key, record) in enumerate(records):
        try:
            response = Response.model_validate(record)
        except ValidationError as e:
            collector.add_error(
                stage="loading",
                code="INVALID_RESPONSE",
                message=f"Response record {index} failed validation: {e.errors()[0]['msg']}",
                question_id=key,
            )
            continue
        question_id = key or response.question_id
        if not question_id:
            collector.add_error(
                stage="loading",
                code="INVALID_RESPONSE",
                message=f"Response record {index} has no question_id",
            )
            continue
        responses[question_id] = response
    return responses


def execute(params: dict[str, Any]) -> dict[str, Any]:
    """Resolve the state of every question for a set of responses.

    Args:
        params: Dictionary containing:
            - questions: list[dict] - Question definitions, or
            - questionnaire: str - Questionnaire ID resolved from the registry
            - version: str - Optional questionnaire version (default: latest)
            - responses: dict[str, dict] | list[dict] - Current responses,
              keyed by question id or carrying a question_id each
            - config: dict - Optional overrides:
                - questionnaire_registry_path: str
                - schema_path: str
                - items_path: str - Write items there as JSONL and
                  return its path as items_ref instead of inline items

    Returns:
        CallableResult dict with:
            - schema_version: "1.0"
            - items: list[dict] - {question_id, visible, required, disabled}
              per question in declaration order (or items_ref)
            - stats: dict - input/output/skipped/errors counts
            - diagnostics: dict - Finalized engine diagnostics

    Raises:
        ValueError: If required parameters are missing or malformed.
        QuestionnaireNotFoundError: If the questionnaire is not in the registry.
    """
    config = params.get("config", {})
    questions = _resolve_questions(params, config)

    collector = DiagnosticsCollector()
    responses = _resolve_responses(params.get("responses"), collector)

    engine = ConditionalLogicEngine(questions, responses, collector=collector)

    items: list[dict[str, Any]] = []
    for question_id, state in engine.get_states().items():
        items.append({"question_id": question_id, **state.model_dump()})

    visible_count = sum(1 for item in items if item["visible"])
    report = engine.diagnostics

    stats = {
        "input": len(items),
        "output": visible_count,
        "skipped": len(items) - visible_count,
        "errors": len(report.errors),
    }

    items_path = config.get("items_path")
    if items_path:
        write_jsonl(items_path, items)
        result = CallableResult(
            items_ref=str(items_path),
            stats=stats,
            diagnostics=report.model_dump(mode="json"),
        )
    else:
        result = CallableResult(
            items=items,
            stats=stats,
            diagnostics=report.model_dump(mode="json"),
        )
    return result.to_dict()
