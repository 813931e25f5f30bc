"""Convert front-end questionnaire definitions to questionnaire_spec format.

The front-end keeps question groups as camelCase JSON (questionId,
defaultValue, defaultExpanded, ...) with type-specific fields inline on
each question. Type-specific fields the engine does not read are moved
under `metadata` unchanged.
"""

from typing import Any

_QUESTION_FIELDS = {
    "id": "id",
    "type": "type",
    "text": "text",
    "description": "description",
    "required": "required",
    "priority": "priority",
    "tags": "tags",
    "conditions": "conditions",
    "defaultValue": "default_value",
    "metadata": "metadata",
}

_GROUP_FIELDS = {
    "id": "id",
    "name": "name",
    "description": "description",
    "priority": "priority",
    "tags": "tags",
    "collapsible": "collapsible",
    "defaultExpanded": "default_expanded",
}


def convert_condition(condition: dict[str, Any]) -> dict[str, Any]:
    """Convert a single camelCase condition."""
    converted = {
        "question_id": condition.get("questionId", condition.get("question_id")),
        "operator": condition.get("operator"),
        "action": condition.get("action"),
    }
    if condition.get("value") is not None:
        converted["value"] = condition["value"]
    return converted


def convert_question(question: dict[str, Any]) -> dict[str, Any]:
    """Convert a single camelCase question, folding extra fields into metadata."""
    converted: dict[str, Any] = {}
    extra: dict[str, Any] = {}

    for key, value in question.items():
        target = _QUESTION_FIELDS.get(key)
        if target is None:
            extra[key] = value
        elif target == "conditions":
            converted["conditions"] = [convert_condition(c) for c in value or []]
        elif value is not None:
            converted[target] = value

    if extra:
        metadata = dict(converted.get("metadata") or {})
        metadata.update(extra)
        converted["metadata"] = metadata

    return converted


def convert_group(group: dict[str, Any]) -> dict[str, Any]:
    """Convert a single camelCase question group."""
    converted: dict[str, Any] = {}
    for key, target in _GROUP_FIELDS.items():
        if group.get(key) is not None:
            converted[target] = group[key]
    converted.setdefault("name", converted.get("id", ""))
    converted["questions"] = [convert_question(q) for q in group.get("questions", [])]
    return converted


def convert_legacy_questionnaire(
    data: dict[str, Any] | list[dict[str, Any]],
    questionnaire_id: str,
    version: str = "1.0.0",
    name: str | None = None,
) -> dict[str, Any]:
    """Convert a front-end questionnaire to a questionnaire_spec document.

    Args:
        data: Either a list of groups, a dict with a "groups" key, or a
            dict with a bare "questions" list (wrapped in a single group).
        questionnaire_id: ID for the generated spec.
        version: Version for the generated spec.
        name: Optional display name (defaults to the questionnaire ID).

    Returns:
        A dict conforming to the questionnaire_spec schema.

    Raises:
        ValueError: If data has neither groups nor questions.
    """
    if isinstance(data, list):
        groups = data
        description = None
    elif "groups" in data:
        groups = data["groups"]
        description = data.get("description")
        name = name or data.get("name")
    elif "questions" in data:
        groups = [{"id": "default", "name": data.get("name", "Questions"), "questions": data["questions"]}]
        description = data.get("description")
    else:
        raise ValueError("Legacy questionnaire must contain 'groups' or 'questions'")

    spec: dict[str, Any] = {
        "type": "questionnaire_spec",
        "questionnaire_id": questionnaire_id,
        "version": version,
        "name": name or questionnaire_id,
        "groups": [convert_group(g) for g in groups],
    }
    if description:
        spec["description"] = description
    return spec
