"""Registry modules for loading questionnaire specifications."""

from formlogic.registry.legacy import convert_legacy_questionnaire
from formlogic.registry.models import (
    Condition,
    ConditionAction,
    ConditionOperator,
    MultipleChoiceAnswer,
    Priority,
    Question,
    QuestionGroup,
    QuestionnaireSpec,
    QuestionType,
    Response,
)
from formlogic.registry.questionnaires import (
    QuestionnaireNotFoundError,
    QuestionnaireRegistry,
    QuestionnaireValidationError,
)

__all__ = [
    "QuestionnaireRegistry",
    "QuestionnaireNotFoundError",
    "QuestionnaireValidationError",
    "convert_legacy_questionnaire",
    "Condition",
    "ConditionAction",
    "ConditionOperator",
    "MultipleChoiceAnswer",
    "Priority",
    "Question",
    "QuestionGroup",
    "QuestionnaireSpec",
    "QuestionType",
    "Response",
]
