"""Pydantic models for questionnaire specifications and responses."""

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
)


class ConditionOperator(str, Enum):
    """Comparison applied between a referenced answer and a condition operand."""

    EQUALS = "equals"
    NOT_EQUALS = "not-equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not-contains"
    GREATER_THAN = "greater-than"
    LESS_THAN = "less-than"
    GREATER_THAN_OR_EQUAL = "greater-than-or-equal"
    LESS_THAN_OR_EQUAL = "less-than-or-equal"
    IN = "in"
    NOT_IN = "not-in"
    IS_EMPTY = "is-empty"
    IS_NOT_EMPTY = "is-not-empty"


class ConditionAction(str, Enum):
    """Effect a condition has on the question that declares it."""

    SHOW = "show"
    HIDE = "hide"
    REQUIRE = "require"
    DISABLE = "disable"
    ENABLE = "enable"


class QuestionType(str, Enum):
    """Input kinds a question can be rendered as."""

    SHORT_ANSWER = "short-answer"
    LONG_FORM = "long-form"
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SLIDER = "slider"
    STACK_RANKING = "stack-ranking"
    NUMERIC = "numeric"


class Priority(str, Enum):
    """Display priority of a question or group."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


Scalar = Union[StrictBool, StrictInt, StrictFloat, StrictStr]
Operand = Union[Scalar, list[Scalar], None]


class Condition(BaseModel):
    """A single conditional rule attached to a question.

    `operator` and `action` fall back to plain strings when they are not
    recognised so that a malformed rule still loads; the evaluator treats
    such rules as not met. An operand outside the scalar/list shape is kept
    as an opaque value. `questionId` is accepted as an alias of `question_id`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question_id: str = Field(alias="questionId")
    operator: ConditionOperator | str = Field(union_mode="left_to_right")
    value: Operand | Any = Field(default=None, union_mode="left_to_right")
    action: ConditionAction | str = Field(union_mode="left_to_right")


class Question(BaseModel):
    """Question definition. The engine reads id, text, required and conditions.

    `type` and `priority` are presentation details and keep unrecognised
    values as plain strings.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    type: QuestionType | str = Field(default=QuestionType.SHORT_ANSWER, union_mode="left_to_right")
    text: str = ""
    description: str | None = None
    required: bool = False
    priority: Priority | str = Field(default=Priority.MEDIUM, union_mode="left_to_right")
    tags: list[str] = Field(default_factory=list)
    conditions: list[Condition] = Field(default_factory=list)
    default_value: Any = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class MultipleChoiceAnswer(BaseModel):
    """Answer shape for multiple-choice questions with optional free text."""

    selected_choices: list[str] = Field(default_factory=list)
    additional_text: str | None = None


class Response(BaseModel):
    """A recorded answer to one question."""

    question_id: str | None = None
    value: Any = None
    timestamp: datetime | None = None
    valid: bool = True
    errors: list[str] = Field(default_factory=list)
    vetoed: bool = False
    veto_reason: str | None = None


class QuestionGroup(BaseModel):
    """An ordered group of questions shown together."""

    id: str
    name: str
    description: str | None = None
    questions: list[Question] = Field(default_factory=list)
    priority: Priority = Priority.MEDIUM
    tags: list[str] = Field(default_factory=list)
    collapsible: bool = False
    default_expanded: bool = True


class QuestionnaireSpec(BaseModel):
    """Complete questionnaire specification."""

    type: Literal["questionnaire_spec"]
    questionnaire_id: str
    version: str
    name: str
    description: str | None = None
    groups: list[QuestionGroup]

    def all_questions(self) -> list[Question]:
        """Return every question across all groups, in declaration order."""
        return [question for group in self.groups for question in group.questions]

    def get_question(self, question_id: str) -> Question | None:
        """Get a question by its ID."""
        for question in self.all_questions():
            if question.id == question_id:
                return question
        return None

    def get_group(self, group_id: str) -> QuestionGroup | None:
        """Get a group by its ID."""
        for group in self.groups:
            if group.id == group_id:
                return group
        return None
