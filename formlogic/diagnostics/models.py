"""Data models for engine diagnostics.

Tracks anomalies found while loading questions, evaluating conditions,
resolving state and walking dependencies.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

Stage = Literal["loading", "evaluation", "resolution", "dependencies"]


class ProcessingStatus(str, Enum):
    """Overall health of an engine instance."""

    SUCCESS = "success"  # No anomalies
    PARTIAL = "partial"  # Warnings only, every question still resolved
    FAILED = "failed"  # Input records had to be dropped


class DiagnosticError(BaseModel):
    """An error that caused input to be discarded."""

    stage: Stage
    code: str  # Error code like "INVALID_RESPONSE"
    message: str
    question_id: str | None = None
    condition_index: int | None = None
    details: dict | None = None


class DiagnosticWarning(BaseModel):
    """A recoverable anomaly; evaluation continued with a safe default."""

    stage: Stage
    code: str  # Warning code like "UNKNOWN_OPERATOR"
    message: str
    question_id: str | None = None
    condition_index: int | None = None
    details: dict | None = None


class EngineDiagnostic(BaseModel):
    """Diagnostics for one engine instance."""

    status: ProcessingStatus
    errors: list[DiagnosticError] = Field(default_factory=list)
    warnings: list[DiagnosticWarning] = Field(default_factory=list)
    question_count: int = 0
    response_count: int = 0
