"""Collector for engine diagnostics.

Collects errors and warnings raised while a questionnaire is loaded and
evaluated, and produces a diagnostic report for the engine instance.
"""

from formlogic.diagnostics.models import (
    DiagnosticError,
    DiagnosticWarning,
    EngineDiagnostic,
    ProcessingStatus,
    Stage,
)


class DiagnosticsCollector:
    """Collects diagnostics for a conditional logic engine.

    Identical entries are recorded once, so re-evaluating the same
    malformed condition does not grow the report.
    """

    def __init__(self) -> None:
        self._errors: list[DiagnosticError] = []
        self._warnings: list[DiagnosticWarning] = []
        self.question_count = 0
        self.response_count = 0

    def add_error(
        self,
        stage: Stage,
        code: str,
        message: str,
        question_id: str | None = None,
        condition_index: int | None = None,
        details: dict | None = None,
    ) -> None:
        """Add an error to the diagnostics.

        Args:
            stage: Stage where the error occurred.
            code: Error code (e.g., "INVALID_RESPONSE").
            message: Human-readable error message.
            question_id: Optional question the error relates to.
            condition_index: Optional position of the condition within the question.
            details: Optional additional details.
        """
        error = DiagnosticError(
            stage=stage,
            code=code,
            message=message,
            question_id=question_id,
            condition_index=condition_index,
            details=details,
        )
        if error not in self._errors:
            self._errors.append(error)

    def add_warning(
        self,
        stage: Stage,
        code: str,
        message: str,
        question_id: str | None = None,
        condition_index: int | None = None,
        details: dict | None = None,
    ) -> None:
        """Add a warning to the diagnostics.

        Args:
            stage: Stage where the warning occurred.
            code: Warning code (e.g., "UNKNOWN_OPERATOR").
            message: Human-readable warning message.
            question_id: Optional question the warning relates to.
            condition_index: Optional position of the condition within the question.
            details: Optional additional details.
        """
        warning = DiagnosticWarning(
            stage=stage,
            code=code,
            message=message,
            question_id=question_id,
            condition_index=condition_index,
            details=details,
        )
        if warning not in self._warnings:
            self._warnings.append(warning)

    @property
    def errors(self) -> list[DiagnosticError]:
        return list(self._errors)

    @property
    def warnings(self) -> list[DiagnosticWarning]:
        return list(self._warnings)

    def has_code(self, code: str) -> bool:
        """Whether any error or warning with this code was recorded."""
        return any(entry.code == code for entry in [*self._errors, *self._warnings])

    def finalize(self) -> EngineDiagnostic:
        """Return the diagnostic report.

        Status is FAILED when any error was recorded, PARTIAL when only
        warnings were, and SUCCESS otherwise.
        """
        if self._errors:
            status = ProcessingStatus.FAILED
        elif self._warnings:
            status = ProcessingStatus.PARTIAL
        else:
            status = ProcessingStatus.SUCCESS

        return EngineDiagnostic(
            status=status,
            errors=list(self._errors),
            warnings=list(self._warnings),
            question_count=self.question_count,
            response_count=self.response_count,
        )
