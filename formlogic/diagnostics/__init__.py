"""Diagnostics collection for conditional logic evaluation."""

from formlogic.diagnostics.collector import DiagnosticsCollector
from formlogic.diagnostics.models import (
    DiagnosticError,
    DiagnosticWarning,
    EngineDiagnostic,
    ProcessingStatus,
)

__all__ = [
    "DiagnosticsCollector",
    "DiagnosticError",
    "DiagnosticWarning",
    "EngineDiagnostic",
    "ProcessingStatus",
]
