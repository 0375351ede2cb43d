"""Build diagnostics exports."""

from .diagnostic_models import BuildDiagnostic, DiagnosticKind
from .diagnostic_collector import DiagnosticCollector

__all__ = ["BuildDiagnostic", "DiagnosticCollector", "DiagnosticKind"]
