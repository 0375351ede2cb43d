"""Per-build diagnostic collection."""

from __future__ import annotations

import logging

from .diagnostic_models import BuildDiagnostic, DiagnosticKind

LOGGER = logging.getLogger(__name__)


class DiagnosticCollector:
    """Collects diagnostics in the order they are recorded and logs each one."""

    def __init__(self) -> None:
        self._diagnostics: list[BuildDiagnostic] = []

    def record(self, kind: DiagnosticKind, message: str, *, subject: str | None = None) -> None:
        """Record and log one diagnostic."""
        diagnostic = BuildDiagnostic(kind=kind, message=message, subject=subject)
        LOGGER.warning("%s", diagnostic)
        self._diagnostics.append(diagnostic)

    def of_kind(self, kind: DiagnosticKind) -> tuple[BuildDiagnostic, ...]:
        """Return diagnostics of one kind."""
        return tuple(diagnostic for diagnostic in self._diagnostics if diagnostic.kind is kind)

    def snapshot(self) -> tuple[BuildDiagnostic, ...]:
        """Return every diagnostic recorded so far."""
        return tuple(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)
