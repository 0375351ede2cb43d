"""Build diagnostic entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiagnosticKind(str, Enum):
    """Non-fatal conditions reported by a document build."""

    UNRESOLVED_REFERENCE = "unresolved_reference"
    DUPLICATE_REGISTRATION = "duplicate_registration"
    UNSUPPORTED_TYPE = "unsupported_type"
    ROUTE_METHOD_COLLISION = "route_method_collision"


@dataclass(frozen=True)
class BuildDiagnostic:
    """One reported condition and the name, route or pointer it concerns."""

    kind: DiagnosticKind
    message: str
    subject: str | None = None

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"
