"""Assembly of the path tree and registry snapshot into a document."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from simple_openapi_builder.build_diagnostics import (
    BuildDiagnostic,
    DiagnosticCollector,
    DiagnosticKind,
)
from simple_openapi_builder.path_tree.path_tree_builder import PathItem
from simple_openapi_builder.schema_reflection.schema_models import (
    COMPONENTS_SCHEMAS_PREFIX,
    Schema,
)

from .document_models import Document, InfoMetadata, Server, Tag


class DocumentBuildError(Exception):
    """Raised by strict builds that produced diagnostics."""

    def __init__(self, diagnostics: Sequence[BuildDiagnostic]) -> None:
        self.diagnostics = tuple(diagnostics)
        details = "; ".join(str(diagnostic) for diagnostic in self.diagnostics)
        super().__init__(f"Document build reported {len(self.diagnostics)} problem(s): {details}")


# pylint: disable=too-many-arguments
def build_document(
    metadata: InfoMetadata,
    path_tree: Mapping[str, PathItem],
    registry_snapshot: Mapping[str, Schema],
    *,
    servers: Sequence[Server] = (),
    tags: Sequence[Tag] = (),
    diagnostics: DiagnosticCollector | None = None,
) -> Document:
    """Combine an already built tree and registry into a document.

    Every `$ref` is checked against the registry; dangling pointers are
    recorded as diagnostics.
    """
    collector = diagnostics if diagnostics is not None else DiagnosticCollector()
    _check_references(path_tree, registry_snapshot, collector)
    return Document(
        info=metadata,
        paths=MappingProxyType(dict(path_tree)),
        schemas=MappingProxyType(dict(registry_snapshot)),
        servers=tuple(servers),
        tags=tuple(tags),
        diagnostics=collector.snapshot(),
    )


# pylint: enable=too-many-arguments


def _check_references(
    path_tree: Mapping[str, PathItem],
    registry_snapshot: Mapping[str, Schema],
    collector: DiagnosticCollector,
) -> None:
    reported: set[str] = set()
    for location, schema in _schemas_with_locations(path_tree, registry_snapshot):
        for ref in schema.references():
            name = ref.removeprefix(COMPONENTS_SCHEMAS_PREFIX)
            if name in registry_snapshot or ref in reported:
                continue
            reported.add(ref)
            collector.record(
                DiagnosticKind.UNRESOLVED_REFERENCE,
                f"{location} refers to '{ref}', which is not registered.",
                subject=ref,
            )


def _schemas_with_locations(
    path_tree: Mapping[str, PathItem], registry_snapshot: Mapping[str, Schema]
) -> list[tuple[str, Schema]]:
    located: list[tuple[str, Schema]] = []
    for route, item in path_tree.items():
        for method, operation in item.operations():
            located.extend(
                (f"{method.value} {route}", schema) for schema in operation.schemas()
            )
    located.extend(
        (f"components.schemas.{name}", schema) for name, schema in registry_snapshot.items()
    )
    return located
