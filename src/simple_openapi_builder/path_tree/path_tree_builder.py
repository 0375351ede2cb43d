"""Grouping of operations into one path item per route."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

from simple_openapi_builder.api_declarations.declaration_models import HTTPMethod
from simple_openapi_builder.build_diagnostics import DiagnosticCollector, DiagnosticKind
from simple_openapi_builder.operation_assembly.operation_models import Operation

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathItem:  # pylint: disable=too-many-instance-attributes
    """Operations registered for one route string, one slot per method."""

    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None

    def operation(self, method: HTTPMethod | str) -> Operation | None:
        """Return the operation in the slot for `method`."""
        return getattr(self, HTTPMethod.parse(method).value.lower())

    def with_operation(self, method: HTTPMethod, operation: Operation) -> PathItem:
        """Return a copy with the slot for `method` set."""
        return replace(self, **{method.value.lower(): operation})

    def operations(self) -> tuple[tuple[HTTPMethod, Operation], ...]:
        """Return filled slots in OpenAPI field order."""
        return tuple(
            (method, operation)
            for method in HTTPMethod
            if (operation := self.operation(method)) is not None
        )

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI path item object."""
        return {
            method.value.lower(): operation.to_dict() for method, operation in self.operations()
        }


class PathTreeBuilder:
    """Accumulates operations by exact route string.

    Routes are not normalized. Registering a route and method pair twice keeps
    the last operation and records a collision diagnostic.
    """

    def __init__(self, *, diagnostics: DiagnosticCollector | None = None) -> None:
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
        self._paths: dict[str, PathItem] = {}

    def add_operation(self, route: str, method: HTTPMethod | str, operation: Operation) -> None:
        """Set the slot for `method` on the node for `route`."""
        resolved_method = HTTPMethod.parse(method)
        node = self._paths.get(route, PathItem())
        if node.operation(resolved_method) is not None:
            self._diagnostics.record(
                DiagnosticKind.ROUTE_METHOD_COLLISION,
                f"{resolved_method.value} {route} was registered more than once; "
                "the last registration wins.",
                subject=route,
            )
        self._paths[route] = node.with_operation(resolved_method, operation)
        LOGGER.debug("Added %s %s", resolved_method.value, route)

    def snapshot(self) -> Mapping[str, PathItem]:
        """Return a read-only copy of the tree in first-insertion order of routes."""
        return MappingProxyType(dict(self._paths))
