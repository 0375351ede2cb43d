"""Two-phase builder: accumulate declarations, then build a document."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from simple_openapi_builder.api_declarations.declaration_models import (
    APIController,
    APIObject,
    DeclarationError,
)
from simple_openapi_builder.build_diagnostics import DiagnosticCollector
from simple_openapi_builder.operation_assembly.operation_assembler import assemble_operation
from simple_openapi_builder.path_tree.path_tree_builder import PathTreeBuilder
from simple_openapi_builder.reference_resolution.content_resolver import ReferenceResolver
from simple_openapi_builder.schema_registry.registry import DuplicatePolicy, SchemaRegistry

from .document_assembler import DocumentBuildError, build_document
from .document_models import Document, InfoMetadata, Server, Tag

LOGGER = logging.getLogger(__name__)

Declaration = APIController | APIObject | Server


class OpenAPIBuilder:
    """Collects controllers, objects and servers for one document.

    Nothing is reflected or assembled until `build()`, and every call to
    `build()` starts from a fresh registry and path tree, so repeated builds of
    the same declarations produce equal documents.
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        title: str,
        version: str,
        description: str | None = None,
        *,
        terms_of_service: str | None = None,
        strict: bool = False,
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.OVERWRITE,
    ) -> None:
        self._info = InfoMetadata(
            title=title,
            version=version,
            description=description,
            terms_of_service=terms_of_service,
        )
        self._strict = strict
        self._duplicate_policy = duplicate_policy
        self._controllers: list[APIController] = []
        self._objects: list[APIObject] = []
        self._servers: list[Server] = []

    # pylint: enable=too-many-arguments

    def add(self, declarations: Declaration | Iterable[Declaration]) -> OpenAPIBuilder:
        """Add one declaration or a sequence of them; returns the builder."""
        items = (
            [declarations]
            if isinstance(declarations, (APIController, APIObject, Server))
            else declarations
        )
        for item in items:
            if isinstance(item, APIController):
                self._controllers.append(item)
            elif isinstance(item, APIObject):
                self._objects.append(item)
            elif isinstance(item, Server):
                self._servers.append(item)
            else:
                raise DeclarationError(f"Unsupported declaration: {item!r}")
        return self

    def build(self) -> Document:
        """Reflect, resolve and assemble everything added so far.

        Raises:
          DocumentBuildError: In strict mode, when the build reported diagnostics.
          DuplicateRegistrationError: When the duplicate policy rejects an object.
        """
        LOGGER.debug(
            "Building document '%s' from %d controller(s) and %d object(s)",
            self._info.title,
            len(self._controllers),
            len(self._objects),
        )
        diagnostics = DiagnosticCollector()
        registry = SchemaRegistry(policy=self._duplicate_policy, diagnostics=diagnostics)
        for api_object in self._objects:
            registry.reflect_and_register(api_object.object, api_object.name)

        resolver = ReferenceResolver(registry)
        path_tree = PathTreeBuilder(diagnostics=diagnostics)
        for controller in self._controllers:
            for action in controller.actions:
                operation = assemble_operation(action, resolver, tags=(controller.name,))
                path_tree.add_operation(action.route, action.method, operation)

        document = build_document(
            self._info,
            path_tree.snapshot(),
            registry.snapshot(),
            servers=self._servers,
            tags=self._controller_tags(),
            diagnostics=diagnostics,
        )
        if self._strict and document.diagnostics:
            raise DocumentBuildError(document.diagnostics)
        return document

    def _controller_tags(self) -> tuple[Tag, ...]:
        tags: dict[str, Tag] = {}
        for controller in self._controllers:
            tags.setdefault(
                controller.name,
                Tag(
                    name=controller.name,
                    description=controller.description,
                    external_docs_url=controller.external_docs_url,
                ),
            )
        return tuple(tags.values())
