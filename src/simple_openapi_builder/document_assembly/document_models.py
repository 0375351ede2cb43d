"""Final document entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from simple_openapi_builder.build_diagnostics import BuildDiagnostic
from simple_openapi_builder.path_tree.path_tree_builder import PathItem
from simple_openapi_builder.schema_reflection.schema_models import Schema

OPENAPI_VERSION = "3.0.3"


@dataclass(frozen=True)
class InfoMetadata:
    """Document info block."""

    title: str
    version: str
    description: str | None = None
    terms_of_service: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI info object."""
        rendered: dict[str, Any] = {"title": self.title, "version": self.version}
        if self.description is not None:
            rendered["description"] = self.description
        if self.terms_of_service is not None:
            rendered["termsOfService"] = self.terms_of_service
        return rendered


@dataclass(frozen=True)
class Server:
    """Server the API is reachable on."""

    url: str
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI server object."""
        rendered: dict[str, Any] = {"url": self.url}
        if self.description is not None:
            rendered["description"] = self.description
        return rendered


@dataclass(frozen=True)
class Tag:
    """Tag derived from one controller."""

    name: str
    description: str | None = None
    external_docs_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI tag object."""
        rendered: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            rendered["description"] = self.description
        if self.external_docs_url is not None:
            rendered["externalDocs"] = {"url": self.external_docs_url}
        return rendered


@dataclass(frozen=True)
class Document:
    """Immutable result of one build.

    `diagnostics` reports what the build tolerated and is not rendered.
    """

    info: InfoMetadata
    paths: Mapping[str, PathItem]
    schemas: Mapping[str, Schema]
    servers: tuple[Server, ...] = ()
    tags: tuple[Tag, ...] = ()
    diagnostics: tuple[BuildDiagnostic, ...] = field(default=(), compare=False)
    openapi: str = OPENAPI_VERSION

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI document as JSON-compatible data."""
        rendered: dict[str, Any] = {"openapi": self.openapi, "info": self.info.to_dict()}
        if self.servers:
            rendered["servers"] = [server.to_dict() for server in self.servers]
        if self.tags:
            rendered["tags"] = [tag.to_dict() for tag in self.tags]
        rendered["paths"] = {route: item.to_dict() for route, item in self.paths.items()}
        rendered["components"] = {
            "schemas": {name: schema.to_dict() for name, schema in self.schemas.items()}
        }
        return rendered
