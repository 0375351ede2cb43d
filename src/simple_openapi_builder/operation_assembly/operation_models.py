"""Operation entities rendered under a path item."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from simple_openapi_builder.api_declarations.declaration_models import (
    HTTPMethod,
    ParameterLocation,
)
from simple_openapi_builder.schema_reflection.schema_models import Schema


@dataclass(frozen=True)
class Parameter:  # pylint: disable=too-many-instance-attributes
    """Rendered operation parameter."""

    name: str
    location: ParameterLocation
    description: str | None
    required: bool
    deprecated: bool
    allow_empty_value: bool
    schema: Schema | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI parameter object."""
        rendered: dict[str, Any] = {
            "name": self.name,
            "in": self.location.value,
        }
        if self.description is not None:
            rendered["description"] = self.description
        rendered["required"] = self.required
        rendered["deprecated"] = self.deprecated
        rendered["allowEmptyValue"] = self.allow_empty_value
        if self.schema is not None:
            rendered["schema"] = self.schema.to_dict()
        return rendered


@dataclass(frozen=True)
class MediaType:
    """Schema carried under one content type."""

    schema: Schema

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI media type object."""
        return {"schema": self.schema.to_dict()}


@dataclass(frozen=True)
class RequestBody:
    """Rendered request body."""

    description: str | None
    content: Mapping[str, MediaType] = field(default_factory=dict)
    required: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI request body object."""
        rendered: dict[str, Any] = {}
        if self.description is not None:
            rendered["description"] = self.description
        if self.content:
            rendered["content"] = _render_content(self.content)
        if self.required:
            rendered["required"] = True
        return rendered


@dataclass(frozen=True)
class Response:
    """Rendered response for one status code."""

    description: str | None
    content: Mapping[str, MediaType] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI response object."""
        rendered: dict[str, Any] = {"description": self.description or ""}
        if self.content:
            rendered["content"] = _render_content(self.content)
        return rendered


@dataclass(frozen=True)
class Operation:  # pylint: disable=too-many-instance-attributes
    """One HTTP method's documentation for a route."""

    method: HTTPMethod
    summary: str | None
    description: str | None
    parameters: tuple[Parameter, ...] = ()
    request_body: RequestBody | None = None
    responses: Mapping[str, Response] = field(default_factory=dict)
    tags: tuple[str, ...] = ()
    deprecated: bool = False

    def schemas(self) -> tuple[Schema, ...]:
        """Return every schema this operation carries."""
        found = [parameter.schema for parameter in self.parameters if parameter.schema is not None]
        if self.request_body is not None:
            found.extend(media.schema for media in self.request_body.content.values())
        for response in self.responses.values():
            found.extend(media.schema for media in response.content.values())
        return tuple(found)

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI operation object."""
        rendered: dict[str, Any] = {}
        if self.tags:
            rendered["tags"] = list(self.tags)
        if self.summary is not None:
            rendered["summary"] = self.summary
        if self.description is not None:
            rendered["description"] = self.description
        if self.parameters:
            rendered["parameters"] = [parameter.to_dict() for parameter in self.parameters]
        if self.request_body is not None:
            rendered["requestBody"] = self.request_body.to_dict()
        if self.responses:
            rendered["responses"] = {
                code: response.to_dict() for code, response in self.responses.items()
            }
        if self.deprecated:
            rendered["deprecated"] = True
        return rendered


def _render_content(content: Mapping[str, MediaType]) -> dict[str, Any]:
    return {content_type: media.to_dict() for content_type, media in content.items()}
