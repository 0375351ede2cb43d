"""Resolution of request/response payload declarations into content schemas."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from simple_openapi_builder.api_declarations.declaration_models import APIRequest, APIResponse
from simple_openapi_builder.schema_reflection.schema_models import Schema
from simple_openapi_builder.schema_registry.registry import SchemaRegistry

DEFAULT_CONTENT_TYPE = "application/json"


class ReferenceResolver:
    """Turns body declarations into content-type to schema mappings.

    Object types are registered on first use and referenced by pointer;
    primitives and prebuilt schemas are inlined.
    """

    def __init__(self, registry: SchemaRegistry) -> None:
        self._registry = registry

    def resolve_content(self, declaration: APIRequest | APIResponse) -> Mapping[str, Schema]:
        """Return one schema per declared content type, or nothing without a body."""
        schema = self.resolve_schema(declaration)
        if schema is None:
            return {}
        content_types = declaration.declared_content_types or (DEFAULT_CONTENT_TYPE,)
        return {content_type: schema for content_type in content_types}

    def resolve_schema(self, declaration: APIRequest | APIResponse) -> Schema | None:
        """Return the schema of a declaration's payload."""
        if declaration.schema is not None:
            return self._as_schema(declaration.schema)
        if declaration.object is not None:
            return self.reference(declaration.object)
        if declaration.array is not None:
            return Schema.array_of(self.reference(declaration.array))
        return None

    def reference(self, target: Any) -> Schema:
        """Return a pointer for object types and an inline schema for anything else."""
        if isinstance(target, Schema):
            return target
        if not self._registry.reflector.is_object_type(target):
            return self._registry.reflect_inline(target)
        name = self._registry.ensure_registered(target)
        return Schema.reference(self._registry.resolve(name))

    def _as_schema(self, value: Any) -> Schema:
        if isinstance(value, Schema):
            return value
        return self._registry.reflect_inline(value)
