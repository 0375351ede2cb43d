"""Registry of named component schemas."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from simple_openapi_builder.build_diagnostics import DiagnosticCollector, DiagnosticKind
from simple_openapi_builder.schema_reflection.schema_models import Schema, schema_reference
from simple_openapi_builder.schema_reflection.type_reflector import (
    SchemaReflector,
    object_name_for,
)

LOGGER = logging.getLogger(__name__)


class DuplicateRegistrationError(Exception):
    """Raised when an ObjectName is registered twice with different shapes."""


class DuplicatePolicy(str, Enum):
    """What to do when an ObjectName is registered with a different shape."""

    OVERWRITE = "overwrite"
    REJECT = "reject"


class SchemaRegistry:
    """Ordered mapping from ObjectName to schema for one build session.

    Entries keep their first insertion position; an overwrite replaces the
    schema in place. Types registered under a custom name keep that name for
    every later reference.
    """

    def __init__(
        self,
        *,
        policy: DuplicatePolicy = DuplicatePolicy.OVERWRITE,
        diagnostics: DiagnosticCollector | None = None,
    ) -> None:
        self._policy = policy
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
        self._schemas: dict[str, Schema] = {}
        self._names_by_type: dict[type, str] = {}
        self._types_by_name: dict[str, type] = {}
        self._reflector = SchemaReflector(reference_for=self.reference_for)

    @property
    def reflector(self) -> SchemaReflector:
        """Reflector whose cyclic references follow this registry's names."""
        return self._reflector

    def register(self, name: str, schema: Schema) -> None:
        """Store `schema` under `name`, applying the duplicate policy."""
        if not name:
            raise ValueError("ObjectName must not be empty.")
        existing = self._schemas.get(name)
        if existing is not None and existing != schema:
            if self._policy is DuplicatePolicy.REJECT:
                raise DuplicateRegistrationError(
                    f"Object '{name}' is already registered with a different shape."
                )
            self._diagnostics.record(
                DiagnosticKind.DUPLICATE_REGISTRATION,
                f"Object '{name}' was registered again with a different shape; "
                "the last registration wins.",
                subject=name,
            )
        self._schemas[name] = schema

    def resolve(self, name: str) -> str:
        """Return the pointer for `name`; the entry may not exist yet."""
        return schema_reference(name)

    def name_for(self, target: Any) -> str:
        """Return the ObjectName a type (or instance) is registered under."""
        return self._names_by_type.get(_type_of(target), object_name_for(target))

    def reference_for(self, cls: type) -> str:
        """Return the pointer for a type, honoring custom names."""
        return self.resolve(self.name_for(cls))

    def contains(self, name: str) -> bool:
        """Return True when `name` is registered."""
        return name in self._schemas

    def ensure_registered(self, target: Any, name: str | None = None) -> str:
        """Reflect and register `target` unless its name already holds this type.

        A name held by a different type is registered again, so the duplicate
        policy decides between the two shapes. Returns the ObjectName used.
        """
        object_name = self._bind_name(target, name)
        bound = self._types_by_name.get(object_name, _type_of(target))
        if object_name not in self._schemas or bound is not _type_of(target):
            self.reflect_and_register(target, object_name)
        return object_name

    def reflect_and_register(self, target: Any, name: str | None = None) -> str:
        """Reflect `target`, register it and every type it references cyclically."""
        object_name = self._bind_name(target, name)
        reflected = self._reflector.reflect(target)
        self._record_unsupported(reflected.unsupported, subject=object_name)
        self.register(object_name, reflected.schema)
        self._types_by_name[object_name] = _type_of(target)
        LOGGER.debug("Registered schema %s", object_name)
        for referenced in reflected.referenced_types:
            self.ensure_registered(referenced)
        return object_name

    def reflect_inline(self, target: Any) -> Schema:
        """Reflect `target` without registering it, recording unsupported parts."""
        reflected = self._reflector.reflect(target)
        self._record_unsupported(reflected.unsupported, subject=object_name_for(target))
        for referenced in reflected.referenced_types:
            self.ensure_registered(referenced)
        return reflected.schema

    def snapshot(self) -> Mapping[str, Schema]:
        """Return a read-only copy of the registered schemas in insertion order."""
        return MappingProxyType(dict(self._schemas))

    def _record_unsupported(self, messages: tuple[str, ...], *, subject: str) -> None:
        for message in messages:
            self._diagnostics.record(DiagnosticKind.UNSUPPORTED_TYPE, message, subject=subject)

    def _bind_name(self, target: Any, name: str | None) -> str:
        if name:
            self._names_by_type[_type_of(target)] = name
            return name
        return self.name_for(target)


def _type_of(target: Any) -> type:
    return target if isinstance(target, type) else type(target)
