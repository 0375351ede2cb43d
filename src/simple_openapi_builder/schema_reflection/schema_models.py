"""Schema reflection entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SchemaType(str, Enum):
    """Structural types a schema can describe."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Schema:  # pylint: disable=too-many-instance-attributes
    """Structural description of one type.

    A schema carrying `ref` is a pointer and holds no structural fields.
    `properties` keeps declaration order; `required` lists property names in
    the same order.
    """

    type: SchemaType | None = None
    ref: str | None = None
    format: str | None = None
    items: Schema | None = None
    properties: Mapping[str, Schema] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    enum: tuple[Any, ...] = ()
    additional_properties: Schema | None = None

    @classmethod
    def reference(cls, ref: str) -> Schema:
        """Return a pointer schema."""
        return cls(ref=ref)

    @classmethod
    def array_of(cls, items: Schema) -> Schema:
        """Return an array schema wrapping `items`."""
        return cls(type=SchemaType.ARRAY, items=items)

    @classmethod
    def empty_object(cls) -> Schema:
        """Return the schema used for types without extractable structure."""
        return cls(type=SchemaType.OBJECT)

    def references(self) -> tuple[str, ...]:
        """Return every `ref` reachable from this schema, depth first."""
        found: list[str] = []
        if self.ref is not None:
            found.append(self.ref)
        for child in self._children():
            found.extend(child.references())
        return tuple(found)

    def _children(self) -> tuple[Schema, ...]:
        children: list[Schema] = []
        if self.items is not None:
            children.append(self.items)
        children.extend(self.properties.values())
        if self.additional_properties is not None:
            children.append(self.additional_properties)
        return tuple(children)

    def to_dict(self) -> dict[str, Any]:
        """Render the OpenAPI schema object."""
        if self.ref is not None:
            return {"$ref": self.ref}
        rendered: dict[str, Any] = {}
        if self.type is not None:
            rendered["type"] = self.type.value
        if self.format is not None:
            rendered["format"] = self.format
        if self.items is not None:
            rendered["items"] = self.items.to_dict()
        if self.properties:
            rendered["properties"] = {
                name: child.to_dict() for name, child in self.properties.items()
            }
        if self.required:
            rendered["required"] = list(self.required)
        if self.enum:
            rendered["enum"] = list(self.enum)
        if self.additional_properties is not None:
            rendered["additionalProperties"] = self.additional_properties.to_dict()
        return rendered


@dataclass(frozen=True)
class ReflectedSchema:
    """Outcome of reflecting one root type."""

    schema: Schema
    referenced_types: tuple[type, ...] = ()
    unsupported: tuple[str, ...] = ()


COMPONENTS_SCHEMAS_PREFIX = "#/components/schemas/"


def schema_reference(name: str) -> str:
    """Return the pointer string for a registered ObjectName."""
    return f"{COMPONENTS_SCHEMAS_PREFIX}{name}"
