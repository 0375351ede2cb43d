"""Schema reflector tests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Literal, Optional

from simple_openapi_builder.api_declarations import PropertyDescription
from simple_openapi_builder.schema_reflection import Schema, SchemaReflector, SchemaType


@dataclass
class Animal:
    name: str
    age: int | None = None


class Color(str, Enum):
    RED = "red"
    GREEN = "green"


class Priority(Enum):
    LOW = 1
    HIGH = 2


@dataclass
class Node:
    value: int
    children: list[Node]
    parent: Node | None = None


@dataclass
class Person:
    name: str
    pet: Pet


@dataclass
class Pet:
    name: str
    owner: Optional[Person] = None


@dataclass
class Holder:
    payload: Any
    tags: dict[str, int]
    mood: Literal["calm", "angry"]
    _secret: str = ""


@dataclass
class Visit:
    at: datetime
    color: Color
    priority: Priority
    scores: tuple[float, ...]
    flags: set[bool]


class Plain:
    def __init__(self, name, age):
        self.name = name
        self.age = age


class Described:
    @classmethod
    def describe(cls):
        return [
            PropertyDescription(name="id", type=int),
            PropertyDescription(name="label", type=str, optional=True),
        ]


class Specimen:
    kind: str
    weight: float | None


def test_dataclass_reflects_properties_in_declaration_order() -> None:
    reflected = SchemaReflector().reflect(Animal)

    assert reflected.schema.to_dict() == {
        "type": "object",
        "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
        "required": ["name"],
    }
    assert list(reflected.schema.properties) == ["name", "age"]
    assert reflected.referenced_types == ()
    assert reflected.unsupported == ()


def test_instance_of_dataclass_reflects_its_type() -> None:
    reflected = SchemaReflector().reflect(Animal(name="Dog", age=21))

    assert reflected.schema == SchemaReflector().reflect(Animal).schema


def test_annotated_class_without_dataclass_is_reflected() -> None:
    schema = SchemaReflector().reflect(Specimen).schema

    assert schema.to_dict() == {
        "type": "object",
        "properties": {"kind": {"type": "string"}, "weight": {"type": "number"}},
        "required": ["kind"],
    }


def test_describe_classmethod_drives_reflection() -> None:
    schema = SchemaReflector().reflect(Described).schema

    assert schema.to_dict() == {
        "type": "object",
        "properties": {"id": {"type": "integer"}, "label": {"type": "string"}},
        "required": ["id"],
    }


def test_enumerations_list_raw_values() -> None:
    reflected = SchemaReflector().reflect(Visit)
    properties = reflected.schema.to_dict()["properties"]

    assert properties["at"] == {"type": "string", "format": "date-time"}
    assert properties["color"] == {"type": "string", "enum": ["red", "green"]}
    assert properties["priority"] == {"type": "integer", "enum": [1, 2]}
    assert properties["scores"] == {"type": "array", "items": {"type": "number"}}
    assert properties["flags"] == {"type": "array", "items": {"type": "boolean"}}


def test_self_referencing_type_emits_reference_instead_of_recursing() -> None:
    reflected = SchemaReflector().reflect(Node)

    assert reflected.schema.to_dict() == {
        "type": "object",
        "properties": {
            "value": {"type": "integer"},
            "children": {"type": "array", "items": {"$ref": "#/components/schemas/Node"}},
            "parent": {"$ref": "#/components/schemas/Node"},
        },
        "required": ["value", "children"],
    }
    assert reflected.referenced_types == (Node,)


def test_transitive_cycle_inlines_until_re_entry() -> None:
    reflected = SchemaReflector().reflect(Person)
    pet = reflected.schema.properties["pet"]

    assert pet.type is SchemaType.OBJECT
    assert pet.properties["owner"] == Schema.reference("#/components/schemas/Person")
    assert pet.required == ("name",)
    assert reflected.referenced_types == (Person,)


def test_reference_factory_controls_cyclic_pointers() -> None:
    reflector = SchemaReflector(
        reference_for=lambda cls: f"#/components/schemas/Custom{cls.__name__}"
    )

    schema = reflector.reflect(Node).schema

    assert schema.properties["parent"].ref == "#/components/schemas/CustomNode"


def test_unsupported_types_degrade_to_empty_objects() -> None:
    reflected = SchemaReflector().reflect(Holder)
    properties = reflected.schema.to_dict()["properties"]

    assert properties["payload"] == {"type": "object"}
    assert properties["tags"] == {"type": "object", "additionalProperties": {"type": "integer"}}
    assert properties["mood"] == {"type": "string", "enum": ["calm", "angry"]}
    assert "_secret" not in properties
    assert len(reflected.unsupported) == 1
    assert reflected.unsupported[0].startswith("Holder.payload")


def test_plain_instance_is_reflected_from_attribute_values() -> None:
    reflected = SchemaReflector().reflect(Plain("Dog", 21))

    assert reflected.schema.to_dict() == {
        "type": "object",
        "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
        "required": ["name", "age"],
    }


def test_plain_instance_with_missing_value_marks_property_optional() -> None:
    reflected = SchemaReflector().reflect(Plain("Dog", None))

    assert reflected.schema.required == ("name",)
    assert reflected.schema.properties["age"] == Schema.empty_object()
    assert len(reflected.unsupported) == 1


def test_plain_type_without_structure_is_an_empty_object() -> None:
    reflected = SchemaReflector().reflect(Plain)

    assert reflected.schema.to_dict() == {"type": "object"}
    assert len(reflected.unsupported) == 1


def test_self_referencing_instance_graph_terminates() -> None:
    root = Plain("root", 1)
    root.parent = root  # type: ignore[attr-defined]

    reflected = SchemaReflector().reflect(root)

    assert reflected.schema.properties["parent"] == Schema.reference("#/components/schemas/Plain")
    assert reflected.referenced_types == (Plain,)


def test_primitive_and_generic_expressions_are_reflected_inline() -> None:
    reflector = SchemaReflector()

    assert reflector.reflect(bool).schema == Schema(type=SchemaType.BOOLEAN)
    assert reflector.reflect(list[int]).schema.to_dict() == {
        "type": "array",
        "items": {"type": "integer"},
    }
    assert reflector.reflect(int | str).schema == Schema.empty_object()


def test_object_type_detection() -> None:
    assert SchemaReflector.is_object_type(Animal) is True
    assert SchemaReflector.is_object_type(Plain) is True
    assert SchemaReflector.is_object_type(Animal(name="Dog")) is True
    assert SchemaReflector.is_object_type(int) is False
    assert SchemaReflector.is_object_type(Color) is False
    assert SchemaReflector.is_object_type(list[Animal]) is False
    assert SchemaReflector.is_object_type(dict) is False


class Price(Enum):
    LOW = Decimal("1.5")
    HIGH = Decimal("2.5")


class Mixed(Enum):
    ONE = 1
    WORD = "word"
    RAW = b"raw"


@dataclass
class Item:
    price: Price
    label: Mixed
    favourite: Literal[Color.RED, Color.GREEN]


def test_enum_values_are_json_primitives() -> None:
    properties = SchemaReflector().reflect(Item).schema.to_dict()["properties"]

    assert properties["price"] == {"type": "number", "enum": [1.5, 2.5]}
    assert properties["label"] == {"type": "string", "enum": ["1", "word", "raw"]}
    assert properties["favourite"] == {"type": "string", "enum": ["red", "green"]}
