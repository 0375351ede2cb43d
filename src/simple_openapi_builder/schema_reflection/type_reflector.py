"""Type and instance reflection into structural schemas."""

from __future__ import annotations

import dataclasses
import logging
import types
from collections import abc
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import (
    Annotated,
    Any,
    ClassVar,
    Literal,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)
from uuid import UUID

from simple_openapi_builder.api_declarations.declaration_models import PropertyDescription

from .schema_models import ReflectedSchema, Schema, SchemaType, schema_reference

LOGGER = logging.getLogger(__name__)

# Order matters: bool is an int subclass and datetime a date subclass.
_PRIMITIVE_TYPES: tuple[tuple[type, SchemaType, str | None], ...] = (
    (bool, SchemaType.BOOLEAN, None),
    (int, SchemaType.INTEGER, None),
    (float, SchemaType.NUMBER, None),
    (Decimal, SchemaType.NUMBER, None),
    (str, SchemaType.STRING, None),
    (datetime, SchemaType.STRING, "date-time"),
    (date, SchemaType.STRING, "date"),
    (UUID, SchemaType.STRING, "uuid"),
    (bytes, SchemaType.STRING, "binary"),
)
_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    abc.Sequence,
    abc.MutableSequence,
    abc.Set,
    abc.MutableSet,
    abc.Collection,
    abc.Iterable,
)
_MAPPING_ORIGINS = (dict, abc.Mapping, abc.MutableMapping)
_UNION_ORIGINS = (Union, types.UnionType)

ReferenceFactory = Callable[[type], str]


def object_name_for(target: Any) -> str:
    """Return the simple ObjectName for a type or a representative instance."""
    cls = target if isinstance(target, type) else type(target)
    return cls.__name__


def _default_reference(cls: type) -> str:
    return schema_reference(object_name_for(cls))


@dataclass
class _ReflectionSession:
    """Mutable state of one root reflection."""

    in_progress: list[type]
    referenced: list[type]
    unsupported: list[str]

    def mark_unsupported(self, location: str, target: Any) -> Schema:
        message = f"{location}: no structural information for {target!r}"
        LOGGER.debug("Unsupported type during reflection: %s", message)
        self.unsupported.append(message)
        return Schema.empty_object()


class SchemaReflector:
    """Converts host types and representative instances into schemas.

    Object types are inlined recursively. A type met again while it is still
    being reflected is emitted as a `$ref`, and reported on the result so the
    caller can register it.
    """

    def __init__(self, *, reference_for: ReferenceFactory | None = None) -> None:
        self._reference_for = reference_for or _default_reference

    def reflect(self, target: Any) -> ReflectedSchema:
        """Reflect a type expression or a representative instance."""
        session = _ReflectionSession(in_progress=[], referenced=[], unsupported=[])
        location = _display_name(target)
        if _is_type_expression(target):
            schema = self._reflect_type(target, session, location)
        else:
            schema = self._reflect_value(target, session, location)
        return ReflectedSchema(
            schema=schema,
            referenced_types=tuple(session.referenced),
            unsupported=tuple(session.unsupported),
        )

    @staticmethod
    def is_object_type(target: Any) -> bool:
        """Return True when `target` is a user type (or instance of one) to register by name."""
        if target is Any or get_origin(target) is not None:
            return False
        cls = target if isinstance(target, type) else type(target)
        if _primitive_entry(cls) is not None or issubclass(cls, Enum):
            return False
        if cls.__module__ == "builtins":
            return False
        if isinstance(target, type):
            return True
        return _has_declared_structure(cls) or hasattr(target, "__dict__")

    def _reflect_type(self, target: Any, session: _ReflectionSession, location: str) -> Schema:
        if target is Any or target is None or target is type(None):
            return session.mark_unsupported(location, target)

        origin = get_origin(target)
        args = get_args(target)
        if origin is Annotated:
            return self._reflect_type(args[0], session, location)
        if origin in _UNION_ORIGINS:
            inner, _ = _unwrap_optional(target)
            if inner is target:
                return session.mark_unsupported(location, target)
            return self._reflect_type(inner, session, location)
        if origin is Literal:
            return _literal_schema(args)
        if origin is tuple:
            return self._reflect_tuple(args, session, location)
        if origin in _SEQUENCE_ORIGINS:
            item = args[0] if args else Any
            return Schema.array_of(self._reflect_type(item, session, f"{location}[]"))
        if origin in _MAPPING_ORIGINS:
            value_type = args[1] if len(args) == 2 else Any
            return Schema(
                type=SchemaType.OBJECT,
                additional_properties=self._reflect_type(value_type, session, f"{location}{{}}"),
            )
        if not isinstance(target, type):
            return session.mark_unsupported(location, target)

        if issubclass(target, Enum):
            return _enum_schema(target)
        primitive = _primitive_entry(target)
        if primitive is not None:
            return Schema(type=primitive[0], format=primitive[1])
        if target in (list, tuple, set, frozenset):
            return Schema.array_of(session.mark_unsupported(f"{location}[]", Any))
        if target is dict:
            return Schema.empty_object()
        if _has_declared_structure(target):
            return self._reflect_object(target, session)
        return session.mark_unsupported(location, target)

    def _reflect_tuple(
        self, args: tuple[Any, ...], session: _ReflectionSession, location: str
    ) -> Schema:
        if len(args) == 2 and args[1] is Ellipsis:
            item: Any = args[0]
        elif args and all(arg == args[0] for arg in args):
            item = args[0]
        else:
            item = Any
        return Schema.array_of(self._reflect_type(item, session, f"{location}[]"))

    def _reflect_object(self, cls: type, session: _ReflectionSession) -> Schema:
        if cls in session.in_progress:
            return self._cyclic_reference(cls, session)

        session.in_progress.append(cls)
        try:
            try:
                descriptions = _describe_type(cls)
            except (NameError, TypeError) as exc:
                LOGGER.debug("Failed to resolve annotations of %s: %s", cls.__name__, exc)
                return session.mark_unsupported(cls.__name__, cls)
            properties: dict[str, Schema] = {}
            required: list[str] = []
            for description in descriptions:
                if description.name.startswith("_"):
                    continue
                properties[description.name] = self._reflect_type(
                    description.type, session, f"{cls.__name__}.{description.name}"
                )
                if not description.optional:
                    required.append(description.name)
        finally:
            session.in_progress.pop()
        return Schema(type=SchemaType.OBJECT, properties=properties, required=tuple(required))

    def _reflect_value(self, value: Any, session: _ReflectionSession, location: str) -> Schema:
        if value is None:
            return session.mark_unsupported(location, value)
        cls = type(value)
        if isinstance(value, Enum) or _primitive_entry(cls) is not None:
            return self._reflect_type(cls, session, location)
        if _has_declared_structure(cls):
            return self._reflect_object(cls, session)
        if isinstance(value, Mapping):
            return self._reflect_attributes(value.items(), session, location)
        if isinstance(value, (list, tuple, set, frozenset)):
            if not value:
                return Schema.array_of(session.mark_unsupported(f"{location}[]", value))
            first = next(iter(value))
            return Schema.array_of(self._reflect_value(first, session, f"{location}[]"))
        if hasattr(value, "__dict__"):
            if cls in session.in_progress:
                return self._cyclic_reference(cls, session)
            return self._reflect_attributes(vars(value).items(), session, location, owner=cls)
        return session.mark_unsupported(location, value)

    def _reflect_attributes(
        self,
        attributes: abc.Iterable[tuple[Any, Any]],
        session: _ReflectionSession,
        location: str,
        *,
        owner: type | None = None,
    ) -> Schema:
        if owner is not None:
            session.in_progress.append(owner)
        try:
            properties: dict[str, Schema] = {}
            required: list[str] = []
            for key, attribute in attributes:
                name = str(key)
                if name.startswith("_"):
                    continue
                properties[name] = self._reflect_value(attribute, session, f"{location}.{name}")
                if attribute is not None:
                    required.append(name)
        finally:
            if owner is not None:
                session.in_progress.pop()
        return Schema(type=SchemaType.OBJECT, properties=properties, required=tuple(required))

    def _cyclic_reference(self, cls: type, session: _ReflectionSession) -> Schema:
        if cls not in session.referenced:
            session.referenced.append(cls)
        return Schema.reference(self._reference_for(cls))


def _describe_type(cls: type) -> tuple[PropertyDescription, ...]:
    describe = getattr(cls, "describe", None)
    if callable(describe):
        return tuple(_as_description(entry) for entry in describe())

    hints = get_type_hints(cls, include_extras=True)
    if dataclasses.is_dataclass(cls):
        names = [item.name for item in dataclasses.fields(cls)]
    else:
        names = [name for name, hint in hints.items() if get_origin(hint) is not ClassVar]

    descriptions = []
    for name in names:
        declared, optional = _unwrap_optional(hints.get(name, Any))
        descriptions.append(PropertyDescription(name=name, type=declared, optional=optional))
    return tuple(descriptions)


def _as_description(entry: Any) -> PropertyDescription:
    if isinstance(entry, PropertyDescription):
        return entry
    if isinstance(entry, tuple) and len(entry) in (2, 3):
        return PropertyDescription(*entry)
    raise TypeError(f"describe() entries must be PropertyDescription or tuples, got {entry!r}")


def _unwrap_optional(target: Any) -> tuple[Any, bool]:
    if get_origin(target) is Annotated:
        target = get_args(target)[0]
    if get_origin(target) not in _UNION_ORIGINS:
        return target, False
    members = get_args(target)
    non_none = [member for member in members if member is not type(None)]
    optional = len(non_none) != len(members)
    if len(non_none) == 1:
        return non_none[0], optional
    return target, optional


def _has_declared_structure(cls: type) -> bool:
    if callable(getattr(cls, "describe", None)) or dataclasses.is_dataclass(cls):
        return True
    if issubclass(cls, Enum) or _primitive_entry(cls) is not None:
        return False
    return any(getattr(klass, "__annotations__", None) for klass in cls.__mro__[:-1])


def _primitive_entry(cls: type) -> tuple[SchemaType, str | None] | None:
    for candidate, schema_type, schema_format in _PRIMITIVE_TYPES:
        if issubclass(cls, candidate):
            return schema_type, schema_format
    return None


def _enum_schema(cls: type[Enum]) -> Schema:
    return _literal_schema(tuple(member.value for member in cls))


def _literal_schema(raw_values: tuple[Any, ...]) -> Schema:
    values = tuple(_plain_value(value) for value in raw_values)
    present = [value for value in values if value is not None]
    if present and all(isinstance(value, bool) for value in present):
        return Schema(type=SchemaType.BOOLEAN, enum=values)
    if present and all(_is_number(value) for value in present):
        integral = all(isinstance(value, int) for value in present)
        return Schema(type=SchemaType.INTEGER if integral else SchemaType.NUMBER, enum=values)
    return Schema(
        type=SchemaType.STRING,
        enum=tuple(
            value if value is None or isinstance(value, str) else str(value) for value in values
        ),
    )


def _plain_value(value: Any) -> Any:
    """Return a JSON primitive for an enum or literal value."""
    if isinstance(value, Enum):
        return _plain_value(value.value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_type_expression(target: Any) -> bool:
    return isinstance(target, type) or get_origin(target) is not None


def _display_name(target: Any) -> str:
    if isinstance(target, type):
        return target.__name__
    if get_origin(target) is not None:
        return repr(target)
    return type(target).__name__
