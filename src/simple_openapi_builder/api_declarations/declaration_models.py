"""Declarative registration entities consumed by the document build."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DeclarationError(Exception):
    """Raised when a declaration is internally inconsistent."""


class HTTPMethod(str, Enum):
    """HTTP methods an operation can be registered under."""

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    PATCH = "PATCH"
    TRACE = "TRACE"

    @classmethod
    def parse(cls, value: HTTPMethod | str) -> HTTPMethod:
        """Return the method for a case-insensitive name."""
        if isinstance(value, HTTPMethod):
            return value
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            raise DeclarationError(f"Unsupported HTTP method: {value}") from exc


class ParameterLocation(str, Enum):
    """Where a parameter is carried in the request."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"

    @classmethod
    def parse(cls, value: ParameterLocation | str) -> ParameterLocation:
        """Return the location for a case-insensitive name."""
        if isinstance(value, ParameterLocation):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise DeclarationError(f"Unsupported parameter location: {value}") from exc


@dataclass(frozen=True)
class PropertyDescription:
    """One property reported by a type's `describe()` classmethod."""

    name: str
    type: Any
    optional: bool = False


@dataclass(frozen=True)
class APIParameter:  # pylint: disable=too-many-instance-attributes
    """Operation parameter declaration.

    `required` left as None resolves to True for path parameters and to False
    everywhere else. Path parameters cannot be declared optional.
    """

    name: str
    location: ParameterLocation = ParameterLocation.QUERY
    description: str | None = None
    required: bool | None = None
    deprecated: bool = False
    allow_empty_value: bool = False
    schema: Any = None

    def __post_init__(self) -> None:
        if not self.name:
            raise DeclarationError("Parameter name must not be empty.")
        location = ParameterLocation.parse(self.location)
        object.__setattr__(self, "location", location)
        if self.required is None:
            object.__setattr__(self, "required", location is ParameterLocation.PATH)
        elif location is ParameterLocation.PATH and not self.required:
            raise DeclarationError(f"Path parameter '{self.name}' must be required.")


def _validate_body(owner: str, body: _BodyDeclaration) -> None:
    candidates = (("object", body.object), ("array", body.array), ("schema", body.schema))
    declared = [label for label, value in candidates if value is not None]
    if len(declared) > 1:
        raise DeclarationError(
            f"{owner} must declare at most one of object, array or schema, "
            f"got {', '.join(declared)}."
        )
    if body.content_type is not None and body.content_types:
        raise DeclarationError(f"{owner} must not set both content_type and content_types.")
    if isinstance(body.content_types, str):
        raise DeclarationError(f"{owner} content_types must be a sequence of strings.")


@dataclass(frozen=True, kw_only=True)
class _BodyDeclaration:
    """Payload shared by request and response declarations."""

    description: str | None = None
    object: Any = None
    array: Any = None
    schema: Any = None
    content_type: str | None = None
    content_types: Sequence[str] = ()

    @property
    def has_content(self) -> bool:
        """Return True when a payload type was declared."""
        return any(value is not None for value in (self.object, self.array, self.schema))

    @property
    def declared_content_types(self) -> tuple[str, ...]:
        """Return explicitly declared content types, in declaration order."""
        if self.content_type is not None:
            return (self.content_type,)
        return tuple(self.content_types)


@dataclass(frozen=True, kw_only=True)
class APIRequest(_BodyDeclaration):
    """Request body declaration."""

    required: bool = False

    def __post_init__(self) -> None:
        _validate_body("Request", self)


@dataclass(frozen=True, kw_only=True)
class APIResponse(_BodyDeclaration):
    """Response declaration keyed by status code."""

    code: str

    def __post_init__(self) -> None:
        if not isinstance(self.code, str) or not self.code.strip():
            raise DeclarationError(f"Response code must be a non-empty string: {self.code!r}")
        _validate_body(f"Response {self.code}", self)


@dataclass(frozen=True)
class APIAction:  # pylint: disable=too-many-instance-attributes
    """One HTTP operation on one route."""

    method: HTTPMethod
    route: str
    summary: str | None = None
    description: str | None = None
    parameters: Sequence[APIParameter] = ()
    request: APIRequest | None = None
    responses: Sequence[APIResponse] = ()
    deprecated: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HTTPMethod.parse(self.method))
        if not self.route:
            raise DeclarationError("Action route must not be empty.")
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "responses", tuple(self.responses))


@dataclass(frozen=True)
class APIController:
    """Named group of actions, rendered as a document tag."""

    name: str
    description: str | None = None
    actions: Sequence[APIAction] = field(default_factory=tuple)
    external_docs_url: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise DeclarationError("Controller name must not be empty.")
        object.__setattr__(self, "actions", tuple(self.actions))


@dataclass(frozen=True)
class APIObject:
    """Object registration seed: a representative instance or a type."""

    object: Any
    name: str | None = None
