"""API declaration exports."""

from .declaration_models import (
    APIAction,
    APIController,
    APIObject,
    APIParameter,
    APIRequest,
    APIResponse,
    DeclarationError,
    HTTPMethod,
    ParameterLocation,
    PropertyDescription,
)

__all__ = [
    "APIAction",
    "APIController",
    "APIObject",
    "APIParameter",
    "APIRequest",
    "APIResponse",
    "DeclarationError",
    "HTTPMethod",
    "ParameterLocation",
    "PropertyDescription",
]
