"""Assembly of one action declaration into one operation."""

from __future__ import annotations

from collections.abc import Sequence
from types import MappingProxyType

from simple_openapi_builder.api_declarations.declaration_models import (
    APIAction,
    APIParameter,
    APIRequest,
    APIResponse,
)
from simple_openapi_builder.reference_resolution.content_resolver import ReferenceResolver

from .operation_models import MediaType, Operation, Parameter, RequestBody, Response


def assemble_operation(
    action: APIAction,
    resolver: ReferenceResolver,
    *,
    tags: Sequence[str] = (),
) -> Operation:
    """Build the operation for one action.

    Parameters keep declaration order and duplicates. Responses keep the order
    their status codes were declared in; a repeated code keeps its first
    position and takes the later declaration.
    """
    responses: dict[str, Response] = {}
    for response in action.responses:
        responses[response.code] = _assemble_response(response, resolver)

    return Operation(
        method=action.method,
        summary=action.summary,
        description=action.description,
        parameters=tuple(
            _assemble_parameter(parameter, resolver) for parameter in action.parameters
        ),
        request_body=(
            _assemble_request_body(action.request, resolver) if action.request is not None else None
        ),
        responses=MappingProxyType(responses),
        tags=tuple(tags),
        deprecated=action.deprecated,
    )


def _assemble_parameter(parameter: APIParameter, resolver: ReferenceResolver) -> Parameter:
    return Parameter(
        name=parameter.name,
        location=parameter.location,
        description=parameter.description,
        required=bool(parameter.required),
        deprecated=parameter.deprecated,
        allow_empty_value=parameter.allow_empty_value,
        schema=resolver.reference(parameter.schema) if parameter.schema is not None else None,
    )


def _assemble_request_body(request: APIRequest, resolver: ReferenceResolver) -> RequestBody:
    return RequestBody(
        description=request.description,
        content=_media_types(request, resolver),
        required=request.required,
    )


def _assemble_response(response: APIResponse, resolver: ReferenceResolver) -> Response:
    return Response(description=response.description, content=_media_types(response, resolver))


def _media_types(
    declaration: APIRequest | APIResponse, resolver: ReferenceResolver
) -> MappingProxyType[str, MediaType]:
    content = resolver.resolve_content(declaration)
    return MappingProxyType(
        {content_type: MediaType(schema=schema) for content_type, schema in content.items()}
    )
