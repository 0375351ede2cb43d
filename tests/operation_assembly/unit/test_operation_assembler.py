"""Operation assembler tests."""

from __future__ import annotations

from dataclasses import dataclass

from simple_openapi_builder.api_declarations import (
    APIAction,
    APIParameter,
    APIRequest,
    APIResponse,
    HTTPMethod,
    ParameterLocation,
)
from simple_openapi_builder.operation_assembly import assemble_operation
from simple_openapi_builder.reference_resolution import ReferenceResolver
from simple_openapi_builder.schema_reflection import Schema, SchemaType
from simple_openapi_builder.schema_registry import SchemaRegistry


@dataclass
class Animal:
    name: str


def _action() -> APIAction:
    return APIAction(
        method=HTTPMethod.POST,
        route="/animals/{id}",
        summary="Create animal",
        description="Creates one animal",
        parameters=[
            APIParameter(name="id", location=ParameterLocation.PATH, description="Identifier"),
            APIParameter(name="id", location=ParameterLocation.QUERY, description="Shadow"),
            APIParameter(name="X-Trace", location=ParameterLocation.HEADER, schema=str),
        ],
        request=APIRequest(description="New animal", object=Animal, required=True),
        responses=[
            APIResponse(code="201", description="Created", object=Animal),
            APIResponse(code="400", description="Invalid animal"),
        ],
    )


def _assemble(action: APIAction):
    return assemble_operation(action, ReferenceResolver(SchemaRegistry()), tags=("Animals",))


def test_summary_description_and_method_are_copied_verbatim() -> None:
    operation = _assemble(_action())

    assert operation.method is HTTPMethod.POST
    assert operation.summary == "Create animal"
    assert operation.description == "Creates one animal"
    assert operation.tags == ("Animals",)


def test_parameters_keep_declaration_order_and_duplicates() -> None:
    operation = _assemble(_action())

    assert [(item.name, item.location) for item in operation.parameters] == [
        ("id", ParameterLocation.PATH),
        ("id", ParameterLocation.QUERY),
        ("X-Trace", ParameterLocation.HEADER),
    ]
    assert operation.parameters[0].required is True
    assert operation.parameters[2].schema == Schema(type=SchemaType.STRING)


def test_request_body_resolves_reference_and_keeps_description() -> None:
    operation = _assemble(_action())

    assert operation.request_body is not None
    assert operation.request_body.to_dict() == {
        "description": "New animal",
        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Animal"}}},
        "required": True,
    }


def test_response_without_payload_only_has_description() -> None:
    operation = _assemble(_action())

    assert list(operation.responses) == ["201", "400"]
    assert operation.responses["400"].to_dict() == {"description": "Invalid animal"}


def test_assembly_is_deterministic() -> None:
    first = _assemble(_action()).to_dict()
    second = _assemble(_action()).to_dict()

    assert first == second


def test_operation_renders_openapi_fields() -> None:
    rendered = _assemble(_action()).to_dict()

    assert list(rendered) == [
        "tags",
        "summary",
        "description",
        "parameters",
        "requestBody",
        "responses",
    ]
    assert rendered["parameters"][1] == {
        "name": "id",
        "in": "query",
        "description": "Shadow",
        "required": False,
        "deprecated": False,
        "allowEmptyValue": False,
    }


def test_operation_lists_carried_schemas() -> None:
    operation = _assemble(_action())

    assert operation.schemas() == (
        Schema(type=SchemaType.STRING),
        Schema.reference("#/components/schemas/Animal"),
        Schema.reference("#/components/schemas/Animal"),
    )


def test_missing_texts_are_left_out_of_the_rendering() -> None:
    action = APIAction(
        method=HTTPMethod.GET,
        route="/animals",
        parameters=[APIParameter(name="limit")],
        request=APIRequest(object=Animal),
    )

    rendered = _assemble(action).to_dict()

    assert "summary" not in rendered
    assert "description" not in rendered
    assert rendered["parameters"] == [
        {
            "name": "limit",
            "in": "query",
            "required": False,
            "deprecated": False,
            "allowEmptyValue": False,
        }
    ]
    assert "description" not in rendered["requestBody"]
