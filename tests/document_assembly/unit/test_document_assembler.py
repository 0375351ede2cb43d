"""Document assembler tests."""

from __future__ import annotations

import pytest
from simple_openapi_builder.api_declarations import HTTPMethod
from simple_openapi_builder.build_diagnostics import DiagnosticKind
from simple_openapi_builder.document_assembly import (
    DocumentBuildError,
    InfoMetadata,
    Server,
    Tag,
    build_document,
)
from simple_openapi_builder.operation_assembly import MediaType, Operation, Response
from simple_openapi_builder.path_tree import PathTreeBuilder
from simple_openapi_builder.schema_reflection import Schema, SchemaType

_INFO = InfoMetadata(title="Zoo", version="1.0.0", description="Animals")


def _tree_with_response(schema: Schema):
    tree = PathTreeBuilder()
    tree.add_operation(
        "/animals",
        HTTPMethod.GET,
        Operation(
            method=HTTPMethod.GET,
            summary="List",
            description="List animals",
            responses={
                "200": Response(
                    description="Animals", content={"application/json": MediaType(schema=schema)}
                )
            },
        ),
    )
    return tree.snapshot()


def test_document_renders_openapi_root_fields() -> None:
    document = build_document(
        _INFO,
        _tree_with_response(Schema.reference("#/components/schemas/Animal")),
        {"Animal": Schema(type=SchemaType.OBJECT)},
        servers=[Server(url="https://zoo.example.com", description="Production")],
        tags=[Tag(name="Animals", description="Animal catalogue")],
    )

    rendered = document.to_dict()
    assert list(rendered) == ["openapi", "info", "servers", "tags", "paths", "components"]
    assert rendered["openapi"] == "3.0.3"
    assert rendered["info"] == {"title": "Zoo", "version": "1.0.0", "description": "Animals"}
    assert rendered["servers"] == [{"url": "https://zoo.example.com", "description": "Production"}]
    assert rendered["tags"] == [{"name": "Animals", "description": "Animal catalogue"}]
    assert rendered["components"] == {"schemas": {"Animal": {"type": "object"}}}
    assert document.diagnostics == ()


def test_dangling_reference_is_reported_once() -> None:
    ghost = Schema.reference("#/components/schemas/Ghost")
    document = build_document(
        _INFO,
        _tree_with_response(Schema.array_of(ghost)),
        {"Haunt": Schema(type=SchemaType.OBJECT, properties={"who": ghost})},
    )

    unresolved = [
        item for item in document.diagnostics if item.kind is DiagnosticKind.UNRESOLVED_REFERENCE
    ]
    assert [item.subject for item in unresolved] == ["#/components/schemas/Ghost"]
    assert "GET /animals" in unresolved[0].message


def test_components_keep_registry_order() -> None:
    document = build_document(
        _INFO,
        {},
        {"Zebra": Schema.empty_object(), "Aardvark": Schema.empty_object()},
    )

    assert list(document.to_dict()["components"]["schemas"]) == ["Zebra", "Aardvark"]
    assert document.to_dict()["paths"] == {}


def test_document_mappings_are_read_only() -> None:
    document = build_document(_INFO, {}, {"Animal": Schema.empty_object()})

    with pytest.raises(TypeError):
        document.schemas["Other"] = Schema.empty_object()  # type: ignore[index]


def test_build_error_lists_diagnostics() -> None:
    document = build_document(
        _INFO, _tree_with_response(Schema.reference("#/components/schemas/Ghost")), {}
    )

    error = DocumentBuildError(document.diagnostics)

    assert error.diagnostics == document.diagnostics
    assert "1 problem(s)" in str(error)
    assert "unresolved_reference" in str(error)
