"""Schema registry exports."""

from simple_openapi_builder.schema_reflection.schema_models import schema_reference

from .registry import DuplicatePolicy, DuplicateRegistrationError, SchemaRegistry

__all__ = [
    "DuplicatePolicy",
    "DuplicateRegistrationError",
    "SchemaRegistry",
    "schema_reference",
]
