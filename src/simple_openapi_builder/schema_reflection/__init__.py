"""Schema reflection exports."""

from .schema_models import (
    COMPONENTS_SCHEMAS_PREFIX,
    ReflectedSchema,
    Schema,
    SchemaType,
    schema_reference,
)
from .type_reflector import SchemaReflector, object_name_for

__all__ = [
    "COMPONENTS_SCHEMAS_PREFIX",
    "ReflectedSchema",
    "Schema",
    "SchemaReflector",
    "SchemaType",
    "object_name_for",
    "schema_reference",
]
