"""Operation assembly exports."""

from .operation_assembler import assemble_operation
from .operation_models import MediaType, Operation, Parameter, RequestBody, Response

__all__ = [
    "MediaType",
    "Operation",
    "Parameter",
    "RequestBody",
    "Response",
    "assemble_operation",
]
