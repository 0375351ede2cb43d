"""Document assembly exports."""

from .document_assembler import DocumentBuildError, build_document
from .document_models import OPENAPI_VERSION, Document, InfoMetadata, Server, Tag
from .openapi_builder import OpenAPIBuilder

__all__ = [
    "OPENAPI_VERSION",
    "Document",
    "DocumentBuildError",
    "InfoMetadata",
    "OpenAPIBuilder",
    "Server",
    "Tag",
    "build_document",
]
