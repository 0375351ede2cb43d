"""Document writing exports."""

from .document_writer import DocumentWriteError, OutputFormat, render_document, write_document

__all__ = ["DocumentWriteError", "OutputFormat", "render_document", "write_document"]
