"""Serialization of built documents to JSON or YAML."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

import yaml

from simple_openapi_builder.document_assembly.document_models import Document


class DocumentWriteError(Exception):
    """Raised when a document cannot be rendered or written."""


class OutputFormat(str, Enum):
    """Supported document serializations."""

    JSON = "json"
    YAML = "yaml"

    @classmethod
    def for_path(cls, path: Path | str) -> OutputFormat:
        """Infer the format from a file suffix, defaulting to JSON."""
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            return cls.YAML
        return cls.JSON


def render_document(document: Document, output_format: OutputFormat = OutputFormat.JSON) -> str:
    """Render the document text, keeping the document's key order.

    Raises:
      DocumentWriteError: If the document holds values the format cannot encode.
    """
    data = document.to_dict()
    try:
        if output_format is OutputFormat.YAML:
            return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        raise DocumentWriteError(
            f"Failed to render document as {output_format.value}: {exc}"
        ) from exc


def write_document(
    document: Document,
    output_path: Path | str,
    output_format: OutputFormat | None = None,
) -> Path:
    """Write the rendered document and return the resolved destination path."""
    destination = Path(output_path)
    resolved_format = output_format or OutputFormat.for_path(destination)
    text = render_document(document, resolved_format)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise DocumentWriteError(f"Failed to write document to {destination}: {exc}") from exc
    return destination.resolve()
