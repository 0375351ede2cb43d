"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "openapi-registration.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Registration file for simple-openapi-builder.
# Replace every <REQUIRED> placeholder before running build.
# Replace <OPTIONAL> placeholders only when your API needs them.

info:
  title: "<REQUIRED>"
  version: "<REQUIRED>"
  description: "<OPTIONAL>"

servers:
  - url: "<OPTIONAL>"
    description: "<OPTIONAL>"

settings:
  # strict: fail the build instead of reporting diagnostics.
  strict: false
  # duplicate_objects: overwrite (last registration wins) or reject.
  duplicate_objects: overwrite

# Directories, relative to this file, searched when importing object types.
python_paths:
  - "."

# Object types use "module:attribute" import strings.
objects:
  - type: "<REQUIRED>"
    # name: "<OPTIONAL>"

controllers:
  - name: "<REQUIRED>"
    description: "<OPTIONAL>"
    actions:
      - method: get
        route: "<REQUIRED>"
        summary: "<OPTIONAL>"
        description: "<OPTIONAL>"
        parameters:
          - name: "<OPTIONAL>"
            in: query
            description: "<OPTIONAL>"
        # request:
        #   description: "<OPTIONAL>"
        #   object: "<OPTIONAL>"
        #   content_type: application/json
        responses:
          - code: "200"
            description: "<REQUIRED>"
            # Choose at most one of object, array or type.
            object: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML registration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder registration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Registration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
