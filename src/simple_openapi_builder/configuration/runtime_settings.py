"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from simple_openapi_builder.api_declarations.declaration_models import APIController, APIObject
from simple_openapi_builder.document_assembly.document_models import InfoMetadata, Server
from simple_openapi_builder.schema_registry.registry import DuplicatePolicy


@dataclass(frozen=True)
class BuildSettings:
    """How the build treats diagnostics and duplicate objects."""

    strict: bool = False
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.OVERWRITE


@dataclass(frozen=True)
class Registration:
    """Top-level registration aggregate loaded from one file."""

    path: Path
    info: InfoMetadata
    servers: tuple[Server, ...]
    settings: BuildSettings
    objects: tuple[APIObject, ...]
    controllers: tuple[APIController, ...]
