"""Registration file loader service."""

from __future__ import annotations

import importlib
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from simple_openapi_builder.api_declarations.declaration_models import (
    APIAction,
    APIController,
    APIObject,
    APIParameter,
    APIRequest,
    APIResponse,
    DeclarationError,
)
from simple_openapi_builder.document_assembly.document_models import InfoMetadata, Server
from simple_openapi_builder.document_assembly.openapi_builder import OpenAPIBuilder
from simple_openapi_builder.schema_reflection.schema_models import Schema, SchemaType
from simple_openapi_builder.schema_registry.registry import DuplicatePolicy

from .runtime_settings import BuildSettings, Registration

_PRIMITIVE_TYPE_NAMES = ("string", "integer", "number", "boolean")


class RegistrationError(Exception):
    """Raised when the registration file is invalid."""


def load_registration(config_path: Path | str) -> Registration:
    """Load and validate the registration file."""
    path = Path(config_path)
    if not path.exists():
        raise RegistrationError(f"Registration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RegistrationError(f"Failed to parse registration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise RegistrationError("Registration root must be a mapping.")

    _extend_import_paths(parsed.get("python_paths"), path.parent)
    info = _parse_info_section(parsed.get("info"))
    servers = _parse_servers_section(parsed.get("servers"))
    settings = _parse_settings_section(parsed.get("settings"))
    try:
        objects = _parse_objects_section(parsed.get("objects"))
        controllers = _parse_controllers_section(parsed.get("controllers"))
    except DeclarationError as exc:
        raise RegistrationError(str(exc)) from exc

    return Registration(
        path=path,
        info=info,
        servers=servers,
        settings=settings,
        objects=objects,
        controllers=controllers,
    )


def create_builder(registration: Registration, *, strict: bool | None = None) -> OpenAPIBuilder:
    """Return a builder holding every declaration of the registration."""
    builder = OpenAPIBuilder(
        registration.info.title,
        registration.info.version,
        registration.info.description,
        terms_of_service=registration.info.terms_of_service,
        strict=registration.settings.strict if strict is None else strict,
        duplicate_policy=registration.settings.duplicate_policy,
    )
    return builder.add(registration.servers).add(registration.objects).add(registration.controllers)


def _parse_info_section(value: Any) -> InfoMetadata:
    section = _require_mapping(value, "info")
    return InfoMetadata(
        title=_require_non_empty_string(section.get("title"), "info.title"),
        version=_require_version(section.get("version")),
        description=_optional_string(section.get("description"), "info.description"),
        terms_of_service=_optional_string(
            section.get("terms_of_service"), "info.terms_of_service"
        ),
    )


def _parse_servers_section(value: Any) -> tuple[Server, ...]:
    servers = []
    for index, entry in enumerate(_optional_sequence(value, "servers")):
        section = _require_mapping(entry, f"servers[{index}]")
        servers.append(
            Server(
                url=_require_non_empty_string(section.get("url"), f"servers[{index}].url"),
                description=_optional_string(
                    section.get("description"), f"servers[{index}].description"
                ),
            )
        )
    return tuple(servers)


def _parse_settings_section(value: Any) -> BuildSettings:
    if value is None:
        return BuildSettings()
    section = _require_mapping(value, "settings")
    strict = section.get("strict", False)
    if not isinstance(strict, bool):
        raise RegistrationError("settings.strict must be a boolean.")
    policy_raw = _require_non_empty_string(
        section.get("duplicate_objects", DuplicatePolicy.OVERWRITE.value),
        "settings.duplicate_objects",
    ).strip().lower()
    try:
        policy = DuplicatePolicy(policy_raw)
    except ValueError as exc:
        raise RegistrationError(
            "settings.duplicate_objects must be 'overwrite' or 'reject'."
        ) from exc
    return BuildSettings(strict=strict, duplicate_policy=policy)


def _parse_objects_section(value: Any) -> tuple[APIObject, ...]:
    objects = []
    for index, entry in enumerate(_optional_sequence(value, "objects")):
        label = f"objects[{index}]"
        section = _require_mapping(entry, label)
        target = _import_reference(section.get("type"), f"{label}.type")
        objects.append(
            APIObject(object=target, name=_optional_string(section.get("name"), f"{label}.name"))
        )
    return tuple(objects)


def _parse_controllers_section(value: Any) -> tuple[APIController, ...]:
    controllers = []
    for index, entry in enumerate(_optional_sequence(value, "controllers")):
        label = f"controllers[{index}]"
        section = _require_mapping(entry, label)
        actions = tuple(
            _parse_action(action, f"{label}.actions[{action_index}]")
            for action_index, action in enumerate(
                _optional_sequence(section.get("actions"), f"{label}.actions")
            )
        )
        controllers.append(
            APIController(
                name=_require_non_empty_string(section.get("name"), f"{label}.name"),
                description=_optional_string(section.get("description"), f"{label}.description"),
                actions=actions,
                external_docs_url=_optional_string(
                    section.get("external_docs_url"), f"{label}.external_docs_url"
                ),
            )
        )
    return tuple(controllers)


def _parse_action(value: Any, label: str) -> APIAction:
    section = _require_mapping(value, label)
    parameters = tuple(
        _parse_parameter(parameter, f"{label}.parameters[{index}]")
        for index, parameter in enumerate(
            _optional_sequence(section.get("parameters"), f"{label}.parameters")
        )
    )
    request_section = section.get("request")
    request = (
        _parse_request(request_section, f"{label}.request") if request_section is not None else None
    )
    responses = tuple(
        _parse_response(response, f"{label}.responses[{index}]")
        for index, response in enumerate(
            _optional_sequence(section.get("responses"), f"{label}.responses")
        )
    )
    return APIAction(
        method=_require_non_empty_string(section.get("method"), f"{label}.method"),
        route=_require_non_empty_string(section.get("route"), f"{label}.route"),
        summary=_optional_string(section.get("summary"), f"{label}.summary"),
        description=_optional_string(section.get("description"), f"{label}.description"),
        parameters=parameters,
        request=request,
        responses=responses,
        deprecated=_optional_bool(section.get("deprecated"), f"{label}.deprecated"),
    )


def _parse_parameter(value: Any, label: str) -> APIParameter:
    section = _require_mapping(value, label)
    required = section.get("required")
    if required is not None and not isinstance(required, bool):
        raise RegistrationError(f"{label}.required must be a boolean.")
    type_name = section.get("type")
    return APIParameter(
        name=_require_non_empty_string(section.get("name"), f"{label}.name"),
        location=_require_non_empty_string(section.get("in", "query"), f"{label}.in"),
        description=_optional_string(section.get("description"), f"{label}.description"),
        required=required,
        deprecated=_optional_bool(section.get("deprecated"), f"{label}.deprecated"),
        allow_empty_value=_optional_bool(
            section.get("allow_empty_value"), f"{label}.allow_empty_value"
        ),
        schema=_primitive_schema(type_name, f"{label}.type") if type_name is not None else None,
    )


def _parse_request(value: Any, label: str) -> APIRequest:
    section = _require_mapping(value, label)
    return APIRequest(
        description=_optional_string(section.get("description"), f"{label}.description"),
        required=_optional_bool(section.get("required"), f"{label}.required"),
        **_parse_body(section, label),
    )


def _parse_response(value: Any, label: str) -> APIResponse:
    section = _require_mapping(value, label)
    code = section.get("code")
    if isinstance(code, int) and not isinstance(code, bool):
        code = str(code)
    return APIResponse(
        code=_require_non_empty_string(code, f"{label}.code"),
        description=_optional_string(section.get("description"), f"{label}.description"),
        **_parse_body(section, label),
    )


def _parse_body(section: Mapping[str, Any], label: str) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if section.get("object") is not None:
        body["object"] = _import_reference(section.get("object"), f"{label}.object")
    if section.get("array") is not None:
        body["array"] = _import_reference(section.get("array"), f"{label}.array")
    if section.get("type") is not None:
        body["schema"] = _primitive_schema(section.get("type"), f"{label}.type")
    content_type = section.get("content_type")
    if content_type is not None:
        body["content_type"] = _require_non_empty_string(content_type, f"{label}.content_type")
    content_types = section.get("content_types")
    if content_types is not None:
        body["content_types"] = tuple(
            _require_non_empty_string(item, f"{label}.content_types")
            for item in _optional_sequence(content_types, f"{label}.content_types")
        )
    return body


def _primitive_schema(value: Any, field_name: str) -> Schema:
    type_name = _require_non_empty_string(value, field_name).strip().lower()
    if type_name not in _PRIMITIVE_TYPE_NAMES:
        raise RegistrationError(
            f"{field_name} must be one of {', '.join(_PRIMITIVE_TYPE_NAMES)}."
        )
    return Schema(type=SchemaType(type_name))


def _import_reference(value: Any, field_name: str) -> Any:
    reference = _require_non_empty_string(value, field_name).strip()
    module_name, separator, attribute_path = reference.partition(":")
    if not separator or not module_name or not attribute_path:
        raise RegistrationError(f"{field_name} must use the 'module:attribute' form: {reference}")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise RegistrationError(f"{field_name} module cannot be imported: {module_name}") from exc
    for attribute in attribute_path.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as exc:
            raise RegistrationError(f"{field_name} attribute not found: {reference}") from exc
    return target


def _extend_import_paths(value: Any, base_path: Path) -> None:
    for entry in _optional_sequence(value, "python_paths"):
        if not isinstance(entry, str):
            raise RegistrationError("python_paths entries must be strings.")
        resolved = str(_resolve_path(base_path, entry))
        if resolved not in sys.path:
            sys.path.insert(0, resolved)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_version(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return _require_non_empty_string(value, "info.version")


def _optional_sequence(value: Any, section_name: str) -> Sequence[Any]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise RegistrationError(f"{section_name} must be a list.")
    return value


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise RegistrationError(f"Registration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise RegistrationError(f"{field_name} must be a string.")
    if not value.strip():
        raise RegistrationError(f"{field_name} must not be empty.")
    return value


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise RegistrationError(f"{field_name} must be a string.")
    return value


def _optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise RegistrationError(f"{field_name} must be a boolean.")
    return value
