"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import RegistrationError, create_builder, load_registration
from .runtime_settings import BuildSettings, Registration

__all__ = [
    "BuildSettings",
    "Registration",
    "RegistrationError",
    "create_builder",
    "load_registration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
