"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from simple_openapi_builder.configuration import (
    DEFAULT_CONFIG_FILENAME,
    RegistrationError,
    create_builder,
    load_registration,
    write_placeholder_configuration,
)
from simple_openapi_builder.document_assembly import DocumentBuildError
from simple_openapi_builder.document_writing import (
    DocumentWriteError,
    OutputFormat,
    render_document,
    write_document,
)
from simple_openapi_builder.schema_registry import DuplicateRegistrationError

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="simple-openapi-builder")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log build progress.")
def cli(verbose: bool) -> None:
    """Build OpenAPI documents from declarative registrations."""
    _configure_logging(verbose)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML registration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML registration file with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="build")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON registration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the OpenAPI document to write; prints to stdout when omitted",
)
@click.option(
    "--format",
    "output_format",
    required=False,
    type=click.Choice([item.value for item in OutputFormat]),
    help="Output format; inferred from the output suffix when omitted",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail instead of reporting diagnostics.",
)
def build(
    config_path: str, output_path: str | None, output_format: str | None, strict: bool
) -> None:
    """Build the OpenAPI document described by a registration file."""
    resolved_format = OutputFormat(output_format) if output_format else None
    try:
        registration = load_registration(config_path)
        document = create_builder(registration, strict=True if strict else None).build()
        if output_path is None:
            click.echo(render_document(document, resolved_format or OutputFormat.JSON), nl=False)
            destination = None
        else:
            destination = write_document(document, output_path, resolved_format)
    except (
        RegistrationError,
        DocumentBuildError,
        DuplicateRegistrationError,
        DocumentWriteError,
    ) as exc:
        raise CliError(str(exc)) from exc
    for diagnostic in document.diagnostics:
        click.echo(f"warning: {diagnostic}", err=True)
    if destination is not None:
        click.echo(str(destination))


class _ClickEchoHandler(logging.Handler):
    """Writes log records to the current click stderr stream."""

    def emit(self, record: logging.LogRecord) -> None:
        click.echo(self.format(record), err=True)


def _configure_logging(verbose: bool) -> None:
    root_logger = logging.getLogger("simple_openapi_builder")
    root_logger.setLevel(logging.DEBUG if verbose else logging.ERROR)
    if not root_logger.handlers:
        handler = _ClickEchoHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root_logger.addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
