"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from webext_schema_generator.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from webext_schema_generator.run_execution import (
    GenerationRequest,
    RunExecutionError,
    execute_schema_generation_run,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="webext-schema-generator")
def cli() -> None:
    """Generate merged WebExtension schema files for Thunderbird."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generator configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML generator configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generator configuration file",
)
@click.option(
    "--manifest-version",
    "manifest_version",
    required=False,
    type=click.IntRange(2, 3),
    help="Manifest version of the generated schemas, overrides the configuration",
)
@click.option(
    "--output",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Output folder, overrides the configuration; it is cleared before writing",
)
@click.option("--verbose", is_flag=True, default=False, help="Log traversal details.")
def generate(
    config_path: str, manifest_version: int | None, output_dir: str | None, verbose: bool
) -> None:
    """Generate the schema files and permission strings of one manifest version."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)
    try:
        outcome = execute_schema_generation_run(
            GenerationRequest(
                config_path=config_path,
                manifest_version=manifest_version,
                output_dir=output_dir,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_dir))


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
