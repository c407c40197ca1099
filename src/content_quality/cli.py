"""
Command-line interface for the Content Quality Validator.

Validates MDX content files for readability, SEO and uniqueness and
exits non-zero when any error-severity issue is found. Warnings never
fail the build.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from .config import ConfigError, load_config_file
from .content_loader import ContentLoadError
from .models import RunnerOptions
from .registry import get_validator_names
from .reporting import format_json_error, format_json_report, print_text_report
from .runner import run_validators

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _parse_validator_list(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def _fail(message: str, json_output: bool) -> None:
    if json_output:
        click.echo(format_json_error(message))
    else:
        err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    sys.exit(1)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--validators",
    type=str,
    default="",
    help=f"Comma-separated list of validators to run (available: {', '.join(get_validator_names())}).",
)
@click.option(
    "--file",
    "file",
    type=str,
    default=None,
    help="Validate a single file instead of the whole content directory.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Show suggestions and detailed metrics.",
)
@click.option(
    "--content-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("content"),
    show_default=True,
    help="Content directory holding services/ and locations/.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with per-validator overrides (enabled, severity, thresholds).",
)
def main(
    validators: str,
    file: Optional[str],
    json_output: bool,
    verbose: bool,
    content_dir: Path,
    config_path: Optional[Path],
) -> None:
    """
    Content Quality Validation - check MDX content before it ships.

    Runs readability (Flesch-Kincaid), SEO (title/description length,
    keyword density, CTA) and uniqueness (n-gram similarity, boilerplate)
    validators over content/services and content/locations.

    Examples:

        validate-quality

        validate-quality --validators=readability,seo

        validate-quality --json

        validate-quality --file=content/services/my-service.mdx -v
    """
    _configure_logging(verbose)

    requested = _parse_validator_list(validators)
    available = get_validator_names()
    unknown = [name for name in requested if name not in available]
    if unknown:
        _fail(
            f"Unknown validator(s): {', '.join(unknown)}. "
            f"Available validators: {', '.join(available)}",
            json_output,
        )

    try:
        configs = load_config_file(config_path, known_validators=available) if config_path else {}

        options = RunnerOptions(
            validators=requested or None,
            file=file,
            verbose=verbose,
            output_format="json" if json_output else "text",
            configs=configs,
        )
        results = run_validators(content_dir, options)

    except (ContentLoadError, ConfigError) as e:
        _fail(str(e), json_output)
    except Exception as e:
        if verbose and not json_output:
            import traceback
            err_console.print(traceback.format_exc(), markup=False)
        _fail(f"Unexpected error: {e}", json_output)

    if json_output:
        click.echo(format_json_report(results))
    else:
        print_text_report(results, console, verbose)

    # Only errors fail the build, warnings do not
    sys.exit(0 if results.passed else 1)


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
