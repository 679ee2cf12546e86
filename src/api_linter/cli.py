"""CLI entry point for api-linter."""

import json
import logging
from pathlib import Path

import click
from pydantic import ValidationError

from api_linter.config import Settings
from api_linter.discovery import discover_common_fields, write_common_yaml
from api_linter.engine import InvalidSpecError, get_available_validators, get_common_fields, run_validation
from api_linter.formatters import render
from api_linter.loader import SpecLoadError, load_spec
from api_linter.model import Severity, ValidationOptions
from api_linter.registry import load_default_registry
from api_linter.validators import VALIDATOR_NAMES


def _settings() -> Settings:
    try:
        return Settings.from_env()
    except ValidationError as e:
        raise click.ClickException(f"Invalid API_LINTER_* configuration: {e}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Linter — check OpenAPI documents against structural and style rules."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default="text", type=click.Choice(["text", "json", "summary"]), help="Output format.")
@click.option("--min-severity", default=None, type=click.Choice([s.value for s in Severity]), help="Lowest severity to report.")
@click.option("--validator", "validators", multiple=True, type=click.Choice(VALIDATOR_NAMES), help="Run only these validators (repeatable).")
@click.option("--strategy", default=None, help="Strategy label echoed into the result.")
@click.option("--common-fields", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Common field definitions (YAML).")
@click.option("--ai/--no-ai", "enable_ai", default=None, help="Enrich the top issues with AI suggestions.")
@click.option("--model", default=None, help="LLM model to use for AI suggestions.")
@click.option("--industry", default=None, help="Industry hint for AI suggestions.")
@click.option("--color/--no-color", default=True, help="Colorize text output.")
@click.option("--fail-on-error/--no-fail-on-error", default=True, help="Exit with status 1 when errors are reported.")
def lint(
    spec_path: Path,
    fmt: str,
    min_severity: str | None,
    validators: tuple[str, ...],
    strategy: str | None,
    common_fields: Path | None,
    enable_ai: bool | None,
    model: str | None,
    industry: str | None,
    color: bool,
    fail_on_error: bool,
):
    """Validate an OpenAPI document."""
    settings = _settings()
    try:
        spec = load_spec(spec_path)
    except SpecLoadError as e:
        raise click.ClickException(str(e))

    options = ValidationOptions(
        strategy=strategy or settings.strategy,
        min_severity=min_severity or settings.min_severity,
        validators=list(validators) or "all",
        file_name=str(spec_path),
        enable_ai=settings.enable_ai if enable_ai is None else enable_ai,
        industry=industry or settings.industry,
    )
    registry = load_default_registry(common_fields or settings.common_fields_path)
    suggester = None
    if options.enable_ai:
        from api_linter.ai import AiSuggester

        suggester = AiSuggester(model=model or settings.model)

    try:
        result = run_validation(spec, options, registry=registry, suggester=suggester)
    except InvalidSpecError as e:
        raise click.ClickException(str(e))

    click.echo(render(result, fmt, color=color))
    if fail_on_error and result.summary.errors:
        raise SystemExit(1)


@main.command("validators")
def list_validators():
    """List the available validators."""
    for v in get_available_validators():
        click.echo(f"{v['name']:<18} {v['description']}")


@main.command()
@click.option("--common-fields", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Common field definitions (YAML).")
@click.option("--json", "as_json", is_flag=True, help="Print the full definitions as JSON.")
def fields(common_fields: Path | None, as_json: bool):
    """Show the loaded common field definitions."""
    settings = _settings()
    data = get_common_fields(load_default_registry(common_fields or settings.common_fields_path))
    if as_json:
        click.echo(json.dumps(data, indent=2, default=str))
        return
    click.echo(f"Loaded {data['count']} common field definitions.")
    for name, definition in data["fields"].items():
        detail = ", ".join(f"{k}={definition[k]}" for k in ("type", "format", "pattern") if k in definition)
        click.echo(f"  {name:<16} {detail}")


@main.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--min-occurrences", default=2, show_default=True, type=click.IntRange(min=1), help="Documents a field must appear in.")
@click.option("--min-consistency", default=0.8, show_default=True, type=click.FloatRange(0, 1), help="Share of definitions that must agree.")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write the proposed common fields YAML here.")
@click.option("--json", "as_json", is_flag=True, help="Print the discovery result as JSON.")
@click.option("--top", default=20, show_default=True, help="Number of suggestions to list.")
def discover(
    directory: Path,
    min_occurrences: int,
    min_consistency: float,
    output: Path | None,
    as_json: bool,
    top: int,
):
    """Propose common field definitions from a directory of OpenAPI documents."""
    result = discover_common_fields(directory, min_occurrences=min_occurrences, min_consistency=min_consistency)
    if output is not None:
        write_common_yaml(result.suggestions, output)

    if as_json:
        click.echo(result.model_dump_json(indent=2))
        return

    click.echo(f"Analyzed {result.total_specs} OpenAPI documents, {result.total_fields} unique fields.")
    click.echo(f"Suggested common fields: {len(result.suggestions)}")
    for s in result.suggestions[:top]:
        kind = s.canonical.type or "any"
        if s.canonical.format:
            kind += f" ({s.canonical.format})"
        click.echo("")
        click.echo(click.style(s.field_name, bold=True))
        click.echo(f"  Occurrences: {s.occurrence_count}/{s.total_specs} documents ({round(s.frequency * 100)}%)")
        click.echo(f"  Consistency: {round(s.consistency * 100)}%")
        click.echo(f"  Type:        {kind}")
        if s.canonical.description:
            click.echo(f"  Description: {s.canonical.description}")
    if output is not None:
        click.echo(f"\nWrote {len(result.suggestions)} definitions to {output}")
