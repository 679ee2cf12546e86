"""Common field discovery.

Scans a directory of OpenAPI documents, collects every schema property by
name and proposes a common field table for the names that appear in
several documents with a consistent type/format/pattern. The proposal is
written as an OpenAPI document, so it loads straight back into
load_registry().
"""

import logging
from collections import Counter
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from api_linter.loader import SpecLoadError, load_spec
from api_linter.schema import SpecPath, walk
from api_linter.validators.base import component_schemas, is_reference, iter_operations, json_schema, responses_of

logger = logging.getLogger(__name__)

SPEC_EXTENSIONS = (".yaml", ".yml", ".json")
EXCLUDED_DIRS = ("node_modules", "dist", "build", ".git")


class FieldOccurrence(BaseModel):
    """One property definition found in a document."""

    path: str
    type: str | None = None
    format: str | None = None
    pattern: str | None = None
    description: str | None = None
    example: Any = None

    def shape(self) -> tuple:
        return (self.type, self.format, self.pattern)


class CanonicalField(BaseModel):
    type: str | None = None
    format: str | None = None
    pattern: str | None = None
    description: str | None = None
    example: Any = None


class FieldSuggestion(BaseModel):
    field_name: str
    occurrence_count: int  # documents containing the field
    total_specs: int
    frequency: float
    consistency: float
    canonical: CanonicalField
    files: list[str]

    @property
    def score(self) -> float:
        return self.frequency * self.consistency


class DiscoveryResult(BaseModel):
    directory: str
    total_specs: int
    total_fields: int
    suggestions: list[FieldSuggestion]


def scan_directory(
    directory: Path,
    extensions: tuple[str, ...] = SPEC_EXTENSIONS,
    recursive: bool = True,
    exclude: tuple[str, ...] = EXCLUDED_DIRS,
) -> list[Path]:
    """Candidate spec files under directory, in sorted walk order."""
    files = []
    for entry in sorted(Path(directory).iterdir()):
        if entry.is_dir():
            if recursive and entry.name not in exclude:
                files.extend(scan_directory(entry, extensions, recursive, exclude))
        elif entry.suffix.lower() in extensions:
            files.append(entry)
    return files


def _schema_roots(spec: Mapping) -> list[tuple[Mapping, SpecPath]]:
    roots = []
    for _, _, operation, base in iter_operations(spec):
        body_schema = json_schema(operation.get("requestBody"))
        if body_schema is not None:
            roots.append((body_schema, base.key("requestBody")))
        for code, response in responses_of(operation).items():
            resp_schema = json_schema(response)
            if resp_schema is not None:
                roots.append((resp_schema, base.key("responses", code)))
    for name, schema in component_schemas(spec).items():
        roots.append((schema, SpecPath.of("components", "schemas", name)))
    return roots


def extract_fields(spec: Mapping) -> dict[str, list[FieldOccurrence]]:
    """Every inline property of the document's JSON schemas, grouped by name."""
    fields: dict[str, list[FieldOccurrence]] = {}

    def visit(name, prop_schema, location):
        if is_reference(prop_schema):
            return
        fields.setdefault(name, []).append(
            FieldOccurrence(
                path=str(location),
                type=_text(prop_schema.get("type")),
                format=_text(prop_schema.get("format")),
                pattern=_text(prop_schema.get("pattern")),
                description=_text(prop_schema.get("description")),
                example=prop_schema.get("example"),
            )
        )

    for schema, base in _schema_roots(spec):
        walk(schema, visit, base, compositions=True)
    return fields


def _text(value: Any) -> str | None:
    return None if value is None else str(value)


def most_common_description(occurrences: list[FieldOccurrence]) -> str | None:
    counts = Counter(o.description for o in occurrences if o.description)
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def consistency(occurrences: list[FieldOccurrence]) -> tuple[float, CanonicalField]:
    """Share of occurrences agreeing on the most common type/format/pattern."""
    groups: dict[tuple, list[FieldOccurrence]] = {}
    for occurrence in occurrences:
        groups.setdefault(occurrence.shape(), []).append(occurrence)
    largest = max(groups.values(), key=len)
    first = largest[0]
    canonical = CanonicalField(
        type=first.type,
        format=first.format,
        pattern=first.pattern,
        description=most_common_description(largest),
        example=first.example,
    )
    return len(largest) / len(occurrences), canonical


def discover_common_fields(
    directory: Path,
    min_occurrences: int = 2,
    min_consistency: float = 0.8,
) -> DiscoveryResult:
    """Propose common fields from the OpenAPI documents under directory.

    Files that fail to parse, or that are not OpenAPI/Swagger documents, are
    skipped with a log message.
    """
    directory = Path(directory)
    files = scan_directory(directory)
    logger.info("Scanning %d candidate files under %s", len(files), directory)

    by_field: dict[str, dict[str, list[FieldOccurrence]]] = {}
    total_specs = 0
    for file_path in files:
        try:
            spec = load_spec(file_path)
        except SpecLoadError as e:
            logger.warning("Skipping %s: %s", file_path, e)
            continue
        if not isinstance(spec, Mapping) or not (spec.get("openapi") or spec.get("swagger")):
            logger.debug("Skipping %s: not an OpenAPI document", file_path)
            continue

        total_specs += 1
        relative = file_path.relative_to(directory).as_posix()
        for name, occurrences in extract_fields(spec).items():
            by_field.setdefault(name, {})[relative] = occurrences

    suggestions = []
    for name, per_file in by_field.items():
        if len(per_file) < min_occurrences:
            continue
        score, canonical = consistency([o for occurrences in per_file.values() for o in occurrences])
        if score < min_consistency:
            continue
        suggestions.append(
            FieldSuggestion(
                field_name=name,
                occurrence_count=len(per_file),
                total_specs=total_specs,
                frequency=len(per_file) / total_specs,
                consistency=score,
                canonical=canonical,
                files=list(per_file),
            )
        )
    suggestions.sort(key=lambda s: s.score, reverse=True)

    logger.info("Analyzed %d OpenAPI documents, %d common field candidates", total_specs, len(suggestions))
    return DiscoveryResult(
        directory=str(directory),
        total_specs=total_specs,
        total_fields=len(by_field),
        suggestions=suggestions,
    )


def _percent(value: float) -> str:
    return f"{round(value * 100)}%"


def common_fields_document(suggestions: list[FieldSuggestion]) -> dict[str, Any]:
    """The proposal as an OpenAPI document with one schema per field."""
    schemas = {}
    for suggestion in suggestions:
        schema = suggestion.canonical.model_dump(exclude_none=True)
        schema["x-discovery"] = {
            "found_in": suggestion.occurrence_count,
            "consistency": _percent(suggestion.consistency),
            "frequency": _percent(suggestion.frequency),
        }
        schemas[suggestion.field_name] = schema
    return {
        "openapi": "3.0.3",
        "info": {
            "title": "Common fields",
            "version": "1.0.0",
            "description": f"Generated at {datetime.now(timezone.utc).isoformat()}.",
        },
        "paths": {},
        "components": {"schemas": schemas},
    }


def render_common_yaml(suggestions: list[FieldSuggestion]) -> str:
    return yaml.safe_dump(
        common_fields_document(suggestions),
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )


def write_common_yaml(suggestions: list[FieldSuggestion], output_path: Path) -> None:
    Path(output_path).write_text(render_common_yaml(suggestions), encoding="utf-8")
    logger.info("Wrote %d common field definitions to %s", len(suggestions), output_path)
