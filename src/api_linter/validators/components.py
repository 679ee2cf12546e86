"""Schema reference and component structure checks."""

from collections.abc import Mapping
from typing import Any

from api_linter.model import Severity
from api_linter.schema import COMPOSITION_KEYS, SpecPath
from api_linter.validators.base import Reporter, Validator, component_schemas, mapping

SCHEMA_REF_PREFIX = "#/components/schemas/"


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def find_refs(node: Any) -> list[str]:
    """Every $ref string in the document, in first-seen order."""
    found: dict[str, None] = {}
    active: set[int] = set()

    def scan(value: Any) -> None:
        if isinstance(value, Mapping):
            if id(value) in active:
                return
            active.add(id(value))
            ref = value.get("$ref")
            if isinstance(ref, str):
                found.setdefault(ref)
            for child in value.values():
                scan(child)
            active.discard(id(value))
        elif isinstance(value, list):
            if id(value) in active:
                return
            active.add(id(value))
            for child in value:
                scan(child)
            active.discard(id(value))

    scan(node)
    return list(found)


def referenced_schema_names(spec: Mapping) -> list[str]:
    names: dict[str, None] = {}
    for ref in find_refs(spec):
        if ref.startswith(SCHEMA_REF_PREFIX):
            name = _unescape(ref[len(SCHEMA_REF_PREFIX):].split("/", 1)[0])
            names.setdefault(name)
    return list(names)


class ComponentsValidator(Validator):
    name = "components"
    description = "Validates component schemas and references"

    def check(self, spec, report: Reporter) -> None:
        schemas = component_schemas(spec)
        defined = [str(name) for name in schemas]
        used = referenced_schema_names(spec)

        for name in used:
            if name not in defined:
                report(
                    Severity.ERROR,
                    f"Referenced schema '{name}' is not defined in components.schemas.",
                    SpecPath.of("components", "schemas"),
                    f"Add schema definition for '{name}' in components.schemas section.",
                )

        for name in defined:
            if name not in used:
                report(
                    Severity.INFO,
                    f"Schema '{name}' is defined but never used.",
                    SpecPath.of("components", "schemas", name),
                    f"Consider removing unused schema '{name}' or reference it in your API endpoints.",
                )

        for name, schema in schemas.items():
            schema = mapping(schema)
            location = SpecPath.of("components", "schemas", name)
            if not schema.get("type") and not schema.get("$ref") and not any(schema.get(k) for k in COMPOSITION_KEYS):
                report(
                    Severity.WARNING,
                    f"Schema '{name}' has no type definition.",
                    location,
                    'Add a "type" field (e.g., "object", "array", "string") or use composition (allOf, anyOf, oneOf).',
                )
            if schema.get("type") == "object" and not (
                schema.get("properties") or schema.get("allOf") or schema.get("additionalProperties")
            ):
                report(
                    Severity.WARNING,
                    f"Object schema '{name}' has no properties defined.",
                    location,
                    'Define properties for this object schema or use "additionalProperties".',
                )
            if schema.get("type") == "array" and not schema.get("items"):
                report(
                    Severity.ERROR,
                    f"Array schema '{name}' has no items definition.",
                    location,
                    'Add "items" field to define the type of array elements.',
                )

        if not schemas and mapping(spec.get("paths")):
            report(
                Severity.INFO,
                "No schemas defined in components.schemas.",
                SpecPath.of("components", "schemas"),
                "Consider defining reusable schemas in components.schemas to avoid duplication.",
            )
