"""Compares schema properties against the common field registry."""

import json
from collections.abc import Mapping
from typing import Any

from api_linter.model import Severity
from api_linter.registry import CommonFieldRegistry, FieldDefinition
from api_linter.schema import SpecPath, walk
from api_linter.validators.base import (
    Reporter,
    Validator,
    component_schemas,
    is_reference,
    iter_operations,
    json_schema,
    responses_of,
)


def _shown(value: Any) -> Any:
    return "none" if value is None else value


def _enum_key(values: list) -> list:
    return sorted((json.dumps(v, sort_keys=True, default=str) for v in values))


def field_mismatches(actual: Mapping, expected: FieldDefinition) -> list[str]:
    """Describe every way actual deviates from the canonical definition."""
    problems = []
    if expected.type is not None and actual.get("type") != expected.type:
        problems.append(f"Type mismatch: expected '{expected.type}', got '{_shown(actual.get('type'))}'")
    if expected.format is not None and actual.get("format") != expected.format:
        problems.append(f"Format mismatch: expected '{expected.format}', got '{_shown(actual.get('format'))}'")
    if expected.pattern is not None and actual.get("pattern") != expected.pattern:
        problems.append(f"Pattern mismatch: expected '{expected.pattern}', got '{_shown(actual.get('pattern'))}'")
    if expected.min_length is not None and actual.get("minLength") != expected.min_length:
        problems.append(f"MinLength mismatch: expected {expected.min_length}, got {_shown(actual.get('minLength'))}")
    if expected.max_length is not None and actual.get("maxLength") != expected.max_length:
        problems.append(f"MaxLength mismatch: expected {expected.max_length}, got {_shown(actual.get('maxLength'))}")
    if expected.enum is not None:
        actual_enum = actual.get("enum")
        actual_enum = actual_enum if isinstance(actual_enum, list) else []
        if _enum_key(actual_enum) != _enum_key(expected.enum):
            problems.append("Enum values mismatch")
    return problems


class CommonFieldsValidator(Validator):
    name = "common_fields"
    description = "Validates fields against the common field definitions"

    def __init__(self, registry: CommonFieldRegistry):
        self.registry = registry

    def check(self, spec, report: Reporter) -> None:
        if not self.registry.field_count():
            return

        for _, _, operation, base in iter_operations(spec):
            body_schema = json_schema(operation.get("requestBody"))
            if body_schema is not None:
                self._check_schema(report, body_schema, base.key("requestBody"), "in request body")

            for code, response in responses_of(operation).items():
                resp_schema = json_schema(response)
                if resp_schema is not None:
                    self._check_schema(report, resp_schema, base.key("responses", code), "in response")

        for schema_name, schema in component_schemas(spec).items():
            self._check_schema(
                report,
                schema,
                SpecPath.of("components", "schemas", schema_name),
                f"in schema '{schema_name}'",
            )

    def _check_schema(self, report: Reporter, schema, base: SpecPath, where: str) -> None:
        def visit(prop_name, prop_schema, location):
            definition = self.registry.lookup(prop_name)
            if definition is None or is_reference(prop_schema):
                return
            problems = field_mismatches(prop_schema, definition)
            if not problems:
                return
            example = definition.example if definition.example is not None else definition.as_schema()
            report(
                Severity.WARNING,
                f"Common field '{prop_name}' {where} doesn't match standard definition '{definition.name}'.",
                location,
                f"Consider using standard definition: {'; '.join(problems)}. "
                f"Example: {json.dumps(example, default=str)}",
            )

        walk(schema, visit, base, compositions=True)
