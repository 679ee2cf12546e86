"""Example values on component schemas, required properties and parameters."""

from collections.abc import Mapping

from api_linter.model import Severity
from api_linter.schema import SchemaKind, SpecPath, classify
from api_linter.validators.base import (
    PRIMITIVE_TYPES,
    Reporter,
    Validator,
    component_schemas,
    has_value,
    iter_operations,
    iter_path_items,
    mapping,
    parameters_of,
    sequence,
)

MAX_PROPERTIES_FOR_EXAMPLE = 10


def has_example(node) -> bool:
    return has_value(node, "example") or has_value(node, "examples")


class ExamplesValidator(Validator):
    name = "examples"
    description = "Validates example values in schemas"

    def check(self, spec, report: Reporter) -> None:
        for schema_name, schema in component_schemas(spec).items():
            if not isinstance(schema, Mapping):
                continue
            kind = classify(schema)
            if kind in (SchemaKind.REFERENCE, SchemaKind.COMPOSITION):
                continue
            location = SpecPath.of("components", "schemas", schema_name)
            properties = mapping(schema.get("properties"))

            if not has_example(schema):
                if kind is SchemaKind.OBJECT and 0 < len(properties) <= MAX_PROPERTIES_FOR_EXAMPLE:
                    report(
                        Severity.INFO,
                        f"Schema '{schema_name}' has no example defined.",
                        location,
                        "Add example field to improve API documentation.",
                    )
                elif schema.get("type") in PRIMITIVE_TYPES:
                    report(
                        Severity.INFO,
                        f"Schema '{schema_name}' has no example value.",
                        location,
                        "Add example field to show valid values.",
                    )

            required = [str(r) for r in sequence(schema.get("required"))]
            for prop_name, prop_schema in properties.items():
                if not isinstance(prop_schema, Mapping) or classify(prop_schema) is SchemaKind.REFERENCE:
                    continue
                if has_example(prop_schema) or has_value(prop_schema, "default"):
                    continue
                if prop_schema.get("type") in PRIMITIVE_TYPES and str(prop_name) in required:
                    report(
                        Severity.INFO,
                        f"Required property '{schema_name}.{prop_name}' has no example.",
                        location.prop(prop_name),
                        "Add example to show valid value.",
                    )

        for _, path_item, path_location in iter_path_items(spec):
            self._check_parameters(report, spec, path_item, path_location)
        for _, _, operation, base in iter_operations(spec):
            self._check_parameters(report, spec, operation, base)

    def _check_parameters(self, report: Reporter, spec, owner, base: SpecPath) -> None:
        for param, location in parameters_of(spec, owner, base):
            if param.get("in") not in ("query", "path"):
                continue
            if has_example(param) or has_value(mapping(param.get("schema")), "example"):
                continue
            report(
                Severity.INFO,
                f"Parameter '{param.get('name')}' has no example value.",
                location,
                "Add example to show valid parameter value.",
            )
