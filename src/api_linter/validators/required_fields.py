"""Required declarations on request bodies and component schemas."""

from collections.abc import Mapping

from api_linter.model import Severity
from api_linter.schema import SpecPath
from api_linter.validators.base import (
    Reporter,
    Validator,
    component_schemas,
    iter_operations,
    json_schema,
    mapping,
)


class RequiredFieldsValidator(Validator):
    name = "required_fields"
    description = "Validates required field marking"

    def check(self, spec, report: Reporter) -> None:
        for _, method, operation, base in iter_operations(spec):
            request_body = operation.get("requestBody")
            schema = json_schema(request_body)
            if schema is None:
                continue
            location = base.key("requestBody")
            prop_count = len(mapping(schema.get("properties")))
            required = schema.get("required")

            if prop_count and required is None:
                report(
                    Severity.WARNING,
                    f"Request body has {prop_count} properties but no required fields specified.",
                    location,
                    'Add "required" array to specify which fields are mandatory.',
                )
            elif prop_count and isinstance(required, list) and not required:
                report(
                    Severity.INFO,
                    f"Request body has {prop_count} properties but required array is empty.",
                    location,
                    "Consider marking critical fields as required.",
                )

            if method in ("post", "put") and request_body.get("required") is not True:
                report(
                    Severity.WARNING,
                    f"{method.upper()} request body should be marked as required.",
                    location,
                    'Set "required": true for the requestBody.',
                )

        for schema_name, schema in component_schemas(spec).items():
            if not isinstance(schema, Mapping):
                continue
            if schema.get("type") != "object" and "properties" not in schema:
                continue
            location = SpecPath.of("components", "schemas", schema_name)
            properties = mapping(schema.get("properties"))
            required = schema.get("required")

            if properties and required is None:
                report(
                    Severity.INFO,
                    f"Schema '{schema_name}' has {len(properties)} properties but no required fields.",
                    location,
                    'Consider adding "required" array for mandatory fields.',
                )

            if isinstance(required, list):
                prop_names = {str(k) for k in properties}
                for field_name in required:
                    if str(field_name) not in prop_names:
                        report(
                            Severity.ERROR,
                            f"Schema '{schema_name}' marks '{field_name}' as required but property doesn't exist.",
                            location,
                            f"Remove '{field_name}' from required array or add it to properties.",
                        )
