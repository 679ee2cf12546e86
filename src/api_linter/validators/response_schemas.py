"""Checks that responses carry JSON content with a usable schema."""

from collections.abc import Mapping

from api_linter.model import Severity
from api_linter.schema import SchemaKind, classify
from api_linter.validators.base import (
    JSON_MEDIA_TYPE,
    Reporter,
    Validator,
    has_value,
    is_reference,
    is_success,
    iter_operations,
    json_content,
    responses_of,
)


class ResponseSchemasValidator(Validator):
    name = "response_schemas"
    description = "Validates response schema completeness"

    def check(self, spec, report: Reporter) -> None:
        for path_name, method, operation, base in iter_operations(spec):
            responses = responses_of(operation)

            if not any(is_success(code) for code in responses):
                report(
                    Severity.WARNING,
                    f"Endpoint {method.upper()} {path_name} has no success responses (2xx).",
                    base,
                    "Add at least one 2xx success response (e.g., 200, 201, 204).",
                )

            for code, response in responses.items():
                if code == "204" or not isinstance(response, Mapping) or is_reference(response):
                    continue
                location = base.key("responses", code)
                success = is_success(code)

                if not response.get("content"):
                    if success:
                        report(
                            Severity.WARNING,
                            f"Response {code} has no content defined.",
                            location,
                            "Add content with appropriate media type (e.g., application/json) and schema.",
                        )
                    continue

                media = json_content(response)
                if media is None:
                    report(
                        Severity.INFO,
                        f"Response {code} does not define application/json content type.",
                        location,
                        "Consider adding application/json content type for API responses.",
                    )
                    continue

                media_location = location.key("content", JSON_MEDIA_TYPE)
                schema = media.get("schema")
                if not isinstance(schema, Mapping):
                    report(
                        Severity.ERROR,
                        f"Response {code} application/json has no schema defined.",
                        media_location,
                        "Add schema to define the structure of the response body.",
                    )
                    continue

                if classify(schema) is SchemaKind.EMPTY:
                    report(
                        Severity.WARNING,
                        f"Response {code} has empty schema.",
                        media_location.key("schema"),
                        "Define schema properties or use $ref to reference a component schema.",
                    )

                has_example = has_value(media, "example") or has_value(media, "examples") or has_value(schema, "example")
                if success and not has_example:
                    report(
                        Severity.INFO,
                        f"Response {code} has no example defined.",
                        media_location,
                        "Consider adding example response to improve API documentation.",
                    )
