"""Error response checks."""

from collections.abc import Mapping

from api_linter.model import Severity
from api_linter.validators.base import (
    Reporter,
    Validator,
    is_error,
    is_reference,
    iter_operations,
    json_schema,
    mapping,
    responses_of,
)

COMMON_ERROR_CODES = {
    "400": "Bad Request - Invalid input",
    "401": "Unauthorized - Authentication required",
    "403": "Forbidden - Access denied",
    "404": "Not Found - Resource does not exist",
    "409": "Conflict - Resource conflict",
    "422": "Unprocessable Entity - Validation failed",
    "429": "Too Many Requests - Rate limit exceeded",
    "500": "Internal Server Error",
    "502": "Bad Gateway",
    "503": "Service Unavailable",
}

ERROR_FIELDS = ("error", "message", "errors")


class ErrorResponsesValidator(Validator):
    name = "error_responses"
    description = "Validates error response definitions"

    def check(self, spec, report: Reporter) -> None:
        for path_name, method, operation, base in iter_operations(spec):
            endpoint = f"{method.upper()} {path_name}"
            responses = responses_of(operation)
            error_codes = [code for code in responses if is_error(code)]

            if not error_codes:
                report(
                    Severity.ERROR,
                    f"Endpoint {endpoint} has no error responses defined.",
                    base,
                    "Add at least one 4xx or 5xx error response. Common codes: 400, 401, 403, 404, 500.",
                )

            for code in error_codes:
                response = responses[code]
                if not isinstance(response, Mapping) or is_reference(response):
                    continue
                location = base.key("responses", code)

                if not response.get("description"):
                    phrase = COMMON_ERROR_CODES.get(code, "Error response")
                    report(
                        Severity.WARNING,
                        f"Error response {code} is missing description.",
                        location,
                        f'Add description, e.g., "{phrase}"',
                    )

                schema = json_schema(response)
                if schema is None:
                    report(
                        Severity.WARNING,
                        f"Error response {code} has no schema defined.",
                        location,
                        "Add a schema for the error response body, e.g. a shared ErrorResponse component.",
                    )
                elif not is_reference(schema):
                    properties = mapping(schema.get("properties"))
                    if not any(field in properties for field in ERROR_FIELDS):
                        report(
                            Severity.WARNING,
                            f"Error response {code} schema should contain error information.",
                            location,
                            'Include fields like "error", "message", or "errors" to describe what went wrong.',
                        )

            if method in ("get", "delete") and "404" not in responses:
                report(
                    Severity.WARNING,
                    f"{endpoint} should define 404 response.",
                    base,
                    "Add 404 response for when the resource is not found.",
                )
            if method in ("post", "put", "patch") and "400" not in responses:
                report(
                    Severity.WARNING,
                    f"{endpoint} should define 400 response.",
                    base,
                    "Add 400 response for invalid request data.",
                )
            if "500" not in responses:
                report(
                    Severity.INFO,
                    f"{endpoint} should define 500 response.",
                    base,
                    "Consider adding 500 response for server errors.",
                )
