"""Description quality checks for operations, parameters, responses and schema properties.

A description is valid when it is a string of at least 10 characters that
starts with an uppercase letter and ends with . ! ? or :.
"""

import re
from collections.abc import Mapping

from api_linter.model import Severity
from api_linter.schema import SpecPath, walk
from api_linter.validators.base import (
    Reporter,
    Validator,
    component_schemas,
    is_reference,
    iter_operations,
    iter_path_items,
    json_schema,
    parameters_of,
    responses_of,
)

MIN_LENGTH = 10

_STARTS_UPPER = re.compile(r"^[A-Z]")
_ENDS_PUNCTUATED = re.compile(r"[.!?:]$")


def description_problems(text: str) -> list[str]:
    """Names of the failed rules: capitalization, punctuation, length."""
    problems = []
    if not _STARTS_UPPER.search(text):
        problems.append("capitalization")
    if not _ENDS_PUNCTUATED.search(text):
        problems.append("punctuation")
    if len(text) < MIN_LENGTH:
        problems.append("length")
    return problems


_ADVICE = {
    "capitalization": "start with uppercase letter",
    "punctuation": "end with proper punctuation (. ! ? or :)",
    "length": f"be more descriptive (at least {MIN_LENGTH} characters)",
}


def improvement_suggestion(text: str, problems: list[str]) -> str:
    advice = ", ".join(_ADVICE[p] for p in problems)
    return f'Description should {advice}. Current: "{text}"'


class DescriptionsValidator(Validator):
    name = "descriptions"
    description = "Validates description quality and completeness"

    def check(self, spec, report: Reporter) -> None:
        for _, path_item, path_location in iter_path_items(spec):
            self._check_parameters(report, spec, path_item, path_location)

        for path_name, method, operation, base in iter_operations(spec):
            if not operation.get("description") and not operation.get("summary"):
                report(
                    Severity.WARNING,
                    f"Endpoint {method.upper()} {path_name} is missing description or summary.",
                    base,
                    "Add a description or summary explaining what this endpoint does.",
                )

            self._check_parameters(report, spec, operation, base)

            body_schema = json_schema(operation.get("requestBody"))
            if body_schema is not None:
                self._check_fields(report, body_schema, base.key("requestBody"), "Request body field")

            for code, response in responses_of(operation).items():
                if not isinstance(response, Mapping) or is_reference(response):
                    continue
                resp_location = base.key("responses", code)
                if not response.get("description"):
                    report(
                        Severity.WARNING,
                        f"Response {code} is missing description.",
                        resp_location,
                        "Add a description explaining when this response occurs.",
                    )
                resp_schema = json_schema(response)
                if resp_schema is not None:
                    self._check_fields(report, resp_schema, resp_location, "Response field")

        for schema_name, schema in component_schemas(spec).items():
            self._check_fields(
                report,
                schema,
                SpecPath.of("components", "schemas", schema_name),
                f"Schema '{schema_name}' property",
            )

    def _check_parameters(self, report: Reporter, spec, owner, base: SpecPath) -> None:
        for param, location in parameters_of(spec, owner, base):
            param_name = param.get("name")
            self._check_text(
                report,
                param.get("description"),
                location,
                missing=f"Parameter '{param_name}' is missing description.",
                missing_hint=f"Add description for parameter '{param_name}'.",
                label=f"Parameter '{param_name}'",
            )

    def _check_fields(self, report: Reporter, schema, base: SpecPath, label: str) -> None:
        def visit(prop_name, prop_schema, location):
            # a $ref property is documented on the schema it points to
            if is_reference(prop_schema):
                return
            self._check_text(
                report,
                prop_schema.get("description"),
                location,
                missing=f"{label} '{prop_name}' is missing description.",
                missing_hint=f"Add a description for field '{prop_name}' explaining what it represents.",
                label=f"{label} '{prop_name}'",
            )

        walk(schema, visit, base)

    def _check_text(self, report, text, location, *, missing, missing_hint, label) -> None:
        if not text:
            report(Severity.ERROR, missing, location, missing_hint)
            return
        text = str(text)
        problems = description_problems(text)
        if problems:
            report(
                Severity.WARNING,
                f"{label} description needs improvement ({', '.join(problems)}).",
                location,
                improvement_suggestion(text, problems),
            )
