"""Matches {placeholders} in path templates against declared path parameters."""

import re

from api_linter.model import Severity
from api_linter.validators.base import (
    Reporter,
    Validator,
    iter_path_items,
    operation_methods,
    parameters_of,
)

_PLACEHOLDER = re.compile(r"\{([^}]+)\}")


def extract_path_params(path_template: str) -> list[str]:
    """/bookings/{bookingId}/flights/{flightId} -> ['bookingId', 'flightId']"""
    return _PLACEHOLDER.findall(path_template)


class PathParametersValidator(Validator):
    name = "path_parameters"
    description = "Validates path parameter documentation"

    def check(self, spec, report: Reporter) -> None:
        for path_name, path_item, path_location in iter_path_items(spec):
            expected = extract_path_params(path_name)

            shared = [
                (p, loc)
                for p, loc in parameters_of(spec, path_item, path_location)
                if p.get("in") == "path"
            ]
            for param, location in shared:
                self._check_declaration(report, param, location, expected)

            for method in operation_methods(path_item):
                base = path_location.key(method)
                own = [(p, loc) for p, loc in parameters_of(spec, path_item[method], base) if p.get("in") == "path"]
                declared = {str(p.get("name")) for p, _ in shared + own}

                for name in expected:
                    if name not in declared:
                        report(
                            Severity.ERROR,
                            f"Path parameter '{name}' in {method.upper()} {path_name} is not defined.",
                            base.key("parameters"),
                            f'Add parameter definition: {{ "name": "{name}", "in": "path", '
                            f'"required": true, "schema": {{ "type": "string" }} }}',
                        )

                for param, location in own:
                    self._check_declaration(report, param, location, expected)

    def _check_declaration(self, report: Reporter, param, location, expected: list[str]) -> None:
        name = param.get("name")
        if param.get("required") is not True:
            report(
                Severity.ERROR,
                f"Path parameter '{name}' must be required.",
                location,
                f"Set \"required\": true for path parameter '{name}'.",
            )
        if not param.get("schema"):
            report(
                Severity.ERROR,
                f"Path parameter '{name}' has no schema defined.",
                location,
                f"Add schema for '{name}' (e.g., {{ \"type\": \"string\" }}).",
            )
        if not param.get("description"):
            report(
                Severity.WARNING,
                f"Path parameter '{name}' is missing description.",
                location,
                f"Add description for '{name}' explaining what it represents.",
            )
        if str(name) not in expected:
            report(
                Severity.WARNING,
                f"Path parameter '{name}' is defined but not used in path template.",
                location,
                f"Remove unused parameter '{name}' or add {{{name}}} to the path.",
            )
