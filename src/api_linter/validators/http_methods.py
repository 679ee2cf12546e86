"""REST conventions for methods, request bodies and status codes."""

import re

from api_linter.model import Severity
from api_linter.schema import SpecPath
from api_linter.validators.base import (
    Reporter,
    Validator,
    iter_operations,
    mapping,
    operation_methods,
    responses_of,
    status_code,
)

_ID_SEGMENT = re.compile(r"\{[^}]+\}")


def is_single_resource(path_template: str) -> bool:
    """/bookings/{id} addresses one resource, /bookings a collection."""
    return bool(_ID_SEGMENT.search(path_template))


class HttpMethodsValidator(Validator):
    name = "http_methods"
    description = "Validates HTTP method usage and REST conventions"

    def check(self, spec, report: Reporter) -> None:
        for path_name, path_item in mapping(spec.get("paths")).items():
            path_name = str(path_name)
            methods = set(operation_methods(path_item))
            if is_single_resource(path_name):
                self._check_resource(report, path_name, methods)
            else:
                self._check_collection(report, path_name, methods)

        for path_name, method, operation, base in iter_operations(spec):
            endpoint = f"{method.upper()} {path_name}"
            has_body = bool(operation.get("requestBody"))

            if method in ("get", "delete", "head") and has_body:
                report(
                    Severity.WARNING,
                    f"{endpoint} has a request body.",
                    base,
                    f"{method.upper()} requests typically should not have request bodies. Use query parameters instead.",
                )
            if method in ("post", "put", "patch") and not has_body:
                report(
                    Severity.WARNING,
                    f"{endpoint} has no request body.",
                    base,
                    f"{method.upper()} requests typically require a request body to send data.",
                )

            codes = {status_code(code) for code in responses_of(operation)}
            if method == "post" and not codes & {200, 201}:
                report(
                    Severity.INFO,
                    f"POST {path_name} doesn't define 200 or 201 response.",
                    base.key("responses"),
                    "POST requests typically return 201 (Created) or 200 (OK).",
                )
            if method == "delete" and not codes & {200, 204}:
                report(
                    Severity.INFO,
                    f"DELETE {path_name} doesn't define 200 or 204 response.",
                    base.key("responses"),
                    "DELETE requests typically return 204 (No Content) or 200 (OK).",
                )

    def _check_resource(self, report: Reporter, path_name: str, methods: set[str]) -> None:
        location = SpecPath.of(path_name)
        has_update = "put" in methods or "patch" in methods
        if "get" in methods and not has_update and "delete" not in methods:
            report(
                Severity.INFO,
                f"Resource {path_name} is read-only (no PUT/PATCH/DELETE).",
                location,
                "Consider adding update (PUT/PATCH) or delete (DELETE) operations if resource is mutable.",
            )
        if has_update and "get" not in methods:
            report(
                Severity.WARNING,
                f"Resource {path_name} can be updated but not retrieved.",
                location,
                "Add GET operation to allow reading the resource.",
            )
        if "put" in methods and "patch" in methods:
            report(
                Severity.INFO,
                f"Resource {path_name} has both PUT and PATCH.",
                location,
                "Consider using only PUT (full replacement) or PATCH (partial update).",
            )

    def _check_collection(self, report: Reporter, path_name: str, methods: set[str]) -> None:
        location = SpecPath.of(path_name)
        if "post" in methods and "get" not in methods:
            report(
                Severity.INFO,
                f"Collection {path_name} allows creation but not listing.",
                location,
                "Consider adding GET operation to list resources.",
            )
        if "put" in methods or "patch" in methods:
            report(
                Severity.WARNING,
                f"Collection {path_name} has PUT or PATCH operation.",
                location,
                "PUT/PATCH is typically for individual resources. Consider moving to /{id} endpoint.",
            )
        if "delete" in methods:
            report(
                Severity.WARNING,
                f"Collection {path_name} has DELETE operation.",
                location,
                "DELETE on collections (bulk delete) should be carefully considered. "
                "Usually DELETE is for individual resources.",
            )
