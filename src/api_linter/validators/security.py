"""Authentication coverage and security scheme references."""

from collections.abc import Mapping

from api_linter.model import Severity
from api_linter.schema import SpecPath
from api_linter.validators.base import Reporter, Validator, iter_operations, mapping, sequence

MUTATING_METHODS = ("post", "put", "patch", "delete")


class SecurityValidator(Validator):
    name = "security"
    description = "Validates security schemes and authentication"

    def check(self, spec, report: Reporter) -> None:
        global_security = sequence(spec.get("security"))
        has_global = bool(global_security)
        schemes = mapping(mapping(spec.get("components")).get("securitySchemes"))

        if not has_global and not schemes:
            report(
                Severity.WARNING,
                "No security schemes defined in the API specification.",
                SpecPath.of("components", "securitySchemes"),
                "Add security schemes (e.g., bearerAuth, apiKey, oauth2) in components.securitySchemes.",
            )

        for path_name, method, operation, base in iter_operations(spec):
            endpoint = f"{method.upper()} {path_name}"
            op_security = operation.get("security")
            has_own = op_security is not None
            is_public = isinstance(op_security, list) and not op_security

            if not has_global and not has_own:
                report(
                    Severity.WARNING,
                    f"Endpoint {endpoint} has no security defined.",
                    base,
                    'Add security requirement or explicitly mark as public with "security: []".',
                )
            elif is_public:
                report(
                    Severity.INFO,
                    f"Endpoint {endpoint} is publicly accessible (no authentication).",
                    base,
                    "Verify this endpoint should be public. If authentication is needed, add security requirements.",
                )

            if method in MUTATING_METHODS and not has_global and (not has_own or is_public):
                report(
                    Severity.ERROR,
                    f"{endpoint} modifies data but has no authentication.",
                    base,
                    "Add security requirements for data-modifying operations (POST, PUT, PATCH, DELETE).",
                )

            self._check_scheme_names(report, sequence(op_security), schemes, base.key("security"))

        self._check_scheme_names(report, global_security, schemes, SpecPath.of("security"))

    def _check_scheme_names(self, report: Reporter, requirements: list, schemes: Mapping, location) -> None:
        for requirement in requirements:
            for scheme_name in mapping(requirement):
                if scheme_name not in schemes:
                    report(
                        Severity.ERROR,
                        f"Security scheme '{scheme_name}' is referenced but not defined.",
                        location,
                        f"Add '{scheme_name}' to components.securitySchemes.",
                    )
