"""Version hygiene: info.version, the openapi field, and version hints in titles and paths."""

import re

from api_linter.model import Severity
from api_linter.schema import SpecPath
from api_linter.validators.base import Reporter, Validator, mapping

SEMVER = re.compile(r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.-]+)?(\+[a-zA-Z0-9.-]+)?$")
_TITLE_VERSION = re.compile(r"v\d+|version\s*\d+", re.IGNORECASE)
_PATH_VERSION = re.compile(r"/v\d+/", re.IGNORECASE)


def is_semantic_version(version: str) -> bool:
    return bool(SEMVER.match(version))


class VersioningValidator(Validator):
    name = "versioning"
    description = "Validates API versioning format"

    def check(self, spec, report: Reporter) -> None:
        info = mapping(spec.get("info"))
        if info.get("version") in (None, ""):
            report(
                Severity.ERROR,
                "API specification is missing version information.",
                SpecPath.of("info", "version"),
                'Add version field in info section (e.g., "1.0.0").',
            )
            return

        version = str(info["version"])
        if not is_semantic_version(version):
            report(
                Severity.WARNING,
                f"API version '{version}' does not follow semantic versioning.",
                SpecPath.of("info", "version"),
                'Use semantic versioning format: MAJOR.MINOR.PATCH (e.g., "1.0.0", "2.1.3").',
            )
        if version[:1] in ("v", "V"):
            report(
                Severity.WARNING,
                f"API version '{version}' has \"v\" prefix.",
                SpecPath.of("info", "version"),
                'Remove "v" prefix from version. Use "1.0.0" instead of "v1.0.0".',
            )

        title = info.get("title")
        if isinstance(title, str) and _TITLE_VERSION.search(title):
            report(
                Severity.INFO,
                "API title contains version information.",
                SpecPath.of("info", "title"),
                "Consider removing version from title as it's already in info.version.",
            )

        if any(_PATH_VERSION.search(str(p)) for p in mapping(spec.get("paths"))):
            report(
                Severity.INFO,
                "API uses path-based versioning (e.g., /v1/resource).",
                SpecPath.of("paths"),
                "Ensure version in paths matches info.version. Consider using header-based versioning instead.",
            )

        openapi = spec.get("openapi")
        if openapi in (None, ""):
            report(Severity.ERROR, "Missing OpenAPI version.", SpecPath.of("openapi"), 'Add openapi field (e.g., "3.0.3").')
        elif not str(openapi).startswith("3."):
            report(
                Severity.WARNING,
                f"OpenAPI version '{openapi}' is outdated.",
                SpecPath.of("openapi"),
                "Consider upgrading to OpenAPI 3.0.3 or later.",
            )
