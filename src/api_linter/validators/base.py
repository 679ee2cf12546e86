"""Validator base class and read-only helpers for walking an OpenAPI tree.

Every helper tolerates malformed input: anything that is not the expected
mapping or list is treated as absent, so a broken sub-structure never
aborts a validator.
"""

from collections.abc import Iterator, Mapping
from typing import Any, Protocol

from api_linter.model import Issue, Severity
from api_linter.schema import SchemaKind, SpecPath, classify

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
JSON_MEDIA_TYPE = "application/json"
PRIMITIVE_TYPES = ("string", "number", "integer", "boolean")

_PARAMETER_REF_PREFIX = "#/components/parameters/"


class Reporter(Protocol):
    def __call__(
        self,
        severity: Severity,
        message: str,
        location: SpecPath | str,
        suggestion: str | None = None,
    ) -> None: ...


class Validator:
    """A named, stateless rule set.

    Subclasses implement check(); validate() gives each call its own
    private issue list.
    """

    name: str = ""
    description: str = ""

    def validate(self, spec: Mapping) -> list[Issue]:
        issues: list[Issue] = []

        def report(severity, message, location, suggestion=None):
            issues.append(
                Issue(
                    severity=severity,
                    message=message,
                    location=str(location),
                    suggestion=suggestion,
                    validator=self.name,
                )
            )

        self.check(spec, report)
        return issues

    def check(self, spec: Mapping, report: Reporter) -> None:
        raise NotImplementedError


def mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def sequence(value: Any) -> list:
    return value if isinstance(value, list) else []


def is_reference(node: Any) -> bool:
    return classify(node) is SchemaKind.REFERENCE


def has_value(node: Any, key: str) -> bool:
    """True when node carries key with a non-null value."""
    return isinstance(node, Mapping) and node.get(key) is not None


def iter_path_items(spec: Mapping) -> Iterator[tuple[str, Mapping, SpecPath]]:
    """Yield (path, path_item, location) for every path template."""
    for path_name, path_item in mapping(spec.get("paths")).items():
        yield str(path_name), mapping(path_item), SpecPath.of(path_name)


def iter_operations(spec: Mapping) -> Iterator[tuple[str, str, Mapping, SpecPath]]:
    """Yield (path, method, operation, location) for every operation."""
    for path_name, path_item in mapping(spec.get("paths")).items():
        for method, operation in mapping(path_item).items():
            if method in HTTP_METHODS and isinstance(operation, Mapping):
                yield str(path_name), method, operation, SpecPath.of(path_name, method)


def operation_methods(path_item: Any) -> list[str]:
    return [m for m in mapping(path_item) if m in HTTP_METHODS and isinstance(path_item[m], Mapping)]


def responses_of(operation: Mapping) -> dict[str, Any]:
    """Responses keyed by status code string (YAML may load 200 as an int)."""
    return {str(code): response for code, response in mapping(operation.get("responses")).items()}


def status_code(code: str) -> int | None:
    try:
        return int(code)
    except ValueError:
        return None


def is_success(code: str) -> bool:
    num = status_code(code)
    return num is not None and 200 <= num < 300


def is_error(code: str) -> bool:
    num = status_code(code)
    return num is not None and 400 <= num < 600


def json_content(container: Any) -> Mapping | None:
    """The application/json media type object of a request body or response."""
    media = mapping(mapping(container).get("content")).get(JSON_MEDIA_TYPE)
    return media if isinstance(media, Mapping) else None


def json_schema(container: Any) -> Mapping | None:
    schema = mapping(json_content(container)).get("schema")
    return schema if isinstance(schema, Mapping) else None


def component_schemas(spec: Mapping) -> Mapping:
    return mapping(mapping(spec.get("components")).get("schemas"))


def resolve_parameter(spec: Mapping, parameter: Any) -> Mapping | None:
    """Inline a local #/components/parameters/<Name> reference, if any."""
    if not isinstance(parameter, Mapping):
        return None
    ref = parameter.get("$ref")
    if not isinstance(ref, str):
        return parameter
    if not ref.startswith(_PARAMETER_REF_PREFIX):
        return None
    name = ref[len(_PARAMETER_REF_PREFIX):]
    target = mapping(mapping(spec.get("components")).get("parameters")).get(name)
    return target if isinstance(target, Mapping) else None


def parameters_of(spec: Mapping, owner: Mapping, base: SpecPath) -> list[tuple[Mapping, SpecPath]]:
    """Declared parameters of an operation or path item, with their locations."""
    result = []
    for i, raw in enumerate(sequence(owner.get("parameters"))):
        param = resolve_parameter(spec, raw)
        if param is not None:
            result.append((param, base.key("parameters").index(i)))
    return result
