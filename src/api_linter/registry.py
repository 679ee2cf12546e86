"""Common field registry.

Holds the organisation-wide canonical field definitions (currency codes,
ids, timestamps, ...) and resolves spelling variants of a field name
(snake_case, camelCase, PascalCase, lower case) to one canonical entry.

The registry never changes after construction; build one per process (or
per test) and hand it to the engine.
"""

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_COMMON_FIELDS = Path(__file__).parent / "data" / "common.yaml"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[_\-\s]+")


class RegistryLoadError(Exception):
    """The common field source could not be turned into a registry."""


class FieldDefinition(BaseModel):
    """Canonical definition of a common field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    name: str
    type: str | None = None
    format: str | None = None
    pattern: str | None = None
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    enum: list[Any] | None = None
    description: str | None = None
    example: Any = None

    def as_schema(self) -> dict[str, Any]:
        """Schema-node form, as written in the source table."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"name"})


def to_snake(name: str) -> str:
    """UserId -> user_id, currencyCode -> currency_code, HTTPStatus -> http_status."""
    return _SEPARATORS.sub("_", _CAMEL_BOUNDARY.sub("_", name)).strip("_").lower()


def to_camel(name: str) -> str:
    """user_id -> userId, CurrencyCode -> currencyCode."""
    words = [w for w in to_snake(name).split("_") if w]
    if not words:
        return name
    return words[0] + "".join(w.capitalize() for w in words[1:])


def _variants(name: str) -> list[str]:
    """Lookup keys for a field name, most specific first."""
    keys = [name, name.lower(), to_snake(name), to_camel(name), to_camel(name).lower()]
    keys.append(_SEPARATORS.sub("", name).lower())
    seen: list[str] = []
    for key in keys:
        if key and key not in seen:
            seen.append(key)
    return seen


class CommonFieldRegistry:
    """Immutable canonical-name -> definition table with fuzzy name lookup."""

    def __init__(self, definitions: Mapping[str, FieldDefinition] | None = None):
        self._definitions: dict[str, FieldDefinition] = dict(definitions or {})
        self._aliases: dict[str, str] = {}
        for canonical in self._definitions:
            for key in _variants(canonical):
                owner = self._aliases.setdefault(key, canonical)
                if owner != canonical:
                    logger.debug("Field spelling %r already maps to %r, ignoring %r", key, owner, canonical)

    @classmethod
    def empty(cls) -> "CommonFieldRegistry":
        return cls()

    def lookup(self, name: str) -> FieldDefinition | None:
        canonical = self.canonical_name(name)
        return self._definitions[canonical] if canonical else None

    def canonical_name(self, name: str) -> str | None:
        if not isinstance(name, str):
            return None
        for key in _variants(name):
            if key in self._aliases:
                return self._aliases[key]
        return None

    def field_count(self) -> int:
        return len(self._definitions)

    def fields(self) -> dict[str, FieldDefinition]:
        return dict(self._definitions)

    def names(self) -> list[str]:
        return list(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.canonical_name(name) is not None


def load_registry(source: Any) -> CommonFieldRegistry:
    """Build a registry from a name -> schema mapping or a full OpenAPI document.

    Raises RegistryLoadError when the source is malformed.
    """
    if not isinstance(source, Mapping):
        raise RegistryLoadError(f"common field source must be a mapping, got {type(source).__name__}")

    table = source
    components = source.get("components")
    if isinstance(components, Mapping) and "schemas" in components:
        table = components["schemas"]
        if not isinstance(table, Mapping):
            raise RegistryLoadError("components.schemas must be a mapping")

    definitions: dict[str, FieldDefinition] = {}
    for name, node in table.items():
        if not isinstance(node, Mapping):
            raise RegistryLoadError(f"definition for '{name}' must be a mapping")
        try:
            definitions[str(name)] = FieldDefinition.model_validate({**node, "name": str(name)})
        except ValidationError as e:
            raise RegistryLoadError(f"invalid definition for '{name}': {e}") from e
    return CommonFieldRegistry(definitions)


def registry_from_file(file_path: Path) -> CommonFieldRegistry:
    """Load a registry from a YAML (or JSON) file."""
    try:
        data = yaml.safe_load(Path(file_path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise RegistryLoadError(f"cannot read common fields from {file_path}: {e}") from e
    return load_registry(data)


def load_default_registry(file_path: Path | None = None) -> CommonFieldRegistry:
    """Load the common field table, falling back to an empty registry.

    With an empty registry the common fields validator reports nothing.
    """
    path = file_path or DEFAULT_COMMON_FIELDS
    try:
        registry = registry_from_file(path)
    except RegistryLoadError as e:
        logger.warning("Could not load common fields: %s. Common field validation will be skipped.", e)
        return CommonFieldRegistry.empty()
    logger.info("Loaded %d common field definitions from %s", registry.field_count(), path)
    return registry
