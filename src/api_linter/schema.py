"""Schema traversal helpers.

SpecPath builds issue locations from structured segments and only turns
them into the dotted string form when rendered. walk() visits every
nested property of a JSON-Schema-like node.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

COMPOSITION_KEYS = ("allOf", "anyOf", "oneOf")


class SegmentKind(str, Enum):
    KEY = "key"  # plain mapping key: path template, method, "responses", ...
    PROPERTY = "property"  # properties.<name>
    ITEMS = "items"  # array element schema
    COMPOSITION = "composition"  # allOf[i] / anyOf[i] / oneOf[i]
    INDEX = "index"  # list index, e.g. parameters[0]


@dataclass(frozen=True, slots=True)
class Segment:
    kind: SegmentKind
    name: str = ""
    index: int = 0

    def render(self) -> str:
        if self.kind is SegmentKind.PROPERTY:
            return f".properties.{self.name}"
        if self.kind is SegmentKind.ITEMS:
            return ".items"
        if self.kind is SegmentKind.COMPOSITION:
            return f".{self.name}[{self.index}]"
        if self.kind is SegmentKind.INDEX:
            return f"[{self.index}]"
        return f".{self.name}"


@dataclass(frozen=True, slots=True)
class SpecPath:
    """Immutable location inside a spec document."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def of(cls, *keys: Any) -> "SpecPath":
        return cls(tuple(Segment(SegmentKind.KEY, str(k)) for k in keys))

    def _extend(self, segment: Segment) -> "SpecPath":
        return SpecPath(self.segments + (segment,))

    def key(self, *names: Any) -> "SpecPath":
        path = self
        for name in names:
            path = path._extend(Segment(SegmentKind.KEY, str(name)))
        return path

    def prop(self, name: Any) -> "SpecPath":
        return self._extend(Segment(SegmentKind.PROPERTY, str(name)))

    def items(self) -> "SpecPath":
        return self._extend(Segment(SegmentKind.ITEMS))

    def composition(self, keyword: str, index: int) -> "SpecPath":
        return self._extend(Segment(SegmentKind.COMPOSITION, keyword, index))

    def index(self, index: int) -> "SpecPath":
        return self._extend(Segment(SegmentKind.INDEX, index=index))

    def __str__(self) -> str:
        rendered = "".join(s.render() for s in self.segments)
        return rendered[1:] if rendered.startswith(".") else rendered


class SchemaKind(str, Enum):
    """Shape of a schema node, checked in this order by classify()."""

    REFERENCE = "reference"
    COMPOSITION = "composition"
    OBJECT = "object"
    ARRAY = "array"
    PRIMITIVE = "primitive"
    EMPTY = "empty"


def classify(node: Any) -> SchemaKind:
    if not isinstance(node, Mapping):
        return SchemaKind.EMPTY
    if isinstance(node.get("$ref"), str):
        return SchemaKind.REFERENCE
    if any(node.get(k) for k in COMPOSITION_KEYS):
        return SchemaKind.COMPOSITION
    schema_type = node.get("type")
    if schema_type == "object" or "properties" in node:
        return SchemaKind.OBJECT
    if schema_type == "array" or "items" in node:
        return SchemaKind.ARRAY
    if schema_type is not None:
        return SchemaKind.PRIMITIVE
    return SchemaKind.EMPTY


Visitor = Callable[[str, Mapping, SpecPath], None]


def walk(
    node: Any,
    visit: Visitor,
    base: SpecPath = SpecPath(),
    compositions: bool = False,
) -> None:
    """Call visit(name, property_schema, path) for every nested property.

    Recurses into properties and items, and into allOf/anyOf/oneOf members
    when compositions is set. $ref nodes are never followed.
    """
    _walk(node, visit, base, compositions, set())


def _walk(node: Any, visit: Visitor, path: SpecPath, compositions: bool, active: set[int]) -> None:
    if not isinstance(node, Mapping) or classify(node) is SchemaKind.REFERENCE:
        return
    if id(node) in active:
        return
    active.add(id(node))
    try:
        properties = node.get("properties")
        if isinstance(properties, Mapping):
            for name, prop_schema in properties.items():
                if not isinstance(prop_schema, Mapping):
                    continue
                prop_path = path.prop(name)
                visit(str(name), prop_schema, prop_path)
                _walk(prop_schema, visit, prop_path, compositions, active)

        items = node.get("items")
        if isinstance(items, Mapping):
            _walk(items, visit, path.items(), compositions, active)

        if compositions:
            for keyword in COMPOSITION_KEYS:
                members = node.get(keyword)
                if not isinstance(members, list):
                    continue
                for i, member in enumerate(members):
                    _walk(member, visit, path.composition(keyword, i), compositions, active)
    finally:
        active.discard(id(node))
