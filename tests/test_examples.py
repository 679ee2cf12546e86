from api_linter.model import Severity
from api_linter.validators.examples import ExamplesValidator, has_example


class TestHasExample:
    def test_present(self):
        assert has_example({"example": 0})
        assert has_example({"examples": {"a": {"value": 1}}})

    def test_null_is_absent(self):
        assert not has_example({"example": None})
        assert not has_example("not a schema")


class TestComponentSchemas:
    def test_object_without_example(self):
        spec = {"components": {"schemas": {"Pet": {"type": "object", "properties": {"name": {"type": "string"}}}}}}
        issues = ExamplesValidator().validate(spec)
        assert [(i.severity, i.message, i.location) for i in issues] == [
            (Severity.INFO, "Schema 'Pet' has no example defined.", "components.schemas.Pet")
        ]

    def test_large_objects_are_exempt(self):
        properties = {f"field{n}": {"type": "string"} for n in range(11)}
        spec = {"components": {"schemas": {"Big": {"type": "object", "properties": properties}}}}
        assert ExamplesValidator().validate(spec) == []

    def test_primitive_without_example(self):
        spec = {"components": {"schemas": {"Code": {"type": "string"}}}}
        assert [i.message for i in ExamplesValidator().validate(spec)] == ["Schema 'Code' has no example value."]

    def test_falsy_example_counts(self):
        spec = {"components": {"schemas": {"Flag": {"type": "boolean", "example": False}}}}
        assert ExamplesValidator().validate(spec) == []

    def test_required_property_without_example(self):
        spec = {"components": {"schemas": {"Pet": {
            "type": "object",
            "required": ["name", "tag", "owner"],
            "example": {"name": "Rex"},
            "properties": {
                "name": {"type": "string"},
                "tag": {"type": "string", "default": "none"},
                "owner": {"$ref": "#/components/schemas/Owner"},
                "nickname": {"type": "string"},
            },
        }}}}
        issues = ExamplesValidator().validate(spec)
        assert [(i.message, i.location) for i in issues] == [
            ("Required property 'Pet.name' has no example.", "components.schemas.Pet.properties.name")
        ]

    def test_composed_schemas_are_skipped(self):
        spec = {"components": {"schemas": {"Any": {"oneOf": [{"type": "string"}]}}}}
        assert ExamplesValidator().validate(spec) == []


class TestParameters:
    def test_query_and_path_parameters(self):
        spec = {"paths": {"/pets/{petId}": {"get": {"parameters": [
            {"name": "petId", "in": "path", "schema": {"type": "string"}},
            {"name": "limit", "in": "query", "example": 10},
            {"name": "page", "in": "query", "schema": {"type": "integer", "example": 1}},
            {"name": "X-Trace", "in": "header"},
        ]}}}}
        issues = ExamplesValidator().validate(spec)
        assert [(i.message, i.location) for i in issues] == [
            ("Parameter 'petId' has no example value.", "/pets/{petId}.get.parameters[0]")
        ]

    def test_path_item_parameters(self):
        spec = {"paths": {"/pets/{petId}": {
            "parameters": [{"name": "petId", "in": "path", "required": True, "schema": {"type": "integer"}}],
            "get": {"summary": "Get a pet"},
            "put": {"summary": "Replace a pet"},
        }}}
        issues = ExamplesValidator().validate(spec)
        assert [(i.severity, i.message, i.location) for i in issues] == [
            (Severity.INFO, "Parameter 'petId' has no example value.", "/pets/{petId}.parameters[0]")
        ]
