from api_linter.model import Severity
from api_linter.validators.required_fields import RequiredFieldsValidator

PROPS = {"name": {"type": "string"}, "tag": {"type": "string"}}


def _body_spec(schema, method="post", required=True):
    body = {"content": {"application/json": {"schema": schema}}}
    if required is not None:
        body["required"] = required
    return {"paths": {"/pets": {method: {"requestBody": body}}}}


class TestRequestBodies:
    def test_no_required_list(self):
        issues = RequiredFieldsValidator().validate(_body_spec({"type": "object", "properties": PROPS}))
        assert len(issues) == 1
        assert issues[0].severity is Severity.WARNING
        assert issues[0].message == "Request body has 2 properties but no required fields specified."
        assert issues[0].location == "/pets.post.requestBody"

    def test_empty_required_list(self):
        issues = RequiredFieldsValidator().validate(
            _body_spec({"type": "object", "properties": PROPS, "required": []})
        )
        assert [i.severity for i in issues] == [Severity.INFO]

    def test_body_not_marked_required(self):
        schema = {"type": "object", "properties": PROPS, "required": ["name"]}
        issues = RequiredFieldsValidator().validate(_body_spec(schema, "put", required=None))
        assert [i.message for i in issues] == ["PUT request body should be marked as required."]

    def test_patch_body_may_be_optional(self):
        schema = {"type": "object", "properties": PROPS, "required": ["name"]}
        assert RequiredFieldsValidator().validate(_body_spec(schema, "patch", required=False)) == []


class TestComponentSchemas:
    def test_missing_required_list(self):
        spec = {"components": {"schemas": {"Pet": {"type": "object", "properties": PROPS}}}}
        issues = RequiredFieldsValidator().validate(spec)
        assert [(i.severity, i.location) for i in issues] == [(Severity.INFO, "components.schemas.Pet")]

    def test_required_field_without_property(self):
        spec = {"components": {"schemas": {"Pet": {"type": "object", "properties": PROPS, "required": ["name", "owner"]}}}}
        issues = RequiredFieldsValidator().validate(spec)
        assert len(issues) == 1
        assert issues[0].severity is Severity.ERROR
        assert issues[0].message == "Schema 'Pet' marks 'owner' as required but property doesn't exist."

    def test_contradiction_without_properties(self):
        spec = {"components": {"schemas": {"Pet": {"type": "object", "required": ["name"]}}}}
        assert [i.severity for i in RequiredFieldsValidator().validate(spec)] == [Severity.ERROR]

    def test_non_object_schemas_are_skipped(self):
        spec = {"components": {"schemas": {"Tag": {"type": "string", "required": ["x"]}}}}
        assert RequiredFieldsValidator().validate(spec) == []
