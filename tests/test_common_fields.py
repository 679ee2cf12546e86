from pathlib import Path

from api_linter.model import Severity
from api_linter.registry import CommonFieldRegistry, registry_from_file
from api_linter.validators.common_fields import CommonFieldsValidator, field_mismatches

FIXTURES = Path(__file__).parent / "fixtures"


def _registry():
    return registry_from_file(FIXTURES / "common.yaml")


def _schema_spec(properties: dict) -> dict:
    return {"components": {"schemas": {"Order": {"type": "object", "properties": properties}}}}


class TestFieldMismatches:
    def test_matching(self):
        expected = _registry().lookup("currency_code")
        actual = {"type": "string", "pattern": "^[A-Z]{3}$", "minLength": 3, "maxLength": 3}
        assert field_mismatches(actual, expected) == []

    def test_type_and_missing_bounds(self):
        expected = _registry().lookup("currency_code")
        problems = field_mismatches({"type": "integer"}, expected)
        assert problems[0] == "Type mismatch: expected 'string', got 'integer'"
        assert "MinLength mismatch: expected 3, got none" in problems
        assert len(problems) == 4

    def test_enum_order_does_not_matter(self):
        expected = _registry().lookup("status")
        assert field_mismatches({"type": "string", "enum": ["inactive", "active"]}, expected) == []

    def test_enum_mismatch(self):
        expected = _registry().lookup("status")
        assert field_mismatches({"type": "string", "enum": ["active"]}, expected) == ["Enum values mismatch"]


class TestCommonFieldsValidator:
    def test_one_warning_per_mismatching_property(self):
        spec = _schema_spec({"currency_code": {"type": "integer"}, "name": {"type": "string"}})
        issues = CommonFieldsValidator(_registry()).validate(spec)
        assert len(issues) == 1
        issue = issues[0]
        assert issue.severity is Severity.WARNING
        assert issue.location == "components.schemas.Order.properties.currency_code"
        assert issue.message == (
            "Common field 'currency_code' in schema 'Order' doesn't match standard definition 'CurrencyCode'."
        )
        assert issue.suggestion.startswith("Consider using standard definition: Type mismatch")
        assert issue.suggestion.endswith('Example: "EUR"')

    def test_spelling_variants_match(self):
        spec = _schema_spec({"createdAt": {"type": "string"}})
        issues = CommonFieldsValidator(_registry()).validate(spec)
        assert len(issues) == 1
        assert "'CreatedAt'" in issues[0].message

    def test_composition_members_are_checked(self):
        spec = {"components": {"schemas": {"Order": {"allOf": [{"properties": {"status": {"type": "string"}}}]}}}}
        issues = CommonFieldsValidator(_registry()).validate(spec)
        assert [i.location for i in issues] == ["components.schemas.Order.allOf[0].properties.status"]

    def test_response_location(self):
        spec = {"paths": {"/orders": {"get": {"responses": {"200": {"content": {"application/json": {
            "schema": {"type": "object", "properties": {"status": {"type": "integer"}}}
        }}}}}}}}
        issues = CommonFieldsValidator(_registry()).validate(spec)
        assert len(issues) == 1
        assert issues[0].location == "/orders.get.responses.200.properties.status"
        assert "in response" in issues[0].message

    def test_ref_property_is_skipped(self):
        spec = _schema_spec({"status": {"$ref": "#/components/schemas/Status"}})
        assert CommonFieldsValidator(_registry()).validate(spec) == []

    def test_empty_registry_reports_nothing(self):
        spec = _schema_spec({"currency_code": {"type": "integer"}})
        assert CommonFieldsValidator(CommonFieldRegistry.empty()).validate(spec) == []
