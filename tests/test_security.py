from api_linter.model import Severity
from api_linter.validators.security import SecurityValidator

SCHEMES = {"securitySchemes": {"bearerAuth": {"type": "http", "scheme": "bearer"}}}


class TestSecurityValidator:
    def test_unauthenticated_post(self):
        spec = {"paths": {"/pets": {"post": {}}}, "components": SCHEMES}
        issues = SecurityValidator().validate(spec)
        errors = [i for i in issues if i.severity is Severity.ERROR]
        assert len(errors) == 1
        assert errors[0].message == "POST /pets modifies data but has no authentication."
        assert errors[0].location == "/pets.post"
        assert [i.message for i in issues if i.severity is Severity.WARNING] == [
            "Endpoint POST /pets has no security defined."
        ]

    def test_global_security_covers_operations(self):
        spec = {"security": [{"bearerAuth": []}], "paths": {"/pets": {"post": {}, "get": {}}}, "components": SCHEMES}
        assert SecurityValidator().validate(spec) == []

    def test_operation_security(self):
        spec = {"paths": {"/pets": {"delete": {"security": [{"bearerAuth": []}]}}}, "components": SCHEMES}
        assert SecurityValidator().validate(spec) == []

    def test_public_read(self):
        spec = {"paths": {"/pets": {"get": {"security": []}}}, "components": SCHEMES}
        issues = SecurityValidator().validate(spec)
        assert len(issues) == 1
        assert issues[0].severity is Severity.INFO
        assert issues[0].message == "Endpoint GET /pets is publicly accessible (no authentication)."

    def test_public_write_without_global_security(self):
        spec = {"paths": {"/pets": {"put": {"security": []}}}, "components": SCHEMES}
        severities = [i.severity for i in SecurityValidator().validate(spec)]
        assert severities == [Severity.INFO, Severity.ERROR]

    def test_public_write_under_global_security(self):
        spec = {"security": [{"bearerAuth": []}], "paths": {"/pets": {"put": {"security": []}}}, "components": SCHEMES}
        assert [i.severity for i in SecurityValidator().validate(spec)] == [Severity.INFO]

    def test_no_schemes_at_all(self):
        issues = SecurityValidator().validate({})
        assert len(issues) == 1
        assert issues[0].location == "components.securitySchemes"

    def test_undefined_scheme_names(self):
        spec = {
            "security": [{"apiKey": []}],
            "paths": {"/pets": {"get": {"security": [{"oauth": ["read"]}]}}},
            "components": SCHEMES,
        }
        issues = SecurityValidator().validate(spec)
        assert [(i.message, i.location) for i in issues] == [
            ("Security scheme 'oauth' is referenced but not defined.", "/pets.get.security"),
            ("Security scheme 'apiKey' is referenced but not defined.", "security"),
        ]
