from api_linter.model import Severity
from api_linter.validators.http_methods import HttpMethodsValidator, is_single_resource

BODY = {"content": {"application/json": {"schema": {"type": "object"}}}}


class TestIsSingleResource:
    def test_templated(self):
        assert is_single_resource("/pets/{petId}")

    def test_collection(self):
        assert not is_single_resource("/pets")


class TestResources:
    def test_read_only(self):
        spec = {"paths": {"/pets/{petId}": {"get": {"responses": {"200": {}}}}}}
        issues = HttpMethodsValidator().validate(spec)
        assert [(i.severity, i.message, i.location) for i in issues] == [
            (Severity.INFO, "Resource /pets/{petId} is read-only (no PUT/PATCH/DELETE).", "/pets/{petId}")
        ]

    def test_update_without_get(self):
        spec = {"paths": {"/pets/{petId}": {"put": {"requestBody": BODY}}}}
        messages = [i.message for i in HttpMethodsValidator().validate(spec)]
        assert messages == ["Resource /pets/{petId} can be updated but not retrieved."]

    def test_put_and_patch(self):
        spec = {"paths": {"/pets/{petId}": {"get": {}, "put": {"requestBody": BODY}, "patch": {"requestBody": BODY}}}}
        messages = [i.message for i in HttpMethodsValidator().validate(spec)]
        assert messages == ["Resource /pets/{petId} has both PUT and PATCH."]


class TestCollections:
    def test_create_without_list(self):
        spec = {"paths": {"/pets": {"post": {"requestBody": BODY, "responses": {"201": {}}}}}}
        issues = HttpMethodsValidator().validate(spec)
        assert [i.message for i in issues] == ["Collection /pets allows creation but not listing."]

    def test_bulk_operations(self):
        spec = {"paths": {"/pets": {"get": {}, "patch": {"requestBody": BODY}, "delete": {"responses": {"204": {}}}}}}
        issues = HttpMethodsValidator().validate(spec)
        assert [i.severity for i in issues] == [Severity.WARNING, Severity.WARNING]


class TestOperations:
    def test_body_on_get(self):
        spec = {"paths": {"/pets": {"get": {"requestBody": BODY}}}}
        issues = HttpMethodsValidator().validate(spec)
        assert issues[0].message == "GET /pets has a request body."
        assert issues[0].location == "/pets.get"

    def test_post_without_body_or_created(self):
        spec = {"paths": {"/pets": {"get": {}, "post": {"responses": {"202": {}}}}}}
        issues = HttpMethodsValidator().validate(spec)
        assert [(i.severity, i.location) for i in issues] == [
            (Severity.WARNING, "/pets.post"),
            (Severity.INFO, "/pets.post.responses"),
        ]

    def test_delete_status_codes(self):
        spec = {"paths": {"/pets/{petId}": {"get": {}, "delete": {"responses": {"202": {}}}}}}
        issues = HttpMethodsValidator().validate(spec)
        assert [i.message for i in issues] == ["DELETE /pets/{petId} doesn't define 200 or 204 response."]

    def test_integer_status_keys(self):
        spec = {"paths": {"/pets/{petId}": {"get": {}, "delete": {"responses": {204: {}}}}}}
        assert HttpMethodsValidator().validate(spec) == []
