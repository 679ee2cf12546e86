from api_linter.model import Severity
from api_linter.validators.error_responses import ErrorResponsesValidator

ERROR_SCHEMA = {"type": "object", "properties": {"message": {"type": "string"}}}


def _spec(method: str, responses: dict) -> dict:
    return {"paths": {"/pets": {method: {"responses": responses}}}}


def _json(schema):
    return {"application/json": {"schema": schema}}


class TestErrorResponses:
    def test_no_error_responses(self):
        issues = ErrorResponsesValidator().validate(_spec("get", {"200": {"description": "OK."}}))
        messages = [(i.severity, i.message) for i in issues]
        assert messages == [
            (Severity.ERROR, "Endpoint GET /pets has no error responses defined."),
            (Severity.WARNING, "GET /pets should define 404 response."),
            (Severity.INFO, "GET /pets should define 500 response."),
        ]
        assert all(i.location == "/pets.get" for i in issues)

    def test_complete_error_set(self):
        responses = {
            "200": {"description": "OK."},
            "404": {"description": "Not found.", "content": _json(ERROR_SCHEMA)},
            "500": {"description": "Server error.", "content": _json({"$ref": "#/components/schemas/Error"})},
        }
        assert ErrorResponsesValidator().validate(_spec("get", responses)) == []

    def test_integer_status_keys(self):
        responses = {200: {"description": "OK."}, 404: {"description": "Missing.", "content": _json(ERROR_SCHEMA)},
                     500: {"description": "Boom.", "content": _json(ERROR_SCHEMA)}}
        assert ErrorResponsesValidator().validate(_spec("delete", responses)) == []

    def test_error_response_details(self):
        responses = {"201": {}, "400": {}, "409": {"description": "Conflict.", "content": _json({"type": "object"})}}
        issues = ErrorResponsesValidator().validate(_spec("post", responses))
        by_message = {i.message: i for i in issues}

        missing_description = by_message["Error response 400 is missing description."]
        assert missing_description.location == "/pets.post.responses.400"
        assert missing_description.suggestion == 'Add description, e.g., "Bad Request - Invalid input"'
        assert "Error response 400 has no schema defined." in by_message
        assert "Error response 409 schema should contain error information." in by_message
        assert "POST /pets should define 400 response." not in by_message
        assert "POST /pets should define 500 response." in by_message

    def test_ref_response_is_not_inspected(self):
        responses = {"200": {}, "400": {"$ref": "#/components/responses/BadRequest"}, "500": {"$ref": "#"}}
        assert ErrorResponsesValidator().validate(_spec("patch", responses)) == []

    def test_missing_responses_map(self):
        issues = ErrorResponsesValidator().validate({"paths": {"/pets": {"put": {}}}})
        assert [i.severity for i in issues] == [Severity.ERROR, Severity.WARNING, Severity.INFO]
