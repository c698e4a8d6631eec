"""
Tests for CampusAPIError payload parsing.
"""

from client.exceptions import CampusAPIError


class TestFromPayload:
    def test_service_error_shape(self):
        error = CampusAPIError.from_payload(
            409, {"error": "Friend request already pending", "error_code": "REQUEST_ALREADY_PENDING"}
        )

        assert str(error) == "Friend request already pending"
        assert error.status == 409
        assert error.error_code == "REQUEST_ALREADY_PENDING"

    def test_detail_shape(self):
        error = CampusAPIError.from_payload(
            401, {"detail": "Authentication credentials were not provided.", "code": "not_authenticated"}
        )

        assert error.message == "Authentication credentials were not provided."
        assert error.error_code == "not_authenticated"

    def test_field_errors(self):
        error = CampusAPIError.from_payload(400, {"content": ["This field may not be blank."]})

        assert str(error) == "content: This field may not be blank."
        assert error.error_code == "VALIDATION_ERROR"
        assert error.errors == {"content": ["This field may not be blank."]}

    def test_non_json_body(self):
        error = CampusAPIError.from_payload(502, "Bad Gateway")

        assert str(error) == "Bad Gateway"
        assert error.error_code is None

    def test_empty_body(self):
        assert str(CampusAPIError.from_payload(500, {})) == "Request failed with status 500"
