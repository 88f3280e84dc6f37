"""
Tests for the error hierarchy and structured error responses.
"""

import re

import pytest

from hacklearn.exceptions import (
    BaseAPIError,
    ConfigurationError,
    ContentNotFoundError,
    DatasetError,
    ErrorCodes,
    ErrorResponse,
    PurchaseRequiredError,
    RouteNotFoundError,
    StorageError,
    ValidationError,
    format_error_response,
    generate_request_id,
)


class TestRequestId:
    def test_prefix_and_uuid(self):
        request_id = generate_request_id("view")
        assert re.fullmatch(r"view-[0-9a-f-]{36}", request_id)

    def test_unique(self):
        assert generate_request_id() != generate_request_id()


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error, code, status",
        [
            (ContentNotFoundError.topic("nope"), ErrorCodes.TOPIC_NOT_FOUND, 404),
            (ContentNotFoundError.project("t", "p"), ErrorCodes.PROJECT_NOT_FOUND, 404),
            (RouteNotFoundError("/admin"), ErrorCodes.ROUTE_NOT_FOUND, 404),
            (PurchaseRequiredError("lab", 10), ErrorCodes.PURCHASE_REQUIRED, 402),
            (ValidationError("bad", [{"field": "name", "message": "required"}]), ErrorCodes.VALIDATION_ERROR, 400),
            (StorageError("cannot write", key="comments"), ErrorCodes.STORAGE_ERROR, 500),
            (DatasetError("cannot read", source="d.yaml"), ErrorCodes.DATASET_ERROR, 500),
            (ConfigurationError("bad config"), ErrorCodes.CONFIGURATION_ERROR, 500),
        ],
    )
    def test_codes_and_status(self, error, code, status):
        assert isinstance(error, BaseAPIError)
        assert error.error_code == code
        assert error.http_status == status
        assert error.is_client_error() is (status < 500)

    def test_project_not_found_details(self):
        error = ContentNotFoundError.project("xss", "lab")
        assert error.slug == "xss/lab"
        assert error.details == {"slug": "xss/lab"}
        assert error.user_message == "Project not found."

    def test_validation_errors_in_details(self):
        errors = [{"field": "comment", "message": "required"}]
        error = ValidationError("Comment rejected", errors)
        assert error.details["validation_errors"] == errors

    def test_purchase_required_user_message(self):
        assert PurchaseRequiredError("lab", 10).user_message == "Buy this project for ₹10 to download it."

    def test_configuration_error_without_path_has_no_details(self):
        assert ConfigurationError("bad").details == {}


class TestFormatErrorResponse:
    def test_api_error(self):
        error = ContentNotFoundError.topic("nope")
        payload = format_error_response(error).to_dict()

        assert payload["error_code"] == ErrorCodes.TOPIC_NOT_FOUND
        assert payload["http_status"] == 404
        assert payload["request_id"] == error.request_id
        assert payload["user_message"] == "Topic not found."
        assert payload["details"] == {"slug": "nope"}
        assert payload["timestamp"].endswith("Z")

    def test_request_id_override(self):
        payload = format_error_response(RouteNotFoundError("/x"), request_id="r-1").to_dict()
        assert payload["request_id"] == "r-1"

    def test_unknown_exception(self):
        payload = format_error_response(KeyError("boom")).to_dict()
        assert payload["error_code"] == ErrorCodes.INTERNAL_SERVER_ERROR
        assert payload["http_status"] == 500
        assert "details" not in payload
        assert "user_message" not in payload

    def test_long_message_truncated(self):
        payload = format_error_response(RuntimeError("x" * 6000)).to_dict()
        assert len(payload["message"]) == 5000
        assert payload["message"].endswith("...")

    def test_unserializable_details(self):
        response = ErrorResponse("E", "m", "r", details={"obj": object()})
        assert response.to_dict()["details"] == {"error": "Details contain non-serializable data"}
