"""Tests for api/base.py - Unified API response format."""

from datetime import timezone

from api.base import ErrorCodes, error_response, success_response


class TestSuccessResponse:
    """Tests for success_response()."""

    def test_structure(self):
        resp = success_response({"foo": "bar"})
        assert resp.success is True
        assert resp.data == {"foo": "bar"}
        assert resp.error is None

    def test_request_id_generated_outside_request(self):
        resp = success_response({})
        assert resp.meta.request_id

    def test_timestamp_is_utc(self):
        assert success_response({}).meta.timestamp.tzinfo == timezone.utc


class TestErrorResponse:
    """Tests for error_response()."""

    def test_structure(self):
        resp = error_response("TEST_ERROR", "Something went wrong")
        assert resp.success is False
        assert resp.data is None
        assert resp.error.code == "TEST_ERROR"
        assert resp.error.message == "Something went wrong"
        assert resp.error.details is None

    def test_details(self):
        resp = error_response(ErrorCodes.VALIDATION_ERROR, "Bad", {"email": "Required"})
        assert resp.error.details == {"email": "Required"}

    def test_json_shape(self):
        body = error_response("ERR", "msg").model_dump(mode="json")
        assert set(body) == {"success", "data", "error", "meta"}
        assert set(body["meta"]) == {"timestamp", "request_id"}
