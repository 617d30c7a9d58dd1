"""
Tests for error body parsing and transport failure classification.
"""

import httpx

from content_delivery.core.errors import (
    classify_request_exception,
    describe_transport_failure,
    parse_error_body,
    parse_error_code,
)
from content_delivery.models import ErrorResponse


class TestParseErrorBody:
    def test_full_json_body(self):
        error = parse_error_body(
            '{"error_message":"Entry not found","error_code":141,"errors":{"uid":["is invalid"]}}'
        )

        assert error == ErrorResponse("Entry not found", 141, '{"uid":["is invalid"]}')

    def test_string_errors_kept(self):
        error = parse_error_body('{"error_message":"Bad","error_code":"422","errors":"details"}')

        assert error.code == 422
        assert error.detail == "details"

    def test_missing_message_uses_fallback(self):
        error = parse_error_body('{"error_code":105}')

        assert error.message == "An unknown error occurred."
        assert error.code == 105
        assert error.detail is None

    def test_blank_message_uses_fallback(self):
        assert parse_error_body('{"error_message":"  "}').message == "An unknown error occurred."

    def test_non_json_kept_verbatim(self):
        error = parse_error_body("Bad Gateway")

        assert error.message == "Bad Gateway"
        assert error.code == 0

    def test_json_array_kept_verbatim(self):
        assert parse_error_body("[1,2]").message == "[1,2]"

    def test_empty_body(self):
        for text in ("", "   ", None):
            error = parse_error_body(text)
            assert error.message == "Unexpected error: No response received from server."
            assert error.code == 0


class TestParseErrorCode:
    def test_values(self):
        assert parse_error_code(141) == 141
        assert parse_error_code(" 7 ") == 7
        assert parse_error_code("abc") == 0
        assert parse_error_code(None) == 0
        assert parse_error_code(True) == 0
        assert parse_error_code(1.5) == 0


class TestTransportFailures:
    def test_timeout(self):
        exc = httpx.ReadTimeout("timed out")

        assert classify_request_exception(exc) == "timeout"
        assert describe_transport_failure(exc) == "Request timed out: timed out"

    def test_connect_error(self):
        exc = httpx.ConnectError("connection refused")

        assert classify_request_exception(exc) == "network"
        assert describe_transport_failure(exc) == "Network error: connection refused"

    def test_os_error_is_network(self):
        assert classify_request_exception(ConnectionResetError("reset")) == "network"

    def test_message_text_is_not_inspected(self):
        assert classify_request_exception(ValueError("host unreachable")) == "unknown"

    def test_unknown(self):
        exc = ValueError("bad value")

        assert classify_request_exception(exc) == "unknown"
        assert describe_transport_failure(exc) == "Request failed: bad value"

    def test_empty_message_uses_class_name(self):
        assert describe_transport_failure(RuntimeError()) == "Request failed: RuntimeError"
