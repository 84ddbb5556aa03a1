#!/usr/bin/env python3
"""Tests for error handling functionality"""

from flask import Flask
from werkzeug.exceptions import NotFound

from docsign.api.middleware import register_error_handlers
from docsign.schemas.error import ErrorResponse
from docsign.utils.exceptions import (
    DocSignError, MissingInputError, ValidationError, ParseError,
    PageRangeError, AssetDecodeError, PayloadTooLargeError,
    TransformTimeoutError, StorageError
)


def _make_test_app(exc: Exception) -> Flask:
    app = Flask(__name__)
    register_error_handlers(app)

    @app.route("/boom")
    def boom():
        raise exc

    return app


def test_docsign_error_creation():
    """Test DocSignError base class"""
    error = DocSignError("TEST_ERROR", "Test message", 400, "field1", {"key": "value"})

    assert error.code == "TEST_ERROR"
    assert error.message == "Test message"
    assert error.status_code == 400
    assert error.field == "field1"
    assert error.details == {"key": "value"}
    assert str(error) == "Test message"
    print("[PASS] DocSignError creation test passed")


def test_missing_input_error():
    """Test MissingInputError"""
    error = MissingInputError("pdfData", "No PDF data provided")

    assert error.code == "MISSING_INPUT"
    assert error.status_code == 400
    assert error.field == "pdfData"
    assert error.message == "No PDF data provided"
    assert MissingInputError("fields").message == "Missing required input: fields"
    print("[PASS] MissingInputError test passed")


def test_validation_error():
    """Test ValidationError"""
    error = ValidationError("Invalid input", "fields", {"count": 3})

    assert error.code == "VALIDATION_ERROR"
    assert error.status_code == 400
    assert error.field == "fields"
    assert error.details == {"count": 3}
    print("[PASS] ValidationError test passed")


def test_parse_error():
    """Test ParseError"""
    error = ParseError("EOF marker not found")

    assert error.code == "PDF_PARSE_ERROR"
    assert error.message == "Could not read PDF document: EOF marker not found"
    assert error.status_code == 422
    assert ParseError().message == "Could not read PDF document"
    print("[PASS] ParseError test passed")


def test_page_range_error():
    """Test PageRangeError"""
    error = PageRangeError(4, 2, field_id="sig-1")

    assert error.code == "PAGE_OUT_OF_RANGE"
    assert error.message == "Page 4 does not exist (document has 2 pages)"
    assert error.details == {"page": 4, "page_count": 2, "field_id": "sig-1"}
    assert PageRangeError(2, 1).message == "Page 2 does not exist (document has 1 page)"
    print("[PASS] PageRangeError test passed")


def test_asset_decode_error():
    """Test AssetDecodeError"""
    error = AssetDecodeError("cannot identify image file", field_id="sig-1")

    assert error.code == "ASSET_DECODE_ERROR"
    assert error.message == "Could not decode embedded image: cannot identify image file"
    assert error.details == {"field_id": "sig-1"}
    print("[PASS] AssetDecodeError test passed")


def test_payload_and_timeout_errors():
    """Test PayloadTooLargeError and TransformTimeoutError"""
    too_large = PayloadTooLargeError(2048, 1024)
    assert too_large.status_code == 413
    assert too_large.details == {"size": 2048, "limit": 1024}

    timeout = TransformTimeoutError("transform", 2.5)
    assert timeout.status_code == 504
    assert timeout.message == "transform did not finish within 2.5 seconds"
    print("[PASS] payload/timeout error test passed")


def test_storage_error():
    """Test StorageError"""
    error = StorageError("write", "/path/to/file", "Permission denied")

    assert error.code == "STORAGE_ERROR"
    assert error.message == "File write failed for /path/to/file: Permission denied"
    assert error.status_code == 500
    print("[PASS] StorageError test passed")


def test_error_response_schema():
    """Test ErrorResponse model serialization"""
    response = ErrorResponse(
        error="Test message",
        code="TEST_ERROR",
        field="test_field",
        details={"key": "value"},
        request_id="12345"
    )

    assert response.model_dump() == {
        "error": "Test message",
        "code": "TEST_ERROR",
        "field": "test_field",
        "details": {"key": "value"},
        "request_id": "12345"
    }
    print("[PASS] ErrorResponse schema test passed")


def test_handler_converts_docsign_errors():
    """Domain errors keep their status and come back as {error, code, ...}"""
    client = _make_test_app(PageRangeError(3, 1)).test_client()

    res = client.get("/boom")

    assert res.status_code == 422
    body = res.get_json()
    assert body["error"] == "Page 3 does not exist (document has 1 page)"
    assert body["code"] == "PAGE_OUT_OF_RANGE"
    assert body["request_id"]
    print("[PASS] DocSignError handler test passed")


def test_handler_converts_http_exceptions():
    """Werkzeug HTTP errors keep their status in the same shape"""
    client = _make_test_app(NotFound("nothing here")).test_client()

    res = client.get("/boom")

    assert res.status_code == 404
    assert res.get_json()["code"] == "HTTP_EXCEPTION"
    assert client.get("/no-such-route").status_code == 404
    print("[PASS] HTTPException handler test passed")


def test_handler_hides_unexpected_errors():
    """Unexpected exceptions become a generic 500 without leaking the message"""
    client = _make_test_app(RuntimeError("secret internals")).test_client()

    res = client.get("/boom")

    assert res.status_code == 500
    body = res.get_json()
    assert body["code"] == "INTERNAL_SERVER_ERROR"
    assert "secret" not in body["error"]
    assert body["details"] == {"error_type": "RuntimeError"}
    print("[PASS] unexpected error handler test passed")


if __name__ == "__main__":
    print("Running error handling tests...")
    print()

    test_docsign_error_creation()
    test_missing_input_error()
    test_validation_error()
    test_parse_error()
    test_page_range_error()
    test_asset_decode_error()
    test_payload_and_timeout_errors()
    test_storage_error()
    test_error_response_schema()
    test_handler_converts_docsign_errors()
    test_handler_converts_http_exceptions()
    test_handler_hides_unexpected_errors()

    print()
    print("[SUCCESS] All tests passed!")
