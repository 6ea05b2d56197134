import asyncio

import httpx
import pytest

from billed.errors import (
    ErrorKind,
    InvalidFileTypeError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
    UploadInProgressError,
    ValidationError,
    classify_error,
)


class TestErrorKinds:
    def test_kinds(self):
        assert InvalidFileTypeError("application/pdf").kind == ErrorKind.INVALID_FILE_TYPE
        assert NetworkError("down").kind == ErrorKind.NETWORK_ERROR
        assert ServerError(500).kind == ErrorKind.SERVER_ERROR
        assert RequestTimeoutError("slow").kind == ErrorKind.TIMEOUT
        assert ValidationError("name").kind == ErrorKind.VALIDATION_ERROR
        assert UploadInProgressError().kind == ErrorKind.UPLOAD_IN_PROGRESS

    def test_server_error_message(self):
        error = ServerError(404)
        assert error.code == 404
        assert str(error) == "Erreur 404"

    def test_validation_error_field(self):
        error = ValidationError("amount")
        assert error.field == "amount"
        assert "amount" in str(error)


class TestClassifyError:
    def test_bill_errors_pass_through(self):
        error = ServerError(500)
        assert classify_error(error) is error

    def test_asyncio_timeout(self):
        assert isinstance(classify_error(asyncio.TimeoutError()), RequestTimeoutError)

    def test_httpx_timeout(self):
        assert isinstance(classify_error(httpx.ReadTimeout("slow")), RequestTimeoutError)

    def test_httpx_status_error(self):
        request = httpx.Request("GET", "https://api.test/bills")
        response = httpx.Response(503, request=request)
        exc = httpx.HTTPStatusError("unavailable", request=request, response=response)
        result = classify_error(exc)
        assert isinstance(result, ServerError)
        assert result.code == 503

    @pytest.mark.parametrize("exc", [httpx.ConnectError("refused"), ConnectionRefusedError("refused"), OSError("io")])
    def test_transport_errors(self, exc):
        assert isinstance(classify_error(exc), NetworkError)

    @pytest.mark.parametrize("code", [404, 500])
    def test_status_in_message(self, code):
        result = classify_error(Exception(f"Erreur {code}"))
        assert isinstance(result, ServerError)
        assert result.code == code

    def test_unknown_error_returned_unchanged(self):
        exc = ValueError("something else")
        assert classify_error(exc) is exc

    @pytest.mark.parametrize("message", ["amount 450 exceeds ceiling", "row 404 of the import", "Erreur 4040"])
    def test_bare_numbers_are_not_status_codes(self, message):
        exc = ValueError(message)
        assert classify_error(exc) is exc
