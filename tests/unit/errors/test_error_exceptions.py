"""Tests for structured exceptions."""

from datetime import UTC, datetime

import httpx
import pytest

from api_client_core.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientCoreError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    RequestBodyError,
    ResponseParseError,
    ServerError,
    TransportFailure,
    UnauthorizedError,
    ValidationError,
)
from api_client_core.errors.models import ApiError


@pytest.mark.unit
def test_api_error_instantiation():
    """Test APIError can be instantiated with all attributes."""
    result = ApiError(status=500, message="Error", raw_payload={"message": "Error"})

    error = APIError(message="Test error", status_code=500, result=result)

    assert str(error) == "Test error"
    assert error.status_code == 500
    assert error.result is result


@pytest.mark.unit
def test_exception_inheritance():
    """Test exception inheritance chain."""
    # Everything raised by the pipeline shares one base
    for exc_class in (APIError, RequestBodyError, TransportFailure, ResponseParseError):
        assert issubclass(exc_class, ClientCoreError)

    # ClientError inherits from APIError
    assert issubclass(ClientError, APIError)

    # All 4xx errors inherit from ClientError
    assert issubclass(BadRequestError, ClientError)
    assert issubclass(UnauthorizedError, ClientError)
    assert issubclass(ForbiddenError, ClientError)
    assert issubclass(NotFoundError, ClientError)
    assert issubclass(ConflictError, ClientError)
    assert issubclass(ValidationError, ClientError)
    assert issubclass(RateLimitError, ClientError)

    # ServerError inherits from APIError
    assert issubclass(ServerError, APIError)


@pytest.mark.unit
def test_request_body_error_is_type_error():
    """Unserializable bodies can be caught as TypeError too."""
    assert issubclass(RequestBodyError, TypeError)


@pytest.mark.unit
def test_validation_error_defaults_to_empty_list():
    error = ValidationError("Validation failed")

    assert error.validation_errors == []


@pytest.mark.unit
def test_validation_error_keeps_empty_list():
    errors: list = []

    assert ValidationError("Validation failed", validation_errors=errors).validation_errors is errors


@pytest.mark.unit
def test_rate_limit_error_reset_at():
    reset_at = datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)

    error = RateLimitError("Rate limited", reset_at=reset_at, status_code=429)

    assert error.reset_at == reset_at
    assert error.status_code == 429


@pytest.mark.unit
def test_transport_failure_keeps_cause():
    cause = httpx.ConnectError("refused")

    assert TransportFailure("GET failed", cause=cause).cause is cause


@pytest.mark.unit
def test_response_parse_error_attributes():
    error = ResponseParseError("no output to parse", raw_text="", status_code=403)

    assert error.raw_text == ""
    assert error.status_code == 403
