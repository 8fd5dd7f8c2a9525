"""Structured exceptions for request failures.

The executor returns failures as result values (see ``errors.models``).
These exceptions are raised where no result can be produced (bad request
body, transport adapters) and by ``unwrap()`` for callers who prefer them.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from api_client_core.errors.models import ApiError


class ClientCoreError(Exception):
    """Base exception for request pipeline errors."""

    pass


class RequestBodyError(ClientCoreError, TypeError):
    """Request body cannot be serialized to JSON."""

    pass


class TransportFailure(ClientCoreError):
    """Network-level failure: DNS, connection, TLS, or timeout."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ResponseParseError(ClientCoreError):
    """Response body is not valid JSON, or an error response has no body."""

    def __init__(self, message: str, raw_text: str = "", status_code: int | None = None):
        super().__init__(message)
        self.raw_text = raw_text
        self.status_code = status_code


class APIError(ClientCoreError):
    """Base exception for remote-reported failures (status >= 400)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        result: "ApiError | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.result = result


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class ValidationError(ClientError):
    """422 Unprocessable Entity (validation errors)."""

    def __init__(self, message: str, validation_errors: list[Any] | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors if validation_errors is not None else []


class RateLimitError(ClientError):
    """429 Too Many Requests, or 403 with the quota exhausted."""

    def __init__(self, message: str, reset_at: datetime | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.reset_at = reset_at


class ServerError(APIError):
    """5xx server errors."""

    pass
