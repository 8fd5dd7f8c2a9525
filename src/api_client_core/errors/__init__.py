"""Response classification, result variants, and the exception taxonomy."""

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
from api_client_core.errors.handler import (
    classify,
    classify_transport_failure,
    parse_rate_limit_reset,
    raise_for_result,
)
from api_client_core.errors.models import (
    NO_CONTENT,
    ApiError,
    ClassifiedResult,
    ParseError,
    Success,
    TransportError,
)

__all__ = [
    "NO_CONTENT",
    "APIError",
    "ApiError",
    "BadRequestError",
    "ClassifiedResult",
    "ClientCoreError",
    "ClientError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "ParseError",
    "RateLimitError",
    "RequestBodyError",
    "ResponseParseError",
    "ServerError",
    "Success",
    "TransportError",
    "TransportFailure",
    "UnauthorizedError",
    "ValidationError",
    "classify",
    "classify_transport_failure",
    "parse_rate_limit_reset",
    "raise_for_result",
]
