"""Response classification and result-to-exception mapping."""

import json
from collections.abc import Mapping
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Any, NoReturn

from api_client_core.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ResponseParseError,
    ServerError,
    TransportFailure,
    UnauthorizedError,
    ValidationError,
)
from api_client_core.errors.models import (
    NO_CONTENT,
    ApiError,
    ClassifiedResult,
    ParseError,
    Success,
    TransportError,
)

if TYPE_CHECKING:
    from api_client_core.transport.adapter import RawResponse

NO_OUTPUT = "no output to parse"


def _parse_retry_after(retry_after: str, now: datetime) -> datetime | None:
    """Parse a Retry-After value into an absolute time.

    Supports both formats:
    - Delay-seconds: "120" (integer seconds)
    - HTTP-date: "Wed, 21 Oct 2015 07:28:00 GMT"
    """
    # Try parsing as integer (delay-seconds format)
    try:
        delay = int(retry_after)
        # Protect against negative values
        if delay < 0:
            return None
        return now + timedelta(seconds=delay)
    except ValueError:
        pass

    # Try parsing as HTTP-date format
    try:
        retry_date = parsedate_to_datetime(retry_after)
        if retry_date.tzinfo is None:
            retry_date = retry_date.replace(tzinfo=UTC)
        return retry_date
    except (ValueError, TypeError):
        pass

    # Invalid format
    return None


def parse_rate_limit_reset(headers: Mapping[str, str], now: datetime | None = None) -> datetime | None:
    """Absolute quota reset time announced by a response.

    ``X-RateLimit-Reset`` (epoch seconds) is used when the primary quota is
    exhausted or no ``Retry-After`` is sent. A secondary rate limit leaves the
    primary quota intact and announces its wait through ``Retry-After``
    (delay-seconds or HTTP-date), which then wins. Returns None if neither is
    usable.
    """
    now = now or datetime.now(UTC)

    retry_after = headers.get("retry-after")
    exhausted = headers.get("x-ratelimit-remaining") == "0"

    reset = headers.get("x-ratelimit-reset")
    if reset and (exhausted or not retry_after):
        try:
            return datetime.fromtimestamp(int(reset), tz=UTC)
        except (ValueError, OverflowError, OSError):
            pass

    if retry_after:
        return _parse_retry_after(retry_after, now)

    return None


def _parse_json(raw: "RawResponse") -> Any:
    try:
        return json.loads(raw.body)
    except RecursionError:
        raise ValueError("JSON document nested too deeply") from None


def classify(raw: "RawResponse", *, now: datetime | None = None) -> ClassifiedResult:
    """Classify a raw response into exactly one result variant.

    Pure: no I/O, never raises for any response content.

    - status < 400 with an empty body is a ``Success`` carrying ``NO_CONTENT``
    - status < 400 with a body is a ``Success`` if it parses, else ``ParseError``
    - status >= 400 with an empty body is a ``ParseError``: an error with no
      output to explain it is itself exceptional
    - status >= 400 with a body is an ``ApiError``; ``message`` is taken from a
      JSON object's ``message`` field, and is None otherwise

    Args:
        raw: Response from a transport adapter
        now: Reference time for relative ``Retry-After`` values (default: now)

    Returns:
        Classified result
    """
    if raw.status_code < 400:
        if not raw.body:
            return Success(status=raw.status_code, body=NO_CONTENT, headers=raw.headers)
        try:
            payload = _parse_json(raw)
        except ValueError as e:
            return ParseError(cause=str(e), raw_text=raw.text, status=raw.status_code)
        return Success(status=raw.status_code, body=payload, headers=raw.headers)

    if not raw.body:
        return ParseError(cause=NO_OUTPUT, raw_text="", status=raw.status_code)

    message = None
    try:
        payload = _parse_json(raw)
    except ValueError:
        payload = raw.text
    else:
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            message = payload["message"]

    error = ApiError(status=raw.status_code, message=message, raw_payload=payload, headers=raw.headers)
    if error.is_rate_limited:
        error = replace(error, reset_at=parse_rate_limit_reset(raw.headers, now))
    return error


def classify_transport_failure(exc: BaseException) -> TransportError:
    """Wrap an exception raised by a transport adapter."""
    if isinstance(exc, TransportFailure) and exc.cause is not None:
        return TransportError(cause=exc.cause)
    return TransportError(cause=exc)


_EXCEPTION_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def raise_for_result(result: ClassifiedResult) -> None:
    """Raise the exception matching a failed result; return for ``Success``.

    Raises:
        TransportFailure: For ``TransportError``
        ResponseParseError: For ``ParseError``
        APIError subclass based on status code: For ``ApiError``
    """
    if isinstance(result, Success):
        return
    if isinstance(result, TransportError):
        raise TransportFailure(str(result.cause), cause=result.cause) from result.cause
    if isinstance(result, ParseError):
        raise ResponseParseError(str(result), raw_text=result.raw_text, status_code=result.status)
    _raise_api_error(result)


def _raise_api_error(error: ApiError) -> NoReturn:
    status_code = error.status

    # Determine exception class
    if error.is_rate_limited:
        exc_class = RateLimitError
    elif status_code in _EXCEPTION_MAP:
        exc_class = _EXCEPTION_MAP[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    message = f"HTTP {status_code}: {error.message}" if error.message else error.describe()

    # Handle special case for RateLimitError
    if exc_class is RateLimitError:
        raise RateLimitError(message, reset_at=error.reset_at, status_code=status_code, result=error)

    # Handle special case for ValidationError
    if exc_class is ValidationError:
        raise ValidationError(message, validation_errors=error.errors, status_code=status_code, result=error)

    raise exc_class(message, status_code=status_code, result=error)
