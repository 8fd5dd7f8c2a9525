"""Classified results: the outcome of one request.

Every request yields exactly one of ``Success``, ``ApiError``,
``TransportError`` or ``ParseError``. They are immutable values; callers
branch on the type (or on ``.ok``) or call ``unwrap()`` to get the payload
and have failures raised as exceptions.

Example:
    ```python
    result = executor.execute(RequestDescriptor("GET", "user"))
    if isinstance(result, ApiError) and result.is_rate_limited:
        print(f"Rate limited until {result.reset_at}")
    user = result.unwrap()
    ```
"""

from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus
from typing import Any, Union

import httpx


class _NoContent:
    """Marker for a successful response without a body."""

    def __repr__(self) -> str:
        return "NO_CONTENT"

    def __bool__(self) -> bool:
        return False


NO_CONTENT: Any = _NoContent()


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown Status"


@dataclass(frozen=True)
class Success:
    """Status < 400; ``body`` is the parsed JSON payload or ``NO_CONTENT``."""

    status: int
    body: Any = NO_CONTENT
    headers: httpx.Headers = field(default_factory=httpx.Headers, repr=False, compare=False)

    ok = True

    @property
    def empty(self) -> bool:
        return self.body is NO_CONTENT

    def unwrap(self) -> Any:
        return self.body


@dataclass(frozen=True)
class ApiError:
    """Remote-reported failure (status >= 400) with a parseable-or-not body.

    Attributes:
        status: HTTP status code.
        message: The payload's ``message`` field, or None when the body is
            not a JSON object carrying one.
        raw_payload: The parsed JSON payload, or the raw text if unparseable.
        headers: Response headers (case-insensitive).
        reset_at: When the quota resets, for rate-limited responses.
    """

    status: int
    message: str | None
    raw_payload: Any
    headers: httpx.Headers = field(default_factory=httpx.Headers, repr=False, compare=False)
    reset_at: datetime | None = None

    ok = False

    @property
    def is_rate_limited(self) -> bool:
        """429, or a 403 that exhausted the quota or names a wait (secondary limit)."""
        if self.status == 429:
            return True
        if self.status != 403:
            return False
        return self.headers.get("x-ratelimit-remaining") == "0" or "retry-after" in self.headers

    @property
    def documentation_url(self) -> str | None:
        if isinstance(self.raw_payload, dict):
            return self.raw_payload.get("documentation_url")
        return None

    @property
    def errors(self) -> list[Any]:
        if isinstance(self.raw_payload, dict) and isinstance(self.raw_payload.get("errors"), list):
            return self.raw_payload["errors"]
        return []

    def describe(self) -> str:
        """The remote message if there is one, otherwise a generic description."""
        if self.message:
            return self.message
        return f"HTTP {self.status} {_reason_phrase(self.status)}"

    def __str__(self) -> str:
        return self.describe()

    def unwrap(self) -> Any:
        from api_client_core.errors.handler import raise_for_result

        raise_for_result(self)


@dataclass(frozen=True)
class TransportError:
    """The request never produced an HTTP response."""

    cause: BaseException

    ok = False

    def __str__(self) -> str:
        return f"Transport error: {self.cause}"

    def unwrap(self) -> Any:
        from api_client_core.errors.handler import raise_for_result

        raise_for_result(self)


@dataclass(frozen=True)
class ParseError:
    """A body that should have been JSON was not, or an error had no body."""

    cause: str
    raw_text: str = ""
    status: int | None = None

    ok = False

    def __str__(self) -> str:
        return f"Could not parse response: {self.cause}"

    def unwrap(self) -> Any:
        from api_client_core.errors.handler import raise_for_result

        raise_for_result(self)


ClassifiedResult = Union[Success, ApiError, TransportError, ParseError]
