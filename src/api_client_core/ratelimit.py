"""Rate-limit reporting.

``rate_limit_snapshot`` asks the API's rate-limit endpoint for the current
quota and turns the raw integers into a ``RateLimitSnapshot``. Nothing is
cached: every call makes a fresh request. Error results pass through
unchanged so callers decide whether missing quota information matters.

Example:
    ```python
    from api_client_core.ratelimit import RateLimitSnapshot, rate_limit_snapshot

    snapshot = rate_limit_snapshot(executor)
    if isinstance(snapshot, RateLimitSnapshot):
        print(snapshot)  # 4990/5000 requests remaining (core), resets at 2023-11-14T22:13:20+00:00
    ```
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from api_client_core.errors.models import ApiError, ParseError, Success, TransportError
from api_client_core.executor import AsyncRequestExecutor, CredentialPolicy, RequestDescriptor, RequestExecutor

logger = logging.getLogger(__name__)


def _require_int(value: Any, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"'{name}' must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Quota state for one resource at the time of the request.

    Invariant: ``0 <= remaining <= limit`` and ``limit > 0``.
    """

    remaining: int
    limit: int
    reset_at: datetime
    used: int | None = None
    resource: str = "core"

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")
        if not 0 <= self.remaining <= self.limit:
            raise ValueError(f"remaining must be between 0 and limit ({self.limit}), got {self.remaining}")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], resource: str = "core") -> "RateLimitSnapshot":
        """Build a snapshot from ``{"resources": {<resource>: {...}}}``.

        Counts and the reset time must be JSON integers; floats, booleans and
        numeric strings are rejected rather than coerced.

        Raises:
            KeyError, TypeError, ValueError: If the payload is malformed.
        """
        entry = payload["resources"][resource]
        used = entry.get("used")
        return cls(
            remaining=_require_int(entry["remaining"], "remaining"),
            limit=_require_int(entry["limit"], "limit"),
            reset_at=datetime.fromtimestamp(_require_int(entry["reset"], "reset"), tz=UTC),
            used=_require_int(used, "used") if used is not None else None,
            resource=resource,
        )

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitSnapshot | None":
        """Parse the ``X-RateLimit-*`` headers any response carries, or None if absent."""
        raw_limit = headers.get("x-ratelimit-limit")
        raw_remaining = headers.get("x-ratelimit-remaining")
        raw_reset = headers.get("x-ratelimit-reset")
        if raw_limit is None or raw_remaining is None or raw_reset is None:
            return None
        raw_used = headers.get("x-ratelimit-used")
        try:
            return cls(
                remaining=int(raw_remaining),
                limit=int(raw_limit),
                reset_at=datetime.fromtimestamp(int(raw_reset), tz=UTC),
                used=int(raw_used) if raw_used is not None else None,
                resource=headers.get("x-ratelimit-resource", "core"),
            )
        except (ValueError, OverflowError, OSError):
            logger.debug("Ignoring malformed X-RateLimit-* headers")
            return None

    def seconds_until_reset(self, now: datetime | None = None) -> float:
        now = now or datetime.now(UTC)
        return max((self.reset_at - now).total_seconds(), 0.0)

    def __str__(self) -> str:
        return (
            f"{self.remaining}/{self.limit} requests remaining ({self.resource}), "
            f"resets at {self.reset_at.isoformat()}"
        )


RateLimitResult = RateLimitSnapshot | ApiError | TransportError | ParseError


def _snapshot_from(result: Success | ApiError | TransportError | ParseError, resource: str) -> RateLimitResult:
    if not isinstance(result, Success):
        return result

    try:
        return RateLimitSnapshot.from_payload(result.body, resource)
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
        return ParseError(
            cause=f"malformed rate limit payload for resource '{resource}': {e!r}",
            raw_text=repr(result.body),
            status=result.status,
        )


def _descriptor(executor: RequestExecutor | AsyncRequestExecutor) -> RequestDescriptor:
    return RequestDescriptor("GET", executor.config.rate_limit_path)


def rate_limit_snapshot(
    executor: RequestExecutor,
    credential_policy: CredentialPolicy = CredentialPolicy.REQUIRED,
    *,
    resource: str = "core",
) -> RateLimitResult:
    """Fetch the current quota for ``resource``.

    Returns:
        A RateLimitSnapshot, or the ApiError/TransportError/ParseError the
        request produced. A success payload without the expected structure
        is reported as ParseError.

    Raises:
        MissingCredentialError: Credential required but unavailable.
    """
    return _snapshot_from(executor.execute(_descriptor(executor), credential_policy), resource)


async def async_rate_limit_snapshot(
    executor: AsyncRequestExecutor,
    credential_policy: CredentialPolicy = CredentialPolicy.REQUIRED,
    *,
    resource: str = "core",
) -> RateLimitResult:
    """Async counterpart of ``rate_limit_snapshot``."""
    return _snapshot_from(await executor.execute(_descriptor(executor), credential_policy), resource)
