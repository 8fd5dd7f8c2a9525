"""Opt-in wait-then-retry policy for rate-limited responses.

Rate-limited responses are reported, not retried. A caller that opts in with
``auto_wait=True`` gets one wait until the quota resets (capped at
``max_wait``) followed by a single retry. The reset time itself is read from
the response headers by the classifier (see ``errors.handler``).

```python
from api_client_core.transport.retry import RateLimitWait

policy = RateLimitWait(max_wait=30)
delay = policy.delay_for(error)  # None when the error is not rate limiting
```
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from api_client_core.errors.models import ApiError

logger = logging.getLogger(__name__)


class RateLimitWait:
    """Decide how long to wait before the single rate-limit retry.

    Args:
        max_wait: Cap on the wait in seconds (default: 60).
        sleep: Blocking sleep function (default: ``time.sleep``).
        async_sleep: Coroutine sleep function (default: ``asyncio.sleep``).
    """

    def __init__(
        self,
        *,
        max_wait: float = 60.0,
        sleep: Callable[[float], None] = time.sleep,
        async_sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.max_wait = max_wait
        self._sleep = sleep
        self._async_sleep = async_sleep

    def delay_for(self, error: ApiError, now: datetime | None = None) -> float | None:
        """Seconds to wait before retrying, or None if the error is not a rate limit.

        Resets already in the past (clock skew) give a zero delay.
        """
        if not error.is_rate_limited or error.reset_at is None:
            return None

        now = now or datetime.now(UTC)
        delay = (error.reset_at - now).total_seconds()
        return min(max(delay, 0.0), self.max_wait)

    def _announce(self, error: ApiError, delay: float) -> None:
        logger.warning(
            f"Rate limited (HTTP {error.status}), quota resets at {error.reset_at.isoformat()}; "
            f"waiting {delay:.1f}s before retrying once"
        )

    def wait(self, error: ApiError) -> bool:
        """Block until the retry may be sent. Returns False if no wait applies."""
        delay = self.delay_for(error)
        if delay is None:
            return False
        self._announce(error, delay)
        self._sleep(delay)
        return True

    async def async_wait(self, error: ApiError) -> bool:
        """Async counterpart of ``wait``."""
        delay = self.delay_for(error)
        if delay is None:
            return False
        self._announce(error, delay)
        await self._async_sleep(delay)
        return True
