"""Transport layer: the single point where requests touch the network.

Modules:
    adapter: httpx-backed transport adapters (blocking and async)
    retry: The opt-in single wait-then-retry for rate-limited responses

Example:
    ```python
    from api_client_core.transport import HttpxTransportAdapter

    with HttpxTransportAdapter() as adapter:
        raw = adapter.perform("GET", "https://api.github.com/rate_limit", headers={}, timeout=10)
    ```
"""

from api_client_core.transport.adapter import (
    AsyncHttpxTransportAdapter,
    AsyncTransportAdapter,
    HttpxTransportAdapter,
    RawResponse,
    TransportAdapter,
)
from api_client_core.transport.retry import RateLimitWait

__all__ = [
    "AsyncHttpxTransportAdapter",
    "AsyncTransportAdapter",
    "HttpxTransportAdapter",
    "RateLimitWait",
    "RawResponse",
    "TransportAdapter",
]
