"""Transport adapters: perform one HTTP call and hand back the raw response.

The adapter is the only component doing I/O. It knows nothing about status
codes or bodies; it either returns a ``RawResponse`` or raises
``TransportFailure``.

Example:
    ```python
    import httpx

    from api_client_core.transport import HttpxTransportAdapter

    with HttpxTransportAdapter() as adapter:
        raw = adapter.perform("GET", "https://api.github.com/zen", headers={}, timeout=10)

    # Inject any httpx transport (retries, proxies, MockTransport in tests)
    adapter = HttpxTransportAdapter(client=httpx.Client(transport=httpx.MockTransport(handler)))
    ```
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from api_client_core.errors.exceptions import TransportFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Status, case-insensitive headers, and undecoded body of one response."""

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "RawResponse":
        return cls(status_code=response.status_code, headers=response.headers, body=response.content)


class TransportAdapter(Protocol):
    def perform(
        self,
        method: str,
        url: str | httpx.URL,
        headers: dict[str, str],
        auth: httpx.Auth | None = None,
        body: bytes | None = None,
        timeout: float | None = None,
    ) -> RawResponse: ...


class AsyncTransportAdapter(Protocol):
    async def perform(
        self,
        method: str,
        url: str | httpx.URL,
        headers: dict[str, str],
        auth: httpx.Auth | None = None,
        body: bytes | None = None,
        timeout: float | None = None,
    ) -> RawResponse: ...


def _optional_kwargs(auth: httpx.Auth | None, timeout: float | None) -> dict:
    # Unset values fall back to the client defaults instead of disabling them
    kwargs: dict = {}
    if auth is not None:
        kwargs["auth"] = auth
    if timeout is not None:
        kwargs["timeout"] = timeout
    return kwargs


class HttpxTransportAdapter:
    """Blocking adapter backed by ``httpx.Client``.

    Args:
        client: Client to send requests with. When omitted the adapter creates
            one and closes it on ``close()``; a passed-in client is left open.
    """

    def __init__(self, client: httpx.Client | None = None):
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def perform(
        self,
        method: str,
        url: str | httpx.URL,
        headers: dict[str, str],
        auth: httpx.Auth | None = None,
        body: bytes | None = None,
        timeout: float | None = None,
    ) -> RawResponse:
        try:
            response = self._client.request(
                method,
                url,
                headers=headers,
                content=body,
                **_optional_kwargs(auth, timeout),
            )
        except httpx.TransportError as e:
            raise TransportFailure(f"{method} {url} failed: {e}", cause=e) from e
        return RawResponse.from_httpx(response)


class AsyncHttpxTransportAdapter:
    """Non-blocking adapter backed by ``httpx.AsyncClient``.

    Cancelling the awaiting task aborts the in-flight request.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def perform(
        self,
        method: str,
        url: str | httpx.URL,
        headers: dict[str, str],
        auth: httpx.Auth | None = None,
        body: bytes | None = None,
        timeout: float | None = None,
    ) -> RawResponse:
        try:
            response = await self._client.request(
                method,
                url,
                headers=headers,
                content=body,
                **_optional_kwargs(auth, timeout),
            )
        except httpx.TransportError as e:
            raise TransportFailure(f"{method} {url} failed: {e}", cause=e) from e
        return RawResponse.from_httpx(response)
