"""Testing utilities for API clients.

Mock response factories and pre-wired doubles that let bindings built on
this library be tested without a network.

Example:
    ```python
    from api_client_core.testing import (
        create_error_response,
        mock_transport_adapter,
        static_credential_provider,
    )


    def test_client_handles_404():
        adapter = mock_transport_adapter(lambda request: create_error_response(404, "Not Found"))
        executor = RequestExecutor(adapter, static_credential_provider("ghp_test"))
        result = executor.execute(RequestDescriptor("GET", "repos/octo/missing"))
        assert result.status == 404
    ```
"""

from collections.abc import Callable
from typing import Any

import httpx

from api_client_core.auth.credentials import Credential, CredentialProvider, CredentialSource, CredentialStore
from api_client_core.transport.adapter import AsyncHttpxTransportAdapter, HttpxTransportAdapter

Handler = Callable[[httpx.Request], httpx.Response]


def create_mock_response(
    status_code: int = 200,
    *,
    json: Any = None,
    text: str | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build an ``httpx.Response`` with a JSON body, a text body, or no body."""
    if json is not None:
        return httpx.Response(status_code, json=json, headers=headers)
    if text is not None:
        return httpx.Response(status_code, text=text, headers=headers)
    return httpx.Response(status_code, headers=headers)


def create_error_response(
    status_code: int,
    message: str | None = None,
    *,
    documentation_url: str | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a GitHub-style error response (``{"message": ..., "documentation_url": ...}``)."""
    payload: dict[str, Any] = {}
    if message is not None:
        payload["message"] = message
    if documentation_url is not None:
        payload["documentation_url"] = documentation_url
    return httpx.Response(status_code, json=payload, headers=headers)


def rate_limit_payload(remaining: int, limit: int, reset: int, *, resource: str = "core") -> dict[str, Any]:
    """Body of a rate-limit endpoint response for one resource."""
    entry = {"limit": limit, "remaining": remaining, "reset": reset, "used": limit - remaining}
    return {"resources": {resource: entry}, "rate": entry}


def mock_transport_adapter(handler: Handler) -> HttpxTransportAdapter:
    """Blocking adapter whose requests are answered by ``handler``."""
    return HttpxTransportAdapter(httpx.Client(transport=httpx.MockTransport(handler)))


def mock_async_transport_adapter(handler: Handler) -> AsyncHttpxTransportAdapter:
    """Async adapter whose requests are answered by ``handler``."""
    return AsyncHttpxTransportAdapter(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def static_credential_provider(value: str | None = None, env_var_name: str = "GITHUB_PAT") -> CredentialProvider:
    """Non-interactive provider with an isolated store, pre-seeded with ``value`` if given."""
    store = CredentialStore()
    if value is not None:
        store.set(Credential(value, CredentialSource.ENVIRONMENT))
    return CredentialProvider(env_var_name, store=store, interactive=False, load_dotenv=False)


__all__ = [
    "create_error_response",
    "create_mock_response",
    "mock_async_transport_adapter",
    "mock_transport_adapter",
    "rate_limit_payload",
    "static_credential_provider",
]
