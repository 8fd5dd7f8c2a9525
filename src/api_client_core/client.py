"""Base client classes for API bindings.

``ApiClient`` wires configuration, credential provider, auth strategy and an
httpx transport adapter into a ``RequestExecutor``. Bindings for a concrete
API subclass it and add resource methods on top of ``get``/``post``/``request``.

Example:
    ```python
    from api_client_core import ApiClient

    class GitHubClient(ApiClient):
        def list_repos(self, user: str):
            return self.get(f"users/{user}/repos").unwrap()

    with GitHubClient() as client:
        print(client.rate_limit_snapshot())
    ```
"""

from collections.abc import Mapping
from typing import Any

import httpx

from api_client_core.auth.credentials import Credential, CredentialProvider
from api_client_core.auth.strategies import AuthStrategy
from api_client_core.config import ClientConfig
from api_client_core.errors.models import ClassifiedResult
from api_client_core.executor import (
    AsyncRequestExecutor,
    CredentialPolicy,
    RequestDescriptor,
    RequestExecutor,
)
from api_client_core.ratelimit import RateLimitResult, async_rate_limit_snapshot, rate_limit_snapshot
from api_client_core.transport.adapter import AsyncHttpxTransportAdapter, HttpxTransportAdapter
from api_client_core.transport.retry import RateLimitWait


class _ClientBase:
    def __init__(
        self,
        config: ClientConfig | None,
        credential_provider: CredentialProvider | None,
        default_policy: CredentialPolicy,
    ):
        self.config = config or ClientConfig()
        self.credential_provider = credential_provider or CredentialProvider(self.config.credential_env_var)
        self.default_policy = default_policy

    def get_credential(self, force_refresh: bool = False) -> Credential:
        return self.credential_provider.get_credential(force_refresh)

    def has_credential(self) -> bool:
        return self.credential_provider.has_credential()


class ApiClient(_ClientBase):
    """Blocking client.

    Args:
        config: Client settings (default: ``ClientConfig()``).
        credential_provider: Credential source (default: reads
            ``config.credential_env_var``, process-wide cache).
        auth_strategy: How credentials are attached (default: bearer token).
        http_client: httpx client to send with; owned and closed by the
            client only when not passed in.
        default_policy: Credential policy used when a call does not pass one.
        rate_limit_wait: Policy for ``auto_wait``.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        credential_provider: CredentialProvider | None = None,
        auth_strategy: AuthStrategy | None = None,
        http_client: httpx.Client | None = None,
        default_policy: CredentialPolicy = CredentialPolicy.REQUIRED,
        rate_limit_wait: RateLimitWait | None = None,
    ):
        super().__init__(config, credential_provider, default_policy)
        self.transport = HttpxTransportAdapter(http_client)
        self.executor = RequestExecutor(
            self.transport,
            self.credential_provider,
            config=self.config,
            auth_strategy=auth_strategy,
            rate_limit_wait=rate_limit_wait,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.transport.close()

    def execute(
        self,
        descriptor: RequestDescriptor,
        credential_policy: CredentialPolicy | None = None,
        *,
        auto_wait: bool = False,
    ) -> ClassifiedResult:
        return self.executor.execute(descriptor, credential_policy or self.default_policy, auto_wait=auto_wait)

    def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        credential_policy: CredentialPolicy | None = None,
        auto_wait: bool = False,
    ) -> ClassifiedResult:
        descriptor = RequestDescriptor(method, path, query=query, body=body)
        return self.execute(descriptor, credential_policy, auto_wait=auto_wait)

    def get(self, path: str, *, query: Mapping[str, Any] | None = None, **kwargs) -> ClassifiedResult:
        return self.request("GET", path, query=query, **kwargs)

    def post(self, path: str, *, body: Mapping[str, Any] | None = None, **kwargs) -> ClassifiedResult:
        return self.request("POST", path, body=body, **kwargs)

    def rate_limit_snapshot(
        self, credential_policy: CredentialPolicy | None = None, *, resource: str = "core"
    ) -> RateLimitResult:
        return rate_limit_snapshot(self.executor, credential_policy or self.default_policy, resource=resource)


class AsyncApiClient(_ClientBase):
    """Async client; same surface as ``ApiClient`` with awaitable calls."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        credential_provider: CredentialProvider | None = None,
        auth_strategy: AuthStrategy | None = None,
        http_client: httpx.AsyncClient | None = None,
        default_policy: CredentialPolicy = CredentialPolicy.REQUIRED,
        rate_limit_wait: RateLimitWait | None = None,
    ):
        super().__init__(config, credential_provider, default_policy)
        self.transport = AsyncHttpxTransportAdapter(http_client)
        self.executor = AsyncRequestExecutor(
            self.transport,
            self.credential_provider,
            config=self.config,
            auth_strategy=auth_strategy,
            rate_limit_wait=rate_limit_wait,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def execute(
        self,
        descriptor: RequestDescriptor,
        credential_policy: CredentialPolicy | None = None,
        *,
        auto_wait: bool = False,
    ) -> ClassifiedResult:
        return await self.executor.execute(descriptor, credential_policy or self.default_policy, auto_wait=auto_wait)

    async def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        credential_policy: CredentialPolicy | None = None,
        auto_wait: bool = False,
    ) -> ClassifiedResult:
        descriptor = RequestDescriptor(method, path, query=query, body=body)
        return await self.execute(descriptor, credential_policy, auto_wait=auto_wait)

    async def get(self, path: str, *, query: Mapping[str, Any] | None = None, **kwargs) -> ClassifiedResult:
        return await self.request("GET", path, query=query, **kwargs)

    async def post(self, path: str, *, body: Mapping[str, Any] | None = None, **kwargs) -> ClassifiedResult:
        return await self.request("POST", path, body=body, **kwargs)

    async def rate_limit_snapshot(
        self, credential_policy: CredentialPolicy | None = None, *, resource: str = "core"
    ) -> RateLimitResult:
        return await async_rate_limit_snapshot(
            self.executor, credential_policy or self.default_policy, resource=resource
        )
