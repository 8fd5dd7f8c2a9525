"""Request execution: descriptor in, classified result out.

The executor composes the URL, attaches the credential through the configured
auth strategy, makes exactly one transport call, and classifies the response.
Failures come back as result values; only problems that prevent a request
from being sent at all (no credential, unserializable body) raise.

Example:
    ```python
    from api_client_core.executor import CredentialPolicy, RequestDescriptor, RequestExecutor

    executor = RequestExecutor(HttpxTransportAdapter(), CredentialProvider())
    result = executor.execute(RequestDescriptor("GET", "user/repos", query={"per_page": 10}))

    # Anonymous call, waiting once if the quota is exhausted
    result = executor.execute(
        RequestDescriptor("GET", "zen"),
        CredentialPolicy.ANONYMOUS,
        auto_wait=True,
    )
    ```
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

import httpx

from api_client_core.auth.credentials import Credential, CredentialProvider
from api_client_core.auth.strategies import AuthStrategy, BearerTokenAuth
from api_client_core.config import ClientConfig
from api_client_core.errors.exceptions import RequestBodyError
from api_client_core.errors.handler import classify, classify_transport_failure
from api_client_core.errors.models import ApiError, ClassifiedResult
from api_client_core.transport.adapter import AsyncTransportAdapter, TransportAdapter
from api_client_core.transport.retry import RateLimitWait

logger = logging.getLogger(__name__)


class CredentialPolicy(str, Enum):
    """Whether a request carries a credential."""

    REQUIRED = "required"  # fail with MissingCredentialError if none is available
    OPTIONAL = "optional"  # attach one only if available without prompting
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class RequestDescriptor:
    """What to call: method, path relative to the base URL, query, JSON body.

    Mappings are copied into read-only views on construction.
    """

    method: str
    path: str
    query: Mapping[str, Any] | None = None
    body: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.method, str):
            raise TypeError(f"Request method must be a string, got {type(self.method).__name__}")
        object.__setattr__(self, "method", self.method.upper())
        if self.query is not None:
            object.__setattr__(self, "query", MappingProxyType(dict(self.query)))
        if self.body is not None:
            if not isinstance(self.body, Mapping):
                raise RequestBodyError(f"Request body must be a mapping, got {type(self.body).__name__}")
            object.__setattr__(self, "body", MappingProxyType(dict(self.body)))


@dataclass(frozen=True)
class _PreparedRequest:
    method: str
    url: httpx.URL
    headers: dict[str, str]
    auth: httpx.Auth | None
    body: bytes | None


def build_url(base_url: str, path: str, query: Mapping[str, Any] | None = None) -> httpx.URL:
    """Join ``path`` onto ``base_url`` (keeping any base path) and encode ``query``."""
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    if query:
        return httpx.URL(url, params=dict(query))
    return httpx.URL(url)


def serialize_body(body: Mapping[str, Any]) -> bytes:
    """Encode a request body as UTF-8 JSON.

    Raises:
        RequestBodyError: If a key is not a string or a value is not JSON-serializable.
    """
    non_str_keys = [key for key in body if not isinstance(key, str)]
    if non_str_keys:
        raise RequestBodyError(f"Request body keys must be strings, got {non_str_keys!r}")
    try:
        return json.dumps(dict(body), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise RequestBodyError(f"Request body is not JSON-serializable: {e}") from e


class _BaseExecutor:
    def __init__(
        self,
        credential_provider: CredentialProvider,
        *,
        config: ClientConfig | None = None,
        auth_strategy: AuthStrategy | None = None,
        rate_limit_wait: RateLimitWait | None = None,
    ):
        self.config = config or ClientConfig()
        self.credential_provider = credential_provider
        self.auth_strategy = auth_strategy or BearerTokenAuth()
        self.rate_limit_wait = rate_limit_wait or RateLimitWait(max_wait=self.config.max_rate_limit_wait)

    def _credential_for(self, policy: CredentialPolicy) -> Credential | None:
        if policy is CredentialPolicy.ANONYMOUS or not self.auth_strategy.requires_credential:
            return None
        if policy is CredentialPolicy.OPTIONAL and not self.credential_provider.has_credential():
            return None
        return self.credential_provider.get_credential()

    def _prepare(self, descriptor: RequestDescriptor, policy: CredentialPolicy) -> _PreparedRequest:
        headers = self.config.default_headers()
        body = None
        if descriptor.body is not None:
            body = serialize_body(descriptor.body)
            headers["Content-Type"] = "application/json"

        # Raises MissingCredentialError before anything touches the network
        credential = self._credential_for(policy)
        auth = None if policy is CredentialPolicy.ANONYMOUS else self.auth_strategy.auth_for(credential)

        return _PreparedRequest(
            method=descriptor.method,
            url=build_url(self.config.base_url, descriptor.path, descriptor.query),
            headers=headers,
            auth=auth,
            body=body,
        )


class RequestExecutor(_BaseExecutor):
    """Blocking executor.

    Args:
        transport: Adapter performing the HTTP call.
        credential_provider: Source of the access credential.
        config: Base URL, default headers, timeout (default: ``ClientConfig()``).
        auth_strategy: How the credential is attached (default: bearer token).
        rate_limit_wait: Policy for ``auto_wait`` (default: capped at
            ``config.max_rate_limit_wait``).
    """

    def __init__(self, transport: TransportAdapter, credential_provider: CredentialProvider, **kwargs):
        super().__init__(credential_provider, **kwargs)
        self.transport = transport

    def execute(
        self,
        descriptor: RequestDescriptor,
        credential_policy: CredentialPolicy = CredentialPolicy.REQUIRED,
        *,
        auto_wait: bool = False,
    ) -> ClassifiedResult:
        """Send one request and classify the response.

        Args:
            descriptor: The request to send.
            credential_policy: Whether to attach a credential.
            auto_wait: On a rate-limited ``ApiError`` with a known reset time,
                wait for the reset and retry once.

        Returns:
            Exactly one of Success, ApiError, TransportError, ParseError.

        Raises:
            MissingCredentialError: Credential required but unavailable.
            RequestBodyError: Body cannot be serialized.
        """
        prepared = self._prepare(descriptor, credential_policy)
        result = self._send(prepared)
        if auto_wait and isinstance(result, ApiError) and self.rate_limit_wait.wait(result):
            result = self._send(prepared)
        return result

    def _send(self, prepared: _PreparedRequest) -> ClassifiedResult:
        logger.debug(f"{prepared.method} {prepared.url}")
        try:
            raw = self.transport.perform(
                prepared.method,
                prepared.url,
                prepared.headers,
                auth=prepared.auth,
                body=prepared.body,
                timeout=self.config.timeout,
            )
        except Exception as e:
            return classify_transport_failure(e)
        return classify(raw)


class AsyncRequestExecutor(_BaseExecutor):
    """Async executor; same contract as ``RequestExecutor``.

    Credential resolution runs inline and may block on an interactive prompt.
    """

    def __init__(self, transport: AsyncTransportAdapter, credential_provider: CredentialProvider, **kwargs):
        super().__init__(credential_provider, **kwargs)
        self.transport = transport

    async def execute(
        self,
        descriptor: RequestDescriptor,
        credential_policy: CredentialPolicy = CredentialPolicy.REQUIRED,
        *,
        auto_wait: bool = False,
    ) -> ClassifiedResult:
        prepared = self._prepare(descriptor, credential_policy)
        result = await self._send(prepared)
        if auto_wait and isinstance(result, ApiError) and await self.rate_limit_wait.async_wait(result):
            result = await self._send(prepared)
        return result

    async def _send(self, prepared: _PreparedRequest) -> ClassifiedResult:
        logger.debug(f"{prepared.method} {prepared.url}")
        try:
            raw = await self.transport.perform(
                prepared.method,
                prepared.url,
                prepared.headers,
                auth=prepared.auth,
                body=prepared.body,
                timeout=self.config.timeout,
            )
        except Exception as e:
            return classify_transport_failure(e)
        return classify(raw)
