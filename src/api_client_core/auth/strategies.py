"""Auth strategies: turn a credential into httpx auth material.

A strategy is chosen once, when the client is built. The executor only calls
``strategy.auth_for(credential)`` and hands the result to the transport.

| Strategy | Header sent | Needs a credential |
|----------|-------------|--------------------|
| `TokenBasicAuth` | `Basic base64(<token>:x-oauth-basic)` | yes |
| `UserPasswordBasicAuth` | `Basic base64(<username>:<token>)` | yes |
| `BearerTokenAuth` | `Bearer <token>` (scheme configurable) | yes |
| `TransportManagedAuth` | whatever the wrapped `httpx.Auth` flow sends | no |
"""

from abc import ABC, abstractmethod
from collections.abc import Generator

import httpx

from api_client_core.auth.credentials import Credential


class AuthStrategy(ABC):
    """Attach a credential to outgoing requests."""

    requires_credential: bool = True

    @abstractmethod
    def auth_for(self, credential: Credential | None) -> httpx.Auth | None:
        """Return auth material for one request, or None for an anonymous call."""


class TokenBasicAuth(AuthStrategy):
    """HTTP basic auth with the token as username."""

    def __init__(self, password: str = "x-oauth-basic"):
        self.password = password

    def auth_for(self, credential: Credential | None) -> httpx.Auth | None:
        if credential is None:
            return None
        return httpx.BasicAuth(credential.value, self.password)


class UserPasswordBasicAuth(AuthStrategy):
    """HTTP basic auth with a fixed username and the credential as password."""

    def __init__(self, username: str):
        self.username = username

    def auth_for(self, credential: Credential | None) -> httpx.Auth | None:
        if credential is None:
            return None
        return httpx.BasicAuth(self.username, credential.value)


class _HeaderAuth(httpx.Auth):
    def __init__(self, header_value: str):
        self._header_value = header_value

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = self._header_value
        yield request


class BearerTokenAuth(AuthStrategy):
    """``Authorization: <scheme> <token>``; GitHub also accepts the ``token`` scheme."""

    def __init__(self, scheme: str = "Bearer"):
        self.scheme = scheme

    def auth_for(self, credential: Credential | None) -> httpx.Auth | None:
        if credential is None:
            return None
        return _HeaderAuth(f"{self.scheme} {credential.value}")


class TransportManagedAuth(AuthStrategy):
    """Delegate to an ``httpx.Auth`` flow that manages its own tokens (e.g. OAuth2).

    The credential provider is not consulted; the wrapped flow is sent with
    every request that is not explicitly anonymous.
    """

    requires_credential = False

    def __init__(self, auth: httpx.Auth):
        self.auth = auth

    def auth_for(self, credential: Credential | None) -> httpx.Auth | None:
        return self.auth
