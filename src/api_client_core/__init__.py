"""API Client Core - request/response pipeline for versioned JSON REST API clients.

This library provides the substrate API bindings sit on:
- Credential resolution with a process-wide cache and interactive fallback
- Pluggable auth strategies (basic, bearer, transport-managed OAuth2)
- Response classification into Success / ApiError / TransportError / ParseError
- Rate-limit reporting and an opt-in single wait-then-retry

Example:
    ```python
    from api_client_core import ApiClient, CredentialPolicy, RateLimitSnapshot

    with ApiClient() as client:  # base URL https://api.github.com, token from GITHUB_PAT
        result = client.get("user/repos", query={"per_page": 5})
        repos = result.unwrap()

        snapshot = client.rate_limit_snapshot(CredentialPolicy.OPTIONAL)
        if isinstance(snapshot, RateLimitSnapshot):
            print(snapshot)
    ```
"""

__version__ = "0.1.0"

from api_client_core.auth import CredentialProvider, CredentialStore, MissingCredentialError  # noqa: E402
from api_client_core.client import ApiClient, AsyncApiClient  # noqa: E402
from api_client_core.config import ClientConfig  # noqa: E402
from api_client_core.errors import ApiError, ParseError, Success, TransportError  # noqa: E402
from api_client_core.executor import CredentialPolicy, RequestDescriptor  # noqa: E402
from api_client_core.ratelimit import RateLimitSnapshot  # noqa: E402

__all__ = [
    "ApiClient",
    "ApiError",
    "AsyncApiClient",
    "ClientConfig",
    "CredentialPolicy",
    "CredentialProvider",
    "CredentialStore",
    "MissingCredentialError",
    "ParseError",
    "RateLimitSnapshot",
    "RequestDescriptor",
    "Success",
    "TransportError",
    "__version__",
]
