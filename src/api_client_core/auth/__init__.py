"""Authentication components for API clients.

This module provides:
- Credential resolution with a process-wide cache (cache → env → .env → prompt)
- Auth strategies (basic with token, basic with user/password, bearer,
  transport-managed OAuth2 flows)

Example:
    ```python
    from api_client_core.auth import BearerTokenAuth, CredentialProvider

    provider = CredentialProvider(env_var_name="GITHUB_PAT")
    auth = BearerTokenAuth().auth_for(provider.get_credential())
    ```
"""

from api_client_core.auth.credentials import (
    Credential,
    CredentialProvider,
    CredentialSource,
    CredentialStore,
    process_credential_store,
)
from api_client_core.auth.exceptions import CredentialError, MissingCredentialError
from api_client_core.auth.strategies import (
    AuthStrategy,
    BearerTokenAuth,
    TokenBasicAuth,
    TransportManagedAuth,
    UserPasswordBasicAuth,
)

__all__ = [
    "AuthStrategy",
    "BearerTokenAuth",
    "Credential",
    "CredentialError",
    "CredentialProvider",
    "CredentialSource",
    "CredentialStore",
    "MissingCredentialError",
    "TokenBasicAuth",
    "TransportManagedAuth",
    "UserPasswordBasicAuth",
    "process_credential_store",
]
