"""Tests for auth strategies."""

import base64

import httpx
import pytest

from api_client_core.auth import (
    BearerTokenAuth,
    Credential,
    CredentialSource,
    TokenBasicAuth,
    TransportManagedAuth,
    UserPasswordBasicAuth,
)

CREDENTIAL = Credential("ghp_token", CredentialSource.ENVIRONMENT)


def authorization_header(auth: httpx.Auth) -> str:
    request = httpx.Request("GET", "https://api.example.com/user")
    flow = auth.sync_auth_flow(request)
    signed = next(flow)
    return signed.headers["Authorization"]


def basic(username: str, password: str) -> str:
    return "Basic " + base64.b64encode(f"{username}:{password}".encode()).decode()


@pytest.mark.unit
def test_token_basic_auth_uses_token_as_username():
    auth = TokenBasicAuth().auth_for(CREDENTIAL)

    assert authorization_header(auth) == basic("ghp_token", "x-oauth-basic")


@pytest.mark.unit
def test_user_password_basic_auth_uses_token_as_password():
    auth = UserPasswordBasicAuth("octocat").auth_for(CREDENTIAL)

    assert authorization_header(auth) == basic("octocat", "ghp_token")


@pytest.mark.unit
def test_bearer_token_auth():
    auth = BearerTokenAuth().auth_for(CREDENTIAL)

    assert authorization_header(auth) == "Bearer ghp_token"


@pytest.mark.unit
def test_bearer_token_auth_custom_scheme():
    auth = BearerTokenAuth(scheme="token").auth_for(CREDENTIAL)

    assert authorization_header(auth) == "token ghp_token"


@pytest.mark.unit
@pytest.mark.parametrize(
    "strategy",
    [TokenBasicAuth(), UserPasswordBasicAuth("octocat"), BearerTokenAuth()],
)
def test_credential_strategies_return_none_without_credential(strategy):
    assert strategy.requires_credential is True
    assert strategy.auth_for(None) is None


@pytest.mark.unit
def test_transport_managed_auth_passes_flow_through():
    flow = httpx.BasicAuth("client-id", "client-secret")
    strategy = TransportManagedAuth(flow)

    assert strategy.requires_credential is False
    assert strategy.auth_for(None) is flow
    assert strategy.auth_for(CREDENTIAL) is flow
