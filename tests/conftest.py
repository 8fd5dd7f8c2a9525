"""Pytest configuration and shared fixtures for api-client-core tests."""

import httpx
import pytest

from api_client_core.auth import CredentialProvider, CredentialStore, process_credential_store
from api_client_core.config import ClientConfig


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing credential resolution, and
    resets the process-wide credential cache.
    """
    import os

    # Store keys that look like test-related env vars
    test_prefixes = ("TEST_", "API_CLIENT_", "GITHUB_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    process_credential_store().clear()
    yield
    process_credential_store().clear()


@pytest.fixture
def config():
    """Config pointing at a fake host so nothing can reach the network."""
    return ClientConfig(base_url="https://api.example.com", timeout=5.0)


@pytest.fixture
def store():
    return CredentialStore()


@pytest.fixture
def provider(store):
    """Non-interactive provider with an isolated cache."""
    return CredentialProvider(store=store, interactive=False, load_dotenv=False)


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def make_handler(recorded_requests):
    """Build a MockTransport handler that records requests and replays responses in order."""

    def factory(*responses: httpx.Response):
        pending = list(responses)

        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return pending.pop(0) if len(pending) > 1 else pending[0]

        return handler

    return factory
