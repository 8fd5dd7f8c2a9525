"""Test basic package functionality."""

import api_client_core


def test_version():
    """Test that package version is defined."""
    assert hasattr(api_client_core, "__version__")
    assert api_client_core.__version__ == "0.1.0"


def test_public_api_exported():
    for name in api_client_core.__all__:
        assert hasattr(api_client_core, name), name
