"""Tests for credential exceptions."""

import pytest

from api_client_core.auth.exceptions import CredentialError, MissingCredentialError


class TestCredentialError:
    """Test CredentialError base exception."""

    def test_can_be_raised(self):
        """Test that CredentialError can be raised."""
        with pytest.raises(CredentialError):
            raise CredentialError("Test error")

    def test_exception_message(self):
        """Test that exception message is preserved."""
        try:
            raise CredentialError("Custom error message")
        except CredentialError as e:
            assert str(e) == "Custom error message"


class TestMissingCredentialError:
    """Test MissingCredentialError exception."""

    def test_is_credential_error(self):
        """Test that MissingCredentialError is a CredentialError."""
        with pytest.raises(CredentialError):
            raise MissingCredentialError("Test error")

    def test_env_var_name_attribute(self):
        """Test that env_var_name attribute is set."""
        error = MissingCredentialError("Token not found", env_var_name="GITHUB_PAT")

        assert error.env_var_name == "GITHUB_PAT"

    def test_env_var_name_defaults_to_none(self):
        """Test that env_var_name is optional."""
        assert MissingCredentialError("Token not found").env_var_name is None

    def test_unattended_message_names_remediation(self):
        """Test that the unattended error tells the user which variable to set."""
        error = MissingCredentialError.unattended("GITHUB_PAT")

        assert "Set the GITHUB_PAT environment variable" in str(error)
        assert error.env_var_name == "GITHUB_PAT"

    def test_empty_input_message(self):
        """Test the error raised for an empty prompt answer."""
        error = MissingCredentialError.empty_input("GITHUB_PAT")

        assert "No credential entered" in str(error)
        assert error.env_var_name == "GITHUB_PAT"
