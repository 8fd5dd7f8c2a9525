"""Custom exceptions for credential resolution.

Example:
    ```python
    from api_client_core.auth.exceptions import MissingCredentialError

    try:
        credential = provider.get_credential()
    except MissingCredentialError as e:
        print(f"Set {e.env_var_name} and try again")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class,
    making it easy to catch any credential-related error.
    """

    pass


class MissingCredentialError(CredentialError):
    """Raised when no usable credential exists and none can be obtained.

    Raised before any network call is attempted. In unattended contexts the
    message names the environment variable to set.

    Attributes:
        env_var_name: The environment variable the provider reads.
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name

    @classmethod
    def unattended(cls, env_var_name: str) -> "MissingCredentialError":
        """Error for a non-interactive process with no credential available."""
        return cls(
            f"No credential found and not running interactively. "
            f"Set the {env_var_name} environment variable to an access token.",
            env_var_name=env_var_name,
        )

    @classmethod
    def empty_input(cls, env_var_name: str) -> "MissingCredentialError":
        """Error for an interactive prompt answered with nothing."""
        return cls(
            f"No credential entered. Enter a non-empty token or set {env_var_name}.",
            env_var_name=env_var_name,
        )
