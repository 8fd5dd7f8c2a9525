"""Client configuration.

Settings are plain values on a frozen dataclass. ``ClientConfig.from_env`` reads
overrides from the environment, loading a ``.env`` file first (python-dotenv).

Example:
    ```python
    from api_client_core.config import ClientConfig

    config = ClientConfig.from_env()  # API_CLIENT_BASE_URL, API_CLIENT_TIMEOUT, ...
    enterprise = ClientConfig(base_url="https://ghe.example.com/api/v3")
    ```
"""

import logging
import os
from dataclasses import dataclass, fields
from threading import Lock

from dotenv import load_dotenv

from api_client_core import __version__

logger = logging.getLogger(__name__)

_dotenv_lock = Lock()
_dotenv_loaded_paths: set[str | None] = set()


def ensure_dotenv_loaded(dotenv_path: str | None = None) -> None:
    """Load a .env file into ``os.environ`` once per path (thread-safe).

    Existing environment variables are never overridden. Failures are logged
    and otherwise ignored, the process environment is still usable without it.
    """
    if dotenv_path in _dotenv_loaded_paths:
        return

    with _dotenv_lock:
        # Double-check pattern for thread safety
        if dotenv_path in _dotenv_loaded_paths:
            return

        try:
            load_dotenv(dotenv_path=dotenv_path)
            logger.debug("Loaded .env file")
        except Exception as e:
            logger.warning(f"Failed to load .env file: {e}")
        _dotenv_loaded_paths.add(dotenv_path)


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by every request a client makes.

    Attributes:
        base_url: Fixed API root; request paths are appended to it.
        credential_env_var: Environment variable holding the access token.
        accept: Value of the ``Accept`` header.
        api_version: Value of ``X-GitHub-Api-Version``, or None to omit it.
        user_agent: Value of the ``User-Agent`` header.
        timeout: Transport timeout in seconds.
        max_rate_limit_wait: Upper bound in seconds for an opt-in rate-limit wait.
        rate_limit_path: Path of the endpoint reporting quota state.
    """

    base_url: str = "https://api.github.com"
    credential_env_var: str = "GITHUB_PAT"
    accept: str = "application/vnd.github+json"
    api_version: str | None = "2022-11-28"
    user_agent: str = f"api-client-core/{__version__}"
    timeout: float = 30.0
    max_rate_limit_wait: float = 60.0
    rate_limit_path: str = "rate_limit"

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_rate_limit_wait < 0:
            raise ValueError(f"max_rate_limit_wait must not be negative, got {self.max_rate_limit_wait}")

    def default_headers(self) -> dict[str, str]:
        """Headers attached to every request."""
        headers = {"Accept": self.accept, "User-Agent": self.user_agent}
        if self.api_version:
            headers["X-GitHub-Api-Version"] = self.api_version
        return headers

    @classmethod
    def from_env(
        cls,
        prefix: str = "API_CLIENT_",
        *,
        dotenv_path: str | None = None,
        load_dotenv: bool = True,
    ) -> "ClientConfig":
        """Build a config from ``<prefix><FIELD_NAME>`` environment variables.

        Unset variables keep the dataclass default. An empty ``API_VERSION``
        disables the version header.

        Raises:
            ValueError: If a numeric setting cannot be parsed.
        """
        if load_dotenv:
            ensure_dotenv_loaded(dotenv_path)

        overrides: dict[str, object] = {}
        for field in fields(cls):
            env_var_name = f"{prefix}{field.name.upper()}"
            if env_var_name not in os.environ:
                continue
            raw = os.environ[env_var_name]

            if field.name in ("timeout", "max_rate_limit_wait"):
                try:
                    overrides[field.name] = float(raw)
                except ValueError:
                    raise ValueError(f"{env_var_name} must be a number, got {raw!r}") from None
            elif field.name == "api_version":
                overrides[field.name] = raw or None
            else:
                overrides[field.name] = raw
            logger.debug(f"Config {field.name} taken from environment variable '{env_var_name}'")

        return cls(**overrides)
