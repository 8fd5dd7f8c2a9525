"""Access-credential resolution and process-wide caching.

Resolution order (first match wins, unless a refresh is forced):
1. Credential already cached in the ``CredentialStore``
2. Environment variable (``.env`` files are loaded into the environment first)
3. Interactive prompt, only when the process runs attended

A successfully prompted credential is cached and written back into
``os.environ`` so later calls in the same process never prompt again.

Example:
    ```python
    from api_client_core.auth import CredentialProvider

    provider = CredentialProvider(env_var_name="GITHUB_PAT")
    if provider.has_credential():
        credential = provider.get_credential()
    ```

Security Considerations:
    - Credential values are never logged (masked with ***)
    - ``repr()`` of a Credential masks the value
    - The resolve-and-cache path runs under a lock, so concurrent callers
      never see duplicate prompts or a half-written cache
"""

import getpass
import logging
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from threading import RLock

from api_client_core.auth.exceptions import MissingCredentialError
from api_client_core.config import ensure_dotenv_loaded

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]


class CredentialSource(str, Enum):
    """Where a credential value came from."""

    ENVIRONMENT = "environment"
    INTERACTIVE = "interactive"
    CACHE = "cache"


@dataclass(frozen=True)
class Credential:
    """An opaque access credential.

    The value is excluded from ``repr`` so it cannot leak into logs or tracebacks.
    """

    value: str = field(repr=False)
    source: CredentialSource

    def __str__(self) -> str:
        return f"Credential(***, source={self.source.value})"


class CredentialStore:
    """Process-wide credential cache.

    Starts empty (``Unset``). The only mutation points are ``set`` (after a
    successful resolve) and ``clear``; both replace a single reference, so
    the cached value is always either the previous or the new credential.

    The store also owns the lock that serializes resolution, so every
    provider sharing a store shares the same critical section.
    """

    def __init__(self) -> None:
        self._credential: Credential | None = None
        self.lock = RLock()

    def get(self) -> Credential | None:
        return self._credential

    def set(self, credential: Credential) -> None:
        self._credential = credential

    def clear(self) -> None:
        self._credential = None

    @property
    def is_set(self) -> bool:
        return self._credential is not None


_process_store = CredentialStore()


def process_credential_store() -> CredentialStore:
    """Return the store shared by every provider that is not given its own."""
    return _process_store


def _stdin_is_interactive() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


class CredentialProvider:
    """Resolve, cache, and when needed interactively re-acquire a credential.

    Args:
        env_var_name: Environment variable holding the credential.
        store: Cache to use. Defaults to the process-wide store.
        interactive: Whether prompting is allowed. None detects it from stdin.
        prompt: Line-input function used when prompting. Defaults to
            ``getpass.getpass`` so the token is not echoed.
        dotenv_path: Path to a .env file. None lets python-dotenv search for one.
        load_dotenv: Whether to load a .env file before reading the environment.

    Example:
        ```python
        # Unattended (CI): fail fast naming the variable to set
        provider = CredentialProvider(interactive=False)

        # Tests: isolated cache and a scripted prompt
        provider = CredentialProvider(
            store=CredentialStore(),
            interactive=True,
            prompt=lambda _: "ghp_example",
            load_dotenv=False,
        )
        ```
    """

    def __init__(
        self,
        env_var_name: str = "GITHUB_PAT",
        *,
        store: CredentialStore | None = None,
        interactive: bool | None = None,
        prompt: Prompt | None = None,
        dotenv_path: str | None = None,
        load_dotenv: bool = True,
    ):
        self.env_var_name = env_var_name
        self.store = store if store is not None else process_credential_store()
        self._interactive = interactive
        self._prompt = prompt or getpass.getpass

        if load_dotenv:
            ensure_dotenv_loaded(dotenv_path)

    @property
    def interactive(self) -> bool:
        if self._interactive is None:
            return _stdin_is_interactive()
        return self._interactive

    def _from_environment(self) -> str | None:
        value = os.environ.get(self.env_var_name, "").strip()
        return value or None

    def get_credential(self, force_refresh: bool = False) -> Credential:
        """Return a usable credential.

        Args:
            force_refresh: Skip the cache and the environment and re-acquire
                the credential interactively.

        Returns:
            The resolved credential.

        Raises:
            MissingCredentialError: If no credential is cached or set in the
                environment and the process is not interactive, or if the
                prompt was answered with an empty value.
        """
        with self.store.lock:
            if not force_refresh:
                cached = self.store.get()
                if cached is not None:
                    logger.debug("Resolved credential from cache: ***")
                    return replace(cached, source=CredentialSource.CACHE)

                value = self._from_environment()
                if value is not None:
                    credential = Credential(value, CredentialSource.ENVIRONMENT)
                    self.store.set(credential)
                    logger.debug(f"Resolved credential from environment variable '{self.env_var_name}': ***")
                    return credential

            if not self.interactive:
                raise MissingCredentialError.unattended(self.env_var_name)

            return self._acquire_interactively()

    def _acquire_interactively(self) -> Credential:
        value = self._prompt(f"Enter an access token (it will be stored in {self.env_var_name} for this session): ")
        value = (value or "").strip()
        if not value:
            raise MissingCredentialError.empty_input(self.env_var_name)

        credential = Credential(value, CredentialSource.INTERACTIVE)
        self.store.set(credential)
        os.environ[self.env_var_name] = value
        logger.debug(f"Cached interactively entered credential into '{self.env_var_name}': ***")
        return credential

    def has_credential(self) -> bool:
        """Whether a credential is available without prompting. Never raises."""
        return self.store.is_set or self._from_environment() is not None
