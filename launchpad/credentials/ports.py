"""Protocols for the collaborators of the credentials gatherer.

Each protocol carries only the methods the gatherer calls, so tests can
substitute small fakes and the CLI can wire in the real implementations.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from launchpad.credentials.values import CredentialValue


class CommandOptions(Protocol):
    """Source of command-line flag values."""

    def option(self, name: str) -> Any:
        """Return the value of a flag, or None when it was not given."""
        ...


class Prompter(Protocol):
    """Blocking interactive prompt surface."""

    def ask_with(
        self,
        question: str,
        default: str | None = None,
        choices: Sequence[str] | None = None,
    ) -> str:
        """Ask a plain-text question, optionally restricted to a list of choices.

        Raises:
            PromptAbortedError: If the question cannot be answered
        """
        ...

    def ask_secretly(self, question: str) -> str:
        """Ask a question without echoing the answer.

        Raises:
            PromptAbortedError: If the question cannot be answered
        """
        ...


class RepositoryLike(Protocol):
    """The repository credentials are gathered for."""

    def to_dict(self) -> dict[str, Any]:
        """Known repository fields (repository, username, password)."""
        ...

    def needs_credentials(self) -> bool:
        """Whether the repository cannot be accessed anonymously."""
        ...


class CredentialsSource(Protocol):
    """Access to the current repository and to stored connection credentials."""

    def get_current_repository(self) -> RepositoryLike: ...

    def create_connection_key(self, connection_name: str, server: int | None = None) -> str: ...

    def sync_connection_credentials(self, handle: str, values: Mapping[str, CredentialValue]) -> None: ...


class ConnectionRegistry(Protocol):
    """Which connections exist and which are active for this invocation."""

    def get_available_connections(self) -> dict[str, dict[str, Any]]: ...

    def get_connections(self) -> list[str]: ...

    def set_connections(self, names: str | Sequence[str]) -> None: ...

    def set_connection(self, handle: str) -> None: ...


class KeyValueStore(Protocol):
    """A sink accepting dotted keys (local storage, runtime config)."""

    def set(self, key: str, value: Any) -> None: ...


class PathsProvider(Protocol):
    def get_default_key_path(self) -> str: ...
