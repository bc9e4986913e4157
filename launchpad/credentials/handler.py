"""Repository entity and storage of connection credentials."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse

import structlog
from pydantic import BaseModel, Field

from launchpad.config.store import ConfigStore
from launchpad.credentials.values import CredentialValue, ValueState, classify, is_placeholder, is_usable
from launchpad.storage.local_storage import LocalStorage

log = structlog.get_logger(__name__)

REPOSITORY_FIELDS = ("repository", "username", "password")


class Repository(BaseModel):
    """The source repository being deployed."""

    repository: str | None = Field(default=None, description="Repository URL")
    username: str | int | float | None = None
    password: str | int | float | None = None

    @property
    def name(self) -> str | None:
        """Repository name taken from the last path segment of the URL.

        Example:
            >>> Repository(repository="git@github.com:acme/shop.git").name
            'shop'
        """
        if not self.repository:
            return None
        path = self.repository.rstrip("/").replace(":", "/")
        return path.rsplit("/", 1)[-1].removesuffix(".git")

    def to_dict(self) -> dict[str, Any]:
        return {field: getattr(self, field) for field in REPOSITORY_FIELDS}

    def needs_credentials(self) -> bool:
        """HTTPS repositories need a login unless one is already known.

        SSH remotes authenticate with the operator's key and never do.
        """
        if not self.repository or is_placeholder(self.repository):
            return False
        https = urlparse(self.repository).scheme == "https"
        return https and not is_usable(self.username)


class CredentialsHandler:
    """Reads known credentials and persists gathered ones.

    Attributes:
        config: Runtime configuration (``scm`` section).
        storage: Local storage holding previously gathered credentials.
    """

    def __init__(self, config: ConfigStore, storage: LocalStorage) -> None:
        self.config = config
        self.storage = storage

    def get_current_repository(self) -> Repository:
        """Build the repository from config, overlaid with stored credentials."""
        data = dict(self.config.get("scm", {}) or {})
        for field in REPOSITORY_FIELDS:
            stored = self.storage.get(f"credentials.{field}")
            if is_usable(stored) and not is_placeholder(stored):
                data[field] = stored

        known = {key: value for key, value in data.items() if key in REPOSITORY_FIELDS and value is not None}
        repository = Repository(**known)
        log.debug("repository_loaded", name=repository.name, needs_credentials=repository.needs_credentials())
        return repository

    def create_connection_key(self, connection_name: str, server: int | None = None) -> str:
        """Build the handle of a connection, or of one of its servers.

        Example:
            >>> handler.create_connection_key("production")
            'production'
            >>> handler.create_connection_key("production", 1)
            'production#1'
        """
        if server is None:
            return connection_name
        return f"{connection_name}#{server}"

    def get_connection_credentials(self, handle: str) -> dict[str, Any]:
        """Credentials previously stored for a handle (empty if none)."""
        stored = self.storage.get(f"connections.{handle}", {})
        return dict(stored) if isinstance(stored, dict) else {}

    def sync_connection_credentials(self, handle: str, values: Mapping[str, CredentialValue]) -> None:
        """Persist gathered credentials for a handle.

        Unset, empty and placeholder values are dropped; an explicit
        ``False`` is kept so it is not asked again.
        """
        kept = {
            str(field): value
            for field, value in values.items()
            if classify(value) not in (ValueState.ABSENT, ValueState.EMPTY) and not is_placeholder(value)
        }
        self.storage.set(f"connections.{handle}", kept)
        log.info("connection_credentials_synced", handle=handle, fields=sorted(kept))
