"""Registry of configured connections and of the ones active for this run."""

from collections.abc import Sequence
from typing import Any

import structlog

from launchpad.config.store import ConfigStore
from launchpad.credentials.handler import CredentialsHandler
from launchpad.storage.local_storage import LocalStorage

log = structlog.get_logger(__name__)


class ConnectionsHandler:
    """Answers which connections exist and which ones to act on.

    Configured servers are overlaid with the credentials stored for
    their handle, so a second run sees what the first one gathered.
    """

    def __init__(self, config: ConfigStore, storage: LocalStorage) -> None:
        self.config = config
        self.storage = storage
        self.credentials = CredentialsHandler(config, storage)
        self._active: list[str] | None = None
        self.current: str | None = None

    def get_available_connections(self) -> dict[str, dict[str, Any]]:
        """Map each connection name to ``{"servers": {index: server_config}}``.

        A connection configured without a ``servers`` list maps to an
        empty servers dict.
        """
        available: dict[str, dict[str, Any]] = {}
        connections = self.config.get("connections", {}) or {}

        for name, connection in connections.items():
            servers = connection.get("servers") if isinstance(connection, dict) else None
            if not isinstance(servers, list):
                log.debug("connection_without_servers", connection=name)
                servers = []

            available[name] = {
                "servers": {index: self._with_stored(name, index, server) for index, server in enumerate(servers)}
            }
        return available

    def get_connections(self) -> list[str]:
        """Active connection names, restricted to the available ones."""
        names = self._active if self._active is not None else self.config.get("default", []) or []
        available = self.get_available_connections()
        return [name for name in names if name in available]

    def set_connections(self, names: str | Sequence[str]) -> None:
        """Set the active connections from a list or a comma-separated string."""
        if isinstance(names, str):
            names = names.split(",")

        active: list[str] = []
        for name in names:
            for part in str(name).split(","):
                part = part.strip()
                if part and part not in active:
                    active.append(part)

        self._active = active
        log.debug("active_connections_set", connections=active)

    def set_connection(self, handle: str) -> None:
        """Record the handle whose credentials were just resolved."""
        self.current = handle
        self.config.set("connection", handle)
        self.storage.set("connection", handle)
        log.info("connection_selected", handle=handle)

    def _with_stored(self, name: str, index: int, server: Any) -> dict[str, Any]:
        merged = dict(server) if isinstance(server, dict) else {}
        handle = self.credentials.create_connection_key(name, index)
        merged.update(self.credentials.get_connection_credentials(handle))
        return merged
