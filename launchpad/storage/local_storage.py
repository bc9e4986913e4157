"""
Local storage for values that must survive between invocations.

Credentials gathered interactively are written here so the operator is
asked only once per project. Storage is a single JSON object on disk::

    {
        "credentials": {"repository": "...", "username": "...", "password": "..."},
        "connections": {
            "production#0": {"host": "...", "username": "...", "key": "..."}
        },
        "connection": "production#0"
    }

Writes are atomic: the object is written to a ``.tmp`` file next to the
target, then renamed over it.

Example:
    >>> storage = LocalStorage(".launchpad/storage.json")
    >>> storage.set("credentials", {"username": "deploy"})
    >>> storage.get("credentials.username")
    'deploy'
"""

import json
from pathlib import Path
from typing import Any

import structlog

from launchpad.exceptions import StorageError
from launchpad.utils.helpers import get_dotted, set_dotted

log = structlog.get_logger(__name__)

DEFAULT_STORAGE_PATH = Path(".launchpad/storage.json")


class LocalStorage:
    """Persistent key-value store backed by one JSON file.

    Attributes:
        path: Location of the storage file.
    """

    def __init__(self, path: str | Path = DEFAULT_STORAGE_PATH) -> None:
        """Initialize storage.

        The file is not created until the first write.

        Args:
            path: Path to the JSON storage file.
        """
        self.path = Path(path)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key."""
        return get_dotted(self._read(), key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a value by dotted key and persist the whole store."""
        contents = self._read()
        set_dotted(contents, key, value)
        self._write(contents)
        log.debug("storage_updated", key=key)

    def all(self) -> dict[str, Any]:
        """Return a copy of the whole store."""
        return self._read()

    def flush(self) -> None:
        """Delete the storage file.

        Raises:
            StorageError: If the file exists but cannot be removed.
        """
        if not self.path.exists():
            return
        try:
            self.path.unlink()
        except OSError as e:
            raise StorageError(f"Cannot remove local storage: {self.path}") from e
        log.info("storage_flushed", path=str(self.path))

    def _read(self) -> dict[str, Any]:
        """Load the store, returning an empty dict when no file exists.

        Raises:
            StorageError: If the file cannot be read or is not a JSON object.
        """
        if not self.path.exists():
            return {}

        try:
            contents = json.loads(self.path.read_text())
        except OSError as e:
            raise StorageError(f"Cannot read local storage: {self.path}") from e
        except json.JSONDecodeError as e:
            raise StorageError(f"Local storage is not valid JSON: {self.path}: {e}") from e

        if not isinstance(contents, dict):
            raise StorageError(f"Local storage must contain a JSON object: {self.path}")
        return contents

    def _write(self, contents: dict[str, Any]) -> None:
        """Write the store atomically using a temporary file.

        Raises:
            StorageError: If writing or renaming fails.
        """
        tmp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(contents, indent=2))
            # Atomic rename - safe on POSIX when same filesystem
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Cannot write local storage: {self.path}") from e
