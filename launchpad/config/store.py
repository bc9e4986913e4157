"""Runtime configuration store.

Holds the loaded settings as a nested dict that resolved credentials are
written back into (``scm.username``, ``connection``, ...) so the
rest of a deployment run reads one merged view.
"""

import copy
from typing import Any

import structlog

from launchpad.utils.helpers import get_dotted, set_dotted

log = structlog.get_logger(__name__)


class ConfigStore:
    """Dotted-key view over runtime configuration."""

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = copy.deepcopy(values) if values else {}

    def get(self, key: str, default: Any = None) -> Any:
        return get_dotted(self._values, key, default)

    def set(self, key: str, value: Any) -> None:
        set_dotted(self._values, key, value)
        log.debug("config_set", key=key)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._values)

