"""Command-line flag values exposed to the credentials gatherer."""

from collections.abc import Mapping
from typing import Any


class CommandOptions:
    """Read-only view over the parameters of the running click command.

    Flag names use the credential field spelling (``agent-forward``);
    click stores them with underscores (``agent_forward``).
    """

    def __init__(self, params: Mapping[str, Any] | None = None) -> None:
        self._params = dict(params or {})

    def option(self, name: str) -> Any:
        """Return a flag value, or None when the flag was not given."""
        value = self._params.get(name.replace("-", "_"))
        if value == () or value == []:
            return None
        return value
