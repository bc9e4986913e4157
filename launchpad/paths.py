"""Well-known filesystem locations."""

from pathlib import Path


class Paths:
    """Resolves default locations on the operator's machine."""

    def __init__(self, home: str | Path | None = None, key_override: str | None = None) -> None:
        self.home = Path(home) if home is not None else Path.home()
        self.key_override = key_override

    def get_default_key_path(self) -> str:
        """Conventional private key location, ``~/.ssh/id_rsa`` unless overridden."""
        if self.key_override:
            return str(Path(self.key_override).expanduser())
        return str(self.home / ".ssh" / "id_rsa")
