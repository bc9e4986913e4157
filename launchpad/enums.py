"""Enumerations for credential fields and target kinds."""

from enum import Enum


class FieldKind(str, Enum):
    """Credential fields known to the gatherer.

    Server targets use host through agent-forward; repository targets
    use repository, username and password.
    """

    HOST = "host"
    USERNAME = "username"
    PASSWORD = "password"
    KEYPHRASE = "keyphrase"
    KEY = "key"
    AGENT = "agent"
    AGENT_FORWARD = "agent-forward"
    REPOSITORY = "repository"

    def __str__(self) -> str:
        return self.value

    @property
    def is_secret(self) -> bool:
        """Whether the field must be asked with masked input."""
        return self in (FieldKind.PASSWORD, FieldKind.KEYPHRASE)

    @property
    def is_auth(self) -> bool:
        """Whether the field belongs to one of the authentication mechanisms."""
        return self in AUTH_FIELDS


class TargetKind(str, Enum):
    """Kinds of entities credentials are resolved for."""

    SERVER = "server"
    REPOSITORY = "repository"

    def __str__(self) -> str:
        return self.value


AUTH_FIELDS = frozenset(
    {
        FieldKind.KEY,
        FieldKind.PASSWORD,
        FieldKind.KEYPHRASE,
        FieldKind.AGENT,
        FieldKind.AGENT_FORWARD,
    }
)
