"""Gathering of the credentials needed to act on servers and the repository.

For every target (the repository, or one server of a connection) the
gatherer walks a rule table of required and optional fields, reuses what
is already known (configuration, local storage, command-line flags) and
asks the operator for the rest.

SSH agent, private key and password authentication are mutually
exclusive for a server. Before the fields are walked, ``alter_rules``
picks one mechanism, makes its fields required and marks the fields of
the others as never to be prompted.

Known values beginning with ``{`` are unresolved template placeholders
and count as unset.

Example:
    >>> gatherer = CredentialsGatherer(
    ...     options=CommandOptions({"on": "production"}),
    ...     prompter=ClickPrompter(),
    ...     connections=connections,
    ...     credentials=credentials,
    ...     local_storage=storage,
    ...     config=config,
    ...     paths=Paths(),
    ... )
    >>> for resolved in gatherer.resolve_server_credentials():
    ...     print(resolved.handle, resolved.values["host"])
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import structlog

from launchpad.credentials.ports import (
    CommandOptions,
    ConnectionRegistry,
    CredentialsSource,
    KeyValueStore,
    PathsProvider,
    Prompter,
)
from launchpad.credentials.rules import Rules, rules_for, target_of
from launchpad.credentials.values import (
    CredentialValue,
    is_missing,
    is_placeholder,
    is_usable,
    normalize,
    should_prompt_for,
)
from launchpad.enums import FieldKind, TargetKind

log = structlog.get_logger(__name__)

REPOSITORY_HANDLE = "repository"
DEFAULT_CONNECTION = "production"
AUTH_TYPES = ("key", "password", "agent")


@dataclass(frozen=True)
class ResolvedCredentials:
    """Credentials gathered for one target.

    Attributes:
        handle: Target handle ("repository", "production", "production#0").
        values: Field name to value, for exactly the fields of the rule table.
    """

    handle: str
    values: Mapping[str, CredentialValue]


class CredentialsGatherer:
    """Resolve, prompt for and publish credentials.

    All collaborators are injected; see ``launchpad.credentials.ports`` for
    the exact methods each one must provide.
    """

    def __init__(
        self,
        options: CommandOptions,
        prompter: Prompter,
        connections: ConnectionRegistry,
        credentials: CredentialsSource,
        local_storage: KeyValueStore,
        config: KeyValueStore,
        paths: PathsProvider,
    ) -> None:
        self.options = options
        self.prompter = prompter
        self.connections = connections
        self.credentials = credentials
        self.local_storage = local_storage
        self.config = config
        self.paths = paths

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def resolve_repository_credentials(self) -> ResolvedCredentials:
        """Gather the repository credentials and publish them.

        Repositories that cannot be accessed anonymously get username and
        password raised to required for this call. The result is stored in
        local storage under ``credentials`` and in config under ``scm.*``.

        Raises:
            PromptAbortedError: If a prompt could not be answered.
        """
        repository = self.credentials.get_current_repository()
        rules = rules_for(TargetKind.REPOSITORY)
        if repository.needs_credentials():
            rules[FieldKind.USERNAME] = True
            rules[FieldKind.PASSWORD] = True

        values = self.gather_credentials(rules, repository.to_dict(), REPOSITORY_HANDLE)

        self.local_storage.set("credentials", dict(values))
        for field, value in values.items():
            self.config.set(f"scm.{field}", value)

        log.info("repository_credentials_resolved", fields=list(values))
        return ResolvedCredentials(REPOSITORY_HANDLE, values)

    def resolve_server_credentials(self) -> list[ResolvedCredentials]:
        """Gather credentials for every server of every active connection.

        When nothing is configured or active, the operator is asked for a
        connection name and that connection is resolved as a whole.

        Returns:
            One entry per resolved handle, in resolution order.

        Raises:
            PromptAbortedError: If a prompt could not be answered.
        """
        selected = self.options.option("on")
        if selected:
            self.connections.set_connections(selected)

        available = self.connections.get_available_connections()
        active = self.connections.get_connections()

        if not active or not available:
            connection_name = self.prompter.ask_with(
                "No connections have been set, please create one:", DEFAULT_CONNECTION
            )
            return [self.resolve_connection_credentials(connection_name)]

        # Nothing is published until every server has been gathered
        resolved = []
        for connection_name in active:
            servers = available.get(connection_name, {}).get("servers") or {}
            for server in servers:
                resolved.append(self._gather_connection(connection_name, server))

        for item in resolved:
            self._publish_connection(item)

        log.info("server_credentials_resolved", handles=[item.handle for item in resolved])
        return resolved

    def resolve_connection_credentials(self, connection_name: str, server: int | None = None) -> ResolvedCredentials:
        """Gather and store the credentials of one connection/server pair."""
        resolved = self._gather_connection(connection_name, server)
        self._publish_connection(resolved)
        return resolved

    def _gather_connection(self, connection_name: str, server: int | None) -> ResolvedCredentials:
        current: dict[str, Any] = {}
        if server is not None:
            servers = self.connections.get_available_connections().get(connection_name, {}).get("servers") or {}
            current = dict(servers.get(server) or {})

        handle = self.credentials.create_connection_key(connection_name, server)
        values = self.gather_credentials(rules_for(TargetKind.SERVER), current, handle)
        return ResolvedCredentials(handle, values)

    def _publish_connection(self, resolved: ResolvedCredentials) -> None:
        self.credentials.sync_connection_credentials(resolved.handle, resolved.values)
        self.connections.set_connection(resolved.handle)

    # ------------------------------------------------------------------
    # Rule resolution
    # ------------------------------------------------------------------

    def gather_credentials(
        self,
        rules: Mapping[FieldKind, bool],
        current: Mapping[str, Any],
        handle: str,
    ) -> Mapping[str, CredentialValue]:
        """Loop through the rules and ask for the missing credentials.

        Args:
            rules: Field to required flag, in prompting order.
            current: Values already known for the target.
            handle: Target handle, shown in questions.

        Returns:
            A read-only mapping holding exactly the fields of ``rules``.
        """
        rules = dict(rules)
        unprompted = self.alter_rules(rules, current, handle)

        values: dict[str, CredentialValue] = {}
        for field, required in rules.items():
            value = self.get_credential(current, field)
            prompt = field not in unprompted and (should_prompt_for(value) or (required and is_missing(value)))

            if prompt:
                log.info("credential_prompted", handle=handle, field=field.value)
                if field.is_auth:
                    value = self.gather_auth_credential(handle, field)
                else:
                    value = self.gather_credential(handle, field)

            values[field.value] = value

        return MappingProxyType(values)

    def alter_rules(self, rules: Rules, current: Mapping[str, Any], handle: str) -> frozenset[FieldKind]:
        """Pick the authentication mechanism of a server.

        Mutates ``rules`` to require the chosen mechanism's fields.

        Returns:
            Fields that must not be prompted for.
        """
        if target_of(rules) is TargetKind.REPOSITORY:
            return frozenset()

        if is_usable(self.get_credential(current, FieldKind.AGENT)):
            log.debug("auth_method_selected", handle=handle, method="agent")
            return frozenset({FieldKind.AGENT, FieldKind.AGENT_FORWARD})

        if self.uses_ssh(handle, current):
            log.debug("auth_method_selected", handle=handle, method="key")
            rules[FieldKind.KEY] = True
            rules[FieldKind.KEYPHRASE] = True
            return frozenset({FieldKind.PASSWORD})

        log.debug("auth_method_selected", handle=handle, method="password")
        rules[FieldKind.PASSWORD] = True
        return frozenset({FieldKind.KEY, FieldKind.KEYPHRASE})

    def uses_ssh(self, handle: str, current: Mapping[str, Any]) -> bool:
        """Whether a server authenticates with an SSH key rather than a password.

        Inferred from whichever of password, key or agent is already known;
        the operator is only asked when none of them is.
        """
        password = self.get_credential(current, FieldKind.PASSWORD)
        key = self.get_credential(current, FieldKind.KEY)
        agent = self.get_credential(current, FieldKind.AGENT)
        if is_usable(password) or is_usable(key) or is_usable(agent):
            return is_usable(key)

        answer = self.prompter.ask_with(
            f"No password or SSH key is set for [{handle}], which would you use?",
            "key",
            AUTH_TYPES,
        )
        return answer == "key"

    def get_credential(self, current: Mapping[str, Any], field: FieldKind) -> CredentialValue:
        """Known value of a field, falling back to its flag.

        Placeholders count as unset.
        """
        value = current.get(field.value)
        if is_placeholder(value):
            value = None

        if value is not None:
            return normalize(value)
        return normalize(self.options.option(field.value))

    # ------------------------------------------------------------------
    # Gathering
    # ------------------------------------------------------------------

    def gather_auth_credential(self, handle: str, field: FieldKind) -> CredentialValue:
        """Gather an auth-related credential."""
        if field is FieldKind.KEYPHRASE:
            return self.gather_credential(handle, field, "If a keyphrase is required, provide it")

        if field is FieldKind.KEY:
            key = self.options.option("key")
            if is_usable(key):
                return key
            return self.prompter.ask_with("Please enter the full path to your key", self.paths.get_default_key_path())

        if field is FieldKind.PASSWORD:
            return self.gather_credential(handle, field)

        flag = self.options.option(field.value)
        if flag is not None:
            return bool(flag)

        if field is FieldKind.AGENT:
            question = f"Use the SSH agent to authenticate on [{handle}]?"
        else:
            question = f"Forward the SSH agent to [{handle}]?"
        return self.prompter.ask_with(question, "no", ("yes", "no")) == "yes"

    def gather_credential(self, handle: str, field: FieldKind, question: str | None = None) -> CredentialValue:
        """Take a credential from the flags, or ask for it."""
        question = question or f"No {field.value} is set for [{handle}], please provide one:"

        flag = self.options.option(field.value)
        if is_usable(flag):
            return normalize(flag)

        if field.is_secret:
            return self.prompter.ask_secretly(question)
        return self.prompter.ask_with(question)
