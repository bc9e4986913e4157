"""CLI commands for credential gathering.

This module provides the ``launchpad credentials`` command group, which
asks the operator for whatever is missing before a deployment can reach
its servers and repository, and stores the answers in local storage.

Commands:
    - server: Gather credentials for every server of the active connections
    - repository: Gather the source repository credentials
    - show: Display stored credentials (secrets masked by default)
    - flush: Forget stored credentials

Example:
    Gather credentials for two connections, using an SSH key::

        $ launchpad credentials server --on production --on staging --key ~/.ssh/deploy_rsa
        $ launchpad credentials repository --username deploy
"""

import sys
from typing import Any

import click

from launchpad.config.settings import LaunchpadSettings
from launchpad.config.store import ConfigStore
from launchpad.connections import ConnectionsHandler
from launchpad.credentials import CredentialError, CredentialsGatherer
from launchpad.exceptions import LaunchpadError
from launchpad.paths import Paths
from launchpad.storage.local_storage import DEFAULT_STORAGE_PATH, LocalStorage
from launchpad.utils.options import CommandOptions
from launchpad.utils.prompter import ClickPrompter

SECRET_FIELDS = ("password", "keyphrase")


@click.group(name="credentials")
def credentials_group():
    """Gather and manage deployment credentials.

    Credentials already present in the configuration, in local storage or
    given as flags are reused; anything else is asked for once and stored.

    Examples:

        # Gather credentials for the default connections
        launchpad credentials server

        # Only for the staging connection, authenticating with the SSH agent
        launchpad credentials server --on staging --agent

        # Gather repository credentials
        launchpad credentials repository
    """
    pass


@credentials_group.command(name="server")
@click.option("--on", "on", multiple=True, help="Connection(s) to gather credentials for")
@click.option("--host", help="Server hostname")
@click.option("--username", help="Login user")
@click.option("--password", help="Login password")
@click.option("--keyphrase", help="Private key passphrase")
@click.option("--key", help="Path to the private key")
@click.option("--agent/--no-agent", default=None, help="Authenticate through the SSH agent")
@click.option("--agent-forward/--no-agent-forward", default=None, help="Forward the SSH agent")
@click.pass_context
def server_credentials(ctx: click.Context, **params: Any):
    """Gather credentials for the servers of the active connections."""
    try:
        gatherer = _build_gatherer(ctx, params)
        resolved = gatherer.resolve_server_credentials()
    except LaunchpadError as e:
        _fail(e)

    for item in resolved:
        click.echo(click.style(f"Credentials resolved for [{item.handle}]", fg="green"))


@credentials_group.command(name="repository")
@click.option("--repository", help="Repository URL")
@click.option("--username", help="Repository user")
@click.option("--password", help="Repository password or token")
@click.pass_context
def repository_credentials(ctx: click.Context, **params: Any):
    """Gather credentials for the source repository."""
    try:
        gatherer = _build_gatherer(ctx, params)
        resolved = gatherer.resolve_repository_credentials()
    except LaunchpadError as e:
        _fail(e)

    click.echo(click.style(f"Credentials resolved for [{resolved.values['repository']}]", fg="green"))


@credentials_group.command(name="show")
@click.option("--show-value", is_flag=True, help="Show secrets in full (default: masked)")
@click.pass_context
def show_credentials(ctx: click.Context, show_value: bool):
    """Display stored credentials."""
    try:
        storage = _storage(ctx)
        contents = storage.all()
    except LaunchpadError as e:
        _fail(e)

    sections = [("repository", contents.get("credentials") or {})]
    sections.extend((handle, values) for handle, values in (contents.get("connections") or {}).items())

    if not any(values for _, values in sections):
        click.echo(click.style("No credentials stored", fg="yellow"))
        return

    for handle, values in sections:
        if not values:
            continue
        click.echo(click.style(f"[{handle}]", bold=True))
        for field, value in values.items():
            if field in SECRET_FIELDS and value and not show_value:
                value = _mask(str(value))
            click.echo(f"  {field}: {value}")

    if not show_value:
        click.echo(click.style("Use --show-value to display secrets", fg="yellow"))


@credentials_group.command(name="flush")
@click.confirmation_option(prompt="Are you sure you want to forget all stored credentials?")
@click.pass_context
def flush_credentials(ctx: click.Context):
    """Forget stored repository and connection credentials.

    Removes the local storage file.
    """
    try:
        storage = _storage(ctx)
        stored = storage.path.exists()
        storage.flush()
    except LaunchpadError as e:
        _fail(e)

    if stored:
        click.echo(click.style("Stored credentials forgotten", fg="green"))
    else:
        click.echo(click.style("No credentials stored", fg="yellow"))


# Helper functions


def _settings(ctx: click.Context) -> LaunchpadSettings:
    """Settings loaded by the root command, or defaults when run standalone."""
    obj = ctx.find_root().obj or {}
    settings = obj.get("settings")
    if settings is None:
        settings = LaunchpadSettings()
    return settings


def _storage(ctx: click.Context) -> LocalStorage:
    obj = ctx.find_root().obj or {}
    path = obj.get("storage_path") or _settings(ctx).storage_path or DEFAULT_STORAGE_PATH
    return LocalStorage(path)


def _build_gatherer(ctx: click.Context, params: dict[str, Any]) -> CredentialsGatherer:
    """Wire the gatherer to the real prompter, storage and configuration."""
    settings = _settings(ctx)
    config = ConfigStore(settings.to_config())
    storage = _storage(ctx)
    connections = ConnectionsHandler(config, storage)

    return CredentialsGatherer(
        options=CommandOptions(params),
        prompter=ClickPrompter(),
        connections=connections,
        credentials=connections.credentials,
        local_storage=storage,
        config=config,
        paths=Paths(key_override=settings.paths.key),
    )


def _mask(value: str) -> str:
    """Mask a secret, keeping its first and last four characters if long enough.

    Example:
        >>> _mask("supersecretvalue")
        'supe********alue'
    """
    if len(value) > 8:
        return value[:4] + "*" * (len(value) - 8) + value[-4:]
    return "*" * len(value)


def _fail(error: LaunchpadError) -> None:
    click.echo(click.style(f"Error: {error.message}", fg="red"), err=True)
    if isinstance(error, CredentialError) and error.suggestion:
        click.echo(click.style(f"Suggestion: {error.suggestion}", fg="yellow"), err=True)
    sys.exit(1)
