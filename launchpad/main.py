"""CLI entry point for launchpad."""

import sys
from pathlib import Path

import click

from launchpad.cli.credentials import credentials_group
from launchpad.config.settings import LaunchpadSettings
from launchpad.exceptions import ConfigurationError
from launchpad.utils.logging_config import configure_logging, get_logger

log = get_logger(__name__)


@click.group()
@click.option("--config", default="launchpad.yaml", help="Path to configuration file")
@click.option("--storage", default=None, help="Path to the local storage file")
@click.option("--log-level", default="WARNING", help="Logging level")
@click.pass_context
def cli(ctx: click.Context, config: str, storage: str | None, log_level: str) -> None:
    """launchpad: gather the credentials a deployment needs."""
    configure_logging(log_level)

    # A missing config file is fine: the operator is asked to create a connection
    config_path = Path(config)
    try:
        if config_path.exists():
            settings = LaunchpadSettings.from_yaml(config_path)
        else:
            log.debug("config_not_found", path=str(config_path))
            settings = LaunchpadSettings()
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(1)

    ctx.obj = {"settings": settings, "storage_path": storage or settings.storage_path}


cli.add_command(credentials_group)


if __name__ == "__main__":
    cli()
