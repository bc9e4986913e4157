"""
Configuration system using Pydantic for type-safe settings management.

This module describes the deployment configuration: which connections
exist, which servers belong to each, and where the source repository lives.

Example configuration::

    default: [production]
    connections:
      production:
        servers:
          - host: web1.example.com
            username: deploy
            key: ~/.ssh/deploy_rsa
          - host: "{WEB2_HOST}"
            username: deploy
    scm:
      repository: https://github.com/acme/shop.git
      branch: main
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from launchpad.exceptions import ConfigurationError


# Scalars as written in YAML. Placeholders and numbers are classified later by the gatherer.
ConfigValue = str | bool | int | float | None


class ServerConfig(BaseModel):
    """Credentials and address of one server.

    Values may be left unset or be ``{placeholder}`` strings; the
    credentials gatherer asks for whatever is missing.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    host: ConfigValue = Field(default=None, description="Server hostname or IP")
    username: ConfigValue = Field(default=None, description="Login user")
    password: ConfigValue = Field(default=None, description="Login password")
    key: ConfigValue = Field(default=None, description="Path to the private key")
    keyphrase: ConfigValue = Field(default=None, description="Private key passphrase")
    agent: ConfigValue = Field(default=None, description="Authenticate through the SSH agent")
    agent_forward: ConfigValue = Field(
        default=None,
        alias="agent-forward",
        description="Forward the SSH agent to the server",
    )


class ConnectionConfig(BaseModel):
    """A named group of servers sharing deployment configuration."""

    model_config = ConfigDict(extra="allow")

    servers: list[ServerConfig] | None = Field(default=None, description="Servers of this connection")


class ScmConfig(BaseModel):
    """Source repository configuration."""

    repository: str | None = Field(default=None, description="Repository URL")
    username: ConfigValue = Field(default=None, description="Repository user")
    password: ConfigValue = Field(default=None, description="Repository password or token")
    branch: str = Field(default="master", description="Branch to deploy")


class PathsConfig(BaseModel):
    """Filesystem locations."""

    key: str | None = Field(default=None, description="Default private key path override")


class LaunchpadSettings(BaseSettings):
    """Main launchpad settings.

    Combines all configuration sections and provides loading from YAML
    files with environment variable interpolation.
    """

    model_config = SettingsConfigDict(
        env_prefix="LAUNCHPAD_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    default: list[str] = Field(default_factory=list, description="Connections active by default")
    connections: dict[str, ConnectionConfig] = Field(default_factory=dict)
    scm: ScmConfig = Field(default_factory=ScmConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    storage_path: str = Field(default=".launchpad/storage.json", description="Local storage file")

    @field_validator("default", mode="before")
    @classmethod
    def split_default(cls, value: Any) -> Any:
        """Accept ``default: production,staging`` as well as a YAML list."""
        if isinstance(value, str):
            return [name.strip() for name in value.split(",") if name.strip()]
        return value

    def to_config(self) -> dict[str, Any]:
        """Plain nested dict used to seed the runtime ``ConfigStore``."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> LaunchpadSettings:
        """Load settings from YAML file with environment variable interpolation.

        Supports ${VAR_NAME} syntax for environment variable substitution.
        Brace placeholders without a dollar sign (``{host}``) are left as-is.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            LaunchpadSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing required fields
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file) as f:
                yaml_content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports two syntaxes:
        - ${VAR_NAME} - Required environment variable (raises if not set)
        - ${VAR_NAME:-default} - Optional with default value

        YAML comment lines are preserved unchanged.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))
