"""Configuration for launchpad.

This package provides type-safe configuration management using Pydantic
and the runtime key-value store resolved values are written into.

Key Components:
    - LaunchpadSettings: Main configuration container with YAML loading support
    - ConnectionConfig / ServerConfig: Connections and their servers
    - ScmConfig: Source repository settings
    - ConfigStore: Dotted-key runtime configuration

Example:
    >>> from launchpad.config import ConfigStore, LaunchpadSettings
    >>> settings = LaunchpadSettings.from_yaml("launchpad.yaml")
    >>> config = ConfigStore(settings.to_config())
    >>> config.get("scm.repository")
"""

from launchpad.config.settings import (
    ConnectionConfig,
    LaunchpadSettings,
    PathsConfig,
    ScmConfig,
    ServerConfig,
)
from launchpad.config.store import ConfigStore

__all__ = [
    "ConfigStore",
    "ConnectionConfig",
    "LaunchpadSettings",
    "PathsConfig",
    "ScmConfig",
    "ServerConfig",
]
