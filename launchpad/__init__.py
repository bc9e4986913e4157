"""launchpad: credential gathering for deployments."""

__version__ = "0.1.0"
