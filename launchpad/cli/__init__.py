"""Command-line interface for launchpad."""
