"""Custom exception hierarchy for launchpad.

This module defines a structured exception hierarchy that enables
precise error handling and user-friendly error messages in the CLI.

Exception Hierarchy:
    LaunchpadError (base)
    ├── ConfigurationError
    ├── StorageError
    └── CredentialError
        └── PromptAbortedError

Example Usage:
    >>> from launchpad.exceptions import ConfigurationError
    >>> try:
    ...     load_config(path)
    ... except FileNotFoundError as e:
    ...     raise ConfigurationError(f"Config file not found: {path}") from e
"""


class LaunchpadError(Exception):
    """Base exception for all launchpad errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(LaunchpadError):
    """Configuration-related errors.

    Examples:
        - Configuration file not found
        - Invalid YAML syntax
        - Invalid configuration values
    """

    pass


class StorageError(LaunchpadError):
    """Local storage file could not be read or written."""

    pass


class CredentialError(LaunchpadError):
    """Credential-related errors.

    Attributes:
        message: Human-readable error description
        reference: The handle or field that failed (e.g., "production#0")
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            reference: The handle or field that failed
            suggestion: Optional suggestion for resolution
        """
        self.reference = reference
        self.suggestion = suggestion

        full_message = message
        if reference:
            full_message = f"{message} (reference: {reference})"
        if suggestion:
            full_message = f"{full_message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # super() set self.message to the decorated message
        self.message = message


class PromptAbortedError(CredentialError):
    """The interactive prompt could not be answered (end of input, interrupt).

    Aborting a prompt fails the whole resolution call; no partial
    credentials are published.
    """

    pass
