"""Tests for the exception hierarchy."""

from launchpad.credentials import exceptions as credential_exceptions
from launchpad.exceptions import (
    ConfigurationError,
    CredentialError,
    LaunchpadError,
    PromptAbortedError,
    StorageError,
)


class TestCredentialExceptions:
    """Test credential exception hierarchy."""

    def test_credential_error_basic(self):
        """Test basic CredentialError instantiation."""
        error = CredentialError("Test error")

        assert error.message == "Test error"
        assert error.reference is None
        assert error.suggestion is None
        assert str(error) == "Test error"

    def test_credential_error_with_reference(self):
        """Test CredentialError with reference."""
        error = CredentialError("Test error", reference="production#0")

        assert error.message == "Test error"
        assert error.reference == "production#0"
        assert str(error) == "Test error (reference: production#0)"

    def test_credential_error_with_suggestion(self):
        """Test CredentialError with suggestion."""
        error = CredentialError("Test error", reference="production#0", suggestion="Pass --host")

        assert error.message == "Test error"
        assert error.suggestion == "Pass --host"
        assert str(error).endswith("\nSuggestion: Pass --host")

    def test_prompt_aborted_is_credential_error(self):
        """Test PromptAbortedError is subclass."""
        error = PromptAbortedError("Aborted", reference="No host is set")

        assert isinstance(error, CredentialError)
        assert isinstance(error, LaunchpadError)
        assert error.message == "Aborted"

    def test_reexported_from_credentials_package(self):
        assert credential_exceptions.CredentialError is CredentialError
        assert credential_exceptions.PromptAbortedError is PromptAbortedError


class TestLaunchpadErrors:
    def test_configuration_and_storage_errors(self):
        for error_class in (ConfigurationError, StorageError):
            error = error_class("broken")

            assert isinstance(error, LaunchpadError)
            assert error.message == "broken"
            assert str(error) == "broken"
