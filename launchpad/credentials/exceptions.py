"""Credential-related exceptions.

Re-exported from launchpad.exceptions so credential code can import its
errors next to the gatherer.
"""

from launchpad.exceptions import CredentialError, PromptAbortedError

__all__ = [
    "CredentialError",
    "PromptAbortedError",
]
