"""Credential gathering for servers and the source repository.

Key Components:
    - CredentialsGatherer: Resolves, prompts for and publishes credentials
    - CredentialsHandler: Repository entity and stored connection credentials
    - SERVER_RULES / REPOSITORY_RULES: Required and optional fields per target
"""

from launchpad.credentials.exceptions import CredentialError, PromptAbortedError
from launchpad.credentials.gatherer import CredentialsGatherer, ResolvedCredentials
from launchpad.credentials.handler import CredentialsHandler, Repository
from launchpad.credentials.rules import REPOSITORY_RULES, SERVER_RULES, rules_for
from launchpad.credentials.values import ValueState, classify, is_placeholder, should_prompt_for

__all__ = [
    "REPOSITORY_RULES",
    "SERVER_RULES",
    "CredentialError",
    "CredentialsGatherer",
    "CredentialsHandler",
    "PromptAbortedError",
    "Repository",
    "ResolvedCredentials",
    "ValueState",
    "classify",
    "is_placeholder",
    "rules_for",
    "should_prompt_for",
]
