"""Pytest configuration and shared fixtures."""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import pytest
import structlog

from launchpad.config.store import ConfigStore
from launchpad.credentials.gatherer import CredentialsGatherer
from launchpad.exceptions import PromptAbortedError
from launchpad.storage.local_storage import LocalStorage
from launchpad.utils.options import CommandOptions


class ScriptedPrompter:
    """Prompter answering from a fixed script and recording every question.

    Running out of answers behaves like end of input.
    """

    def __init__(self, answers: Sequence[str] = ()) -> None:
        self.answers = list(answers)
        self.calls: list[dict[str, Any]] = []

    def ask_with(self, question: str, default: str | None = None, choices: Sequence[str] | None = None) -> str:
        self.calls.append({"kind": "plain", "question": question, "default": default, "choices": choices})
        return self._next(question)

    def ask_secretly(self, question: str) -> str:
        self.calls.append({"kind": "secret", "question": question, "default": None, "choices": None})
        return self._next(question)

    @property
    def questions(self) -> list[str]:
        return [call["question"] for call in self.calls]

    def _next(self, question: str) -> str:
        if not self.answers:
            raise PromptAbortedError("Prompt was aborted before an answer was given", reference=question)
        return self.answers.pop(0)


class FakeRepository:
    def __init__(self, data: dict[str, Any], needs_credentials: bool = False) -> None:
        self.data = data
        self._needs_credentials = needs_credentials

    def to_dict(self) -> dict[str, Any]:
        return dict(self.data)

    def needs_credentials(self) -> bool:
        return self._needs_credentials


class FakeCredentials:
    def __init__(self, repository: FakeRepository | None = None) -> None:
        self.repository = repository or FakeRepository({"repository": "git@github.com:acme/shop.git"})
        self.synced: list[tuple[str, dict[str, Any]]] = []

    def get_current_repository(self) -> FakeRepository:
        return self.repository

    def create_connection_key(self, connection_name: str, server: int | None = None) -> str:
        return connection_name if server is None else f"{connection_name}#{server}"

    def sync_connection_credentials(self, handle: str, values: Mapping[str, Any]) -> None:
        self.synced.append((handle, dict(values)))


class FakeConnections:
    def __init__(self, available: dict[str, dict[str, Any]] | None = None, active: list[str] | None = None) -> None:
        self.available = available or {}
        self.active = list(active or [])
        self.selected: list[Any] = []
        self.current: list[str] = []

    def get_available_connections(self) -> dict[str, dict[str, Any]]:
        return self.available

    def get_connections(self) -> list[str]:
        return [name for name in self.active if name in self.available]

    def set_connections(self, names: Any) -> None:
        self.selected.append(names)
        self.active = [names] if isinstance(names, str) else list(names)

    def set_connection(self, handle: str) -> None:
        self.current.append(handle)


class RecordingStore:
    def __init__(self) -> None:
        self.values: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        self.values[key] = value


class FakePaths:
    def get_default_key_path(self) -> str:
        return "/home/deploy/.ssh/id_rsa"


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()


@pytest.fixture
def fake_credentials() -> FakeCredentials:
    return FakeCredentials()


@pytest.fixture
def fake_connections() -> FakeConnections:
    return FakeConnections()


@pytest.fixture
def make_gatherer(prompter, fake_credentials, fake_connections):
    """Factory building a gatherer wired to fakes.

    Usage:
        gatherer = make_gatherer(options={"key": "/tmp/id"}, answers=["web1"])
    """

    def factory(options: dict[str, Any] | None = None, answers: Sequence[str] = ()) -> CredentialsGatherer:
        prompter.answers.extend(answers)
        return CredentialsGatherer(
            options=CommandOptions(options),
            prompter=prompter,
            connections=fake_connections,
            credentials=fake_credentials,
            local_storage=RecordingStore(),
            config=RecordingStore(),
            paths=FakePaths(),
        )

    return factory


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    """LocalStorage in a temp directory."""
    return LocalStorage(tmp_path / "storage" / "storage.json")


@pytest.fixture
def config_store() -> ConfigStore:
    """Runtime config with two connections and an HTTPS repository."""
    return ConfigStore(
        {
            "default": ["production"],
            "connections": {
                "production": {
                    "servers": [
                        {"host": "web1.example.com", "username": "deploy", "key": "/keys/web1"},
                        {"host": "{WEB2_HOST}", "username": "deploy"},
                    ]
                },
                "staging": {"servers": [{"host": "staging.example.com", "username": "deploy", "agent": True}]},
                "broken": {},
            },
            "scm": {"repository": "https://github.com/acme/shop.git", "branch": "main"},
        }
    )


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()
