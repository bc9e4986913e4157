"""Tests for config/settings.py and config/store.py."""

from pathlib import Path

import pytest

from launchpad.config import ConfigStore, LaunchpadSettings
from launchpad.exceptions import ConfigurationError

CONFIG_YAML = """
# Deployment configuration
default: [production]
connections:
  production:
    servers:
      - host: web1.example.com
        username: deploy
        agent-forward: false
      - host: "{WEB2_HOST}"
        username: ${DEPLOY_USER:-deploy}
  staging: {}
scm:
  repository: https://github.com/acme/shop.git
paths:
  key: ~/.ssh/deploy_rsa
"""


class TestLaunchpadSettings:
    @pytest.fixture
    def config_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "launchpad.yaml"
        path.write_text(CONFIG_YAML)
        return path

    def test_from_yaml(self, config_file: Path, monkeypatch):
        monkeypatch.delenv("DEPLOY_USER", raising=False)

        settings = LaunchpadSettings.from_yaml(config_file)

        assert settings.default == ["production"]
        servers = settings.connections["production"].servers
        assert servers[0].host == "web1.example.com"
        assert servers[0].agent_forward is False
        assert servers[1].host == "{WEB2_HOST}"
        assert servers[1].username == "deploy"
        assert settings.connections["staging"].servers is None
        assert settings.paths.key == "~/.ssh/deploy_rsa"

    def test_env_interpolation(self, config_file: Path, monkeypatch):
        monkeypatch.setenv("DEPLOY_USER", "release")

        settings = LaunchpadSettings.from_yaml(config_file)

        assert settings.connections["production"].servers[1].username == "release"

    def test_required_env_var_missing(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("LAUNCHPAD_TEST_MISSING", raising=False)
        path = tmp_path / "launchpad.yaml"
        path.write_text("scm:\n  password: ${LAUNCHPAD_TEST_MISSING}\n")

        with pytest.raises(ConfigurationError) as exc_info:
            LaunchpadSettings.from_yaml(path)

        assert "LAUNCHPAD_TEST_MISSING" in exc_info.value.message

    def test_comment_lines_are_not_interpolated(self):
        content = "# ${NOT_SET_ANYWHERE}\nscm: {}"

        assert LaunchpadSettings._interpolate_env_vars(content) == content

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigurationError) as exc_info:
            LaunchpadSettings.from_yaml(tmp_path / "missing.yaml")

        assert "not found" in exc_info.value.message

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "launchpad.yaml"
        path.write_text("connections: [unclosed")

        with pytest.raises(ConfigurationError):
            LaunchpadSettings.from_yaml(path)

    def test_scalar_yaml(self, tmp_path: Path):
        path = tmp_path / "launchpad.yaml"
        path.write_text("just a string")

        with pytest.raises(ConfigurationError):
            LaunchpadSettings.from_yaml(path)

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "launchpad.yaml"
        path.write_text("")

        settings = LaunchpadSettings.from_yaml(path)

        assert settings.connections == {}
        assert settings.storage_path == ".launchpad/storage.json"

    def test_invalid_values(self, tmp_path: Path):
        path = tmp_path / "launchpad.yaml"
        path.write_text("connections:\n  production:\n    servers: not-a-list\n")

        with pytest.raises(ConfigurationError):
            LaunchpadSettings.from_yaml(path)

    def test_placeholder_on_boolean_field(self, tmp_path: Path):
        path = tmp_path / "launchpad.yaml"
        path.write_text(
            "connections:\n  production:\n    servers:\n      - agent: '{USE_AGENT}'\n        agent-forward: '{FORWARD}'\n"
        )

        server = LaunchpadSettings.from_yaml(path).connections["production"].servers[0]

        assert server.agent == "{USE_AGENT}"
        assert server.agent_forward == "{FORWARD}"

    def test_numeric_secrets_are_accepted(self, tmp_path: Path):
        path = tmp_path / "launchpad.yaml"
        path.write_text("connections:\n  production:\n    servers:\n      - password: 1234\nscm:\n  password: 5678\n")

        settings = LaunchpadSettings.from_yaml(path)

        assert settings.connections["production"].servers[0].password == 1234
        assert settings.scm.password == 5678

    def test_default_accepts_comma_separated_string(self):
        settings = LaunchpadSettings(default="production, staging")

        assert settings.default == ["production", "staging"]

    def test_to_config_uses_flag_spelling(self, config_file: Path):
        config = LaunchpadSettings.from_yaml(config_file).to_config()

        server = config["connections"]["production"]["servers"][0]
        assert server == {"host": "web1.example.com", "username": "deploy", "agent-forward": False}
        assert "password" not in config["scm"]


class TestConfigStore:
    def test_get_and_set(self):
        store = ConfigStore({"scm": {"repository": "git@x"}})

        store.set("scm.username", "deploy")

        assert store.get("scm") == {"repository": "git@x", "username": "deploy"}
        assert store.get("scm.password", "none") == "none"

    def test_input_is_copied(self):
        values = {"scm": {"repository": "git@x"}}
        store = ConfigStore(values)

        store.set("scm.repository", "git@y")

        assert values["scm"]["repository"] == "git@x"
        assert store.to_dict()["scm"]["repository"] == "git@y"
