"""Tests for paths.py."""

from pathlib import Path

from launchpad.paths import Paths


class TestPaths:
    def test_default_key_under_home(self, tmp_path: Path):
        paths = Paths(home=tmp_path)

        assert paths.get_default_key_path() == str(tmp_path / ".ssh" / "id_rsa")

    def test_override_is_expanded(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))

        paths = Paths(home="/unused", key_override="~/.ssh/deploy_rsa")

        assert paths.get_default_key_path() == str(tmp_path / ".ssh" / "deploy_rsa")

    def test_home_defaults_to_current_user(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))

        assert Paths().get_default_key_path() == str(tmp_path / ".ssh" / "id_rsa")
