"""Tests for spawner.mcp_config."""

import json

import pytest

from spawner import mcp_config


@pytest.fixture
def dirs(tmp_path):
    home = tmp_path / "userhome"
    cwd = tmp_path / "project"
    home.mkdir()
    cwd.mkdir()
    return home, cwd


class TestDesktopConfigPath:
    def test_linux(self, tmp_path):
        path = mcp_config.desktop_config_path("linux", tmp_path)
        assert path == tmp_path / ".config" / "Claude" / "claude_desktop_config.json"

    def test_macos(self, tmp_path):
        path = mcp_config.desktop_config_path("darwin", tmp_path)
        assert path == tmp_path / "Library" / "Application Support" / "Claude" / "claude_desktop_config.json"

    def test_windows_uses_appdata(self, tmp_path, monkeypatch):
        monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))
        path = mcp_config.desktop_config_path("win32", tmp_path)
        assert path == tmp_path / "Roaming" / "Claude" / "claude_desktop_config.json"


class TestDetectEnvironments:
    def test_home_always_offered(self, dirs):
        home, cwd = dirs
        envs = mcp_config.detect_environments(cwd=cwd, home=home, platform="linux")
        assert [e.type for e in envs] == ["code-home"]
        assert envs[0].exists is False
        assert envs[0].path == home / ".mcp.json"

    def test_desktop_and_project(self, dirs):
        home, cwd = dirs
        (home / ".config" / "Claude").mkdir(parents=True)
        (cwd / ".mcp.json").write_text("{}")
        (home / ".mcp.json").write_text("{}")
        envs = mcp_config.detect_environments(cwd=cwd, home=home, platform="linux")
        assert [e.type for e in envs] == ["desktop", "code-local", "code-home"]
        assert envs[2].exists is True


class TestConfigure:
    def test_server_config(self):
        config = mcp_config.server_config("https://example.test")
        assert config == {"spawner": {
            "command": "npx",
            "args": ["-y", "mcp-remote", "https://example.test"],
            "description": "Spawner V2 - Project memory, validation, skills, sharp edges",
        }}

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / ".mcp.json"
        assert mcp_config.configure(path) is True
        data = json.loads(path.read_text())
        assert data["mcpServers"]["spawner"]["args"][-1] == "https://mcp.vibeship.co"
        assert mcp_config.is_configured(path)

    def test_preserves_other_servers(self, tmp_path):
        path = tmp_path / ".mcp.json"
        path.write_text(json.dumps({"mcpServers": {"other": {"command": "x"}}, "theme": "dark"}))
        mcp_config.configure(path)
        data = json.loads(path.read_text())
        assert set(data["mcpServers"]) == {"other", "spawner"}
        assert data["theme"] == "dark"

    def test_already_configured(self, tmp_path):
        path = tmp_path / ".mcp.json"
        mcp_config.configure(path)
        assert mcp_config.configure(path) is False

    def test_unparseable_treated_as_empty(self, tmp_path, caplog):
        path = tmp_path / ".mcp.json"
        path.write_text("{broken")
        assert mcp_config.read_json_config(path) is None
        assert "couldn't be parsed" in caplog.text
        assert mcp_config.configure(path) is True
        assert mcp_config.is_configured(path)

    def test_written_with_trailing_newline(self, tmp_path):
        path = tmp_path / ".mcp.json"
        mcp_config.write_json_config(path, {"a": 1})
        assert path.read_text() == '{\n  "a": 1\n}\n'
