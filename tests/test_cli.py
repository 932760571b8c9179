"""Tests for the spawner command line."""

import json
from unittest.mock import patch

import pytest

from spawner.cli import main


@pytest.fixture
def installed(skills_root, monkeypatch):
    """Point the CLI at the miniature skills tree."""
    monkeypatch.setenv("SPAWNER_SKILLS_DIR", str(skills_root))
    return skills_root


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    home = tmp_path / "userhome"
    home.mkdir()
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    return home


class TestDispatch:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: spawner" in capsys.readouterr().out

    def test_help_alias(self, capsys):
        assert main(["h"]) == 0
        assert "install" in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        assert main(["frobnicate"]) == 1
        out = capsys.readouterr().out
        assert "✗ Unknown command: frobnicate" in out
        assert "usage: spawner" in out


class TestList:
    def test_categories(self, installed, capsys):
        assert main(["list"]) == 0
        out = capsys.readouterr().out
        assert "development (2 skills)" in out
        assert "empty (0 skills)" in out
        assert "Total: 5 skills across 5 categories" in out

    def test_category(self, installed, capsys):
        assert main(["ls", "development"]) == 0
        out = capsys.readouterr().out
        assert "development (2 skills)" in out
        assert "  frontend - React patterns and UI components" in out

    def test_unknown_category(self, installed, capsys):
        assert main(["l", "nope"]) == 1
        out = capsys.readouterr().out
        assert 'Category "nope" not found.' in out
        assert "  development" in out

    def test_all(self, installed, capsys):
        assert main(["list", "--all"]) == 0
        out = capsys.readouterr().out
        assert "All Skills" in out
        assert "  debugging-master" in out

    def test_not_installed(self, capsys):
        assert main(["list"]) == 1
        assert "Skills not installed" in capsys.readouterr().out


class TestInstall:
    @patch("spawner.installer.clone")
    @patch("spawner.installer.git_installed", return_value=True)
    def test_fresh_install(self, mock_git, mock_clone, capsys, tmp_path):
        assert main(["install"]) == 0
        mock_clone.assert_called_once()
        repo_url, target = mock_clone.call_args[0]
        assert repo_url.endswith("vibeship-spawner-skills.git")
        assert target == tmp_path / "home" / "skills"
        assert "Installation complete!" in capsys.readouterr().out

    @patch("spawner.installer.git_installed", return_value=False)
    def test_requires_git(self, mock_git, capsys):
        assert main(["i"]) == 1
        assert "Git is not installed" in capsys.readouterr().out

    @patch("spawner.installer.clone")
    @patch("spawner.installer.git_installed", return_value=True)
    def test_existing_checkout_not_recloned(self, mock_git, mock_clone, installed, capsys):
        (installed / ".git").mkdir()
        assert main(["install"]) == 0
        mock_clone.assert_not_called()
        assert "5 skills available" in capsys.readouterr().out

    @patch("spawner.installer.clone")
    @patch("spawner.installer.git_installed", return_value=True)
    def test_install_with_mcp(self, mock_git, mock_clone, fake_home, capsys):
        assert main(["install", "--mcp"]) == 0
        config = json.loads((fake_home / ".mcp.json").read_text())
        assert "spawner" in config["mcpServers"]


class TestUpdate:
    def test_not_installed(self, capsys):
        assert main(["update"]) == 1
        assert "Run install command first" in capsys.readouterr().out

    @patch("spawner.installer.pull")
    def test_pull(self, mock_pull, installed, capsys):
        (installed / ".git").mkdir()
        assert main(["upgrade"]) == 0
        mock_pull.assert_called_once_with(installed)
        assert "Update complete! 5 skills available." in capsys.readouterr().out


class TestSetupMcp:
    def test_configures_home(self, fake_home, capsys):
        assert main(["setup-mcp"]) == 0
        out = capsys.readouterr().out
        assert "Claude Code (global) (will create)" in out
        assert "MCP server configured for 1 environment(s)" in out
        assert (fake_home / ".mcp.json").exists()

    def test_second_run_is_noop(self, fake_home, capsys):
        main(["mcp"])
        capsys.readouterr()
        assert main(["mcp"]) == 0
        assert "No new configurations needed" in capsys.readouterr().out


class TestStatus:
    @patch("spawner.installer.git_info", return_value={"branch": "main", "last_commit": "abc Fix"})
    def test_installed(self, mock_info, installed, fake_home, capsys):
        (installed / ".git").mkdir()
        assert main(["s"]) == 0
        out = capsys.readouterr().out
        assert "Skills count: 5" in out
        assert "Branch: main" in out
        assert "Claude Code (global): ○ Not configured" in out

    def test_not_installed(self, fake_home, capsys):
        assert main(["status"]) == 0
        assert "✗ Skills not installed" in capsys.readouterr().out


class TestMaintenanceCommands:
    def test_build_dist(self, skills_root, capsys):
        assert main(["build-dist", "--root", str(skills_root)]) == 0
        assert "Generated: 5 skills" in capsys.readouterr().out
        assert (skills_root / "dist" / "ai" / "llm-architect.md").exists()

    def test_build_single_skill(self, installed, capsys):
        assert main(["build-dist", "backend"]) == 0
        assert "Generated: 1 skills" in capsys.readouterr().out

    def test_validate_yaml_ok(self, installed, capsys):
        assert main(["validate-yaml"]) == 0
        assert "All YAML files are valid!" in capsys.readouterr().out

    def test_validate_yaml_errors(self, installed, write, capsys):
        write(installed / "ai" / "bad.yaml", "a: [\n")
        assert main(["validate-yaml"]) == 1
        out = capsys.readouterr().out
        assert "Found 1 invalid YAML files" in out
        assert "File: ai/bad.yaml" in out or "File: ai\\bad.yaml" in out

    def test_sync_count(self, installed, write, capsys):
        write(installed / "README.md", "**1+ skills**\n")
        assert main(["sync-count"]) == 0
        assert "✓ Updated: README.md" in capsys.readouterr().out
        assert (installed / "README.md").read_text() == "**5+ skills**\n"

    def test_lint_generated_dist(self, installed, capsys):
        main(["build-dist", "backend"])
        capsys.readouterr()
        assert main(["lint"]) == 0
        assert "0 error(s), 0 warning(s)" in capsys.readouterr().out

    def test_lint_errors(self, tmp_path, write, capsys):
        doc = write(tmp_path / "bad.md", "no title\n")
        assert main(["lint", str(doc)]) == 1
        assert "[missing-title]" in capsys.readouterr().out


class TestServe:
    @patch("spawner.server.run")
    def test_stdio(self, mock_run):
        assert main(["serve", "--stdio"]) == 0
        settings = mock_run.call_args[0][0]
        assert mock_run.call_args[1]["transport"] == "stdio"
        assert settings.port == 3000

    @patch("spawner.server.run")
    def test_port_override(self, mock_run):
        assert main(["serve", "--port", "8123"]) == 0
        assert mock_run.call_args[0][0].port == 8123
        assert mock_run.call_args[1]["transport"] == "streamable-http"
