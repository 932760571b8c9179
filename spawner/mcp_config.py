"""
MCP client configuration — registers the Spawner server with Claude Desktop
and Claude Code config files.
"""

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from spawner.config import DEFAULT_MCP_ENDPOINT

logger = logging.getLogger(__name__)

SERVER_KEY = "spawner"
SERVER_DESCRIPTION = "Spawner V2 - Project memory, validation, skills, sharp edges"
CONFIG_FILENAME = "claude_desktop_config.json"
CODE_CONFIG_FILENAME = ".mcp.json"


@dataclass
class ClaudeEnvironment:
    type: str       # desktop | code-local | code-home
    path: Path
    name: str
    exists: bool = True


def desktop_config_path(platform: Optional[str] = None, home: Optional[Path] = None) -> Path:
    """Location of claude_desktop_config.json for the given platform."""
    platform = platform or sys.platform
    home = Path(home) if home else Path.home()

    if platform == "darwin":
        return home / "Library" / "Application Support" / "Claude" / CONFIG_FILENAME
    if platform.startswith("win"):
        appdata = os.getenv("APPDATA") or str(home / "AppData" / "Roaming")
        return Path(appdata) / "Claude" / CONFIG_FILENAME
    return home / ".config" / "Claude" / CONFIG_FILENAME


def detect_environments(
    cwd: Optional[Path] = None,
    home: Optional[Path] = None,
    platform: Optional[str] = None,
) -> List[ClaudeEnvironment]:
    """Claude installations that can take an MCP server entry.

    The global Claude Code config is always offered, flagged exists=False
    when it still has to be created.
    """
    cwd = Path(cwd) if cwd else Path.cwd()
    home = Path(home) if home else Path.home()
    environments = []

    desktop_path = desktop_config_path(platform, home)
    if desktop_path.parent.exists():
        environments.append(ClaudeEnvironment("desktop", desktop_path, "Claude Desktop"))

    local_mcp = cwd / CODE_CONFIG_FILENAME
    home_mcp = home / CODE_CONFIG_FILENAME
    if local_mcp.exists() and local_mcp != home_mcp:
        environments.append(ClaudeEnvironment("code-local", local_mcp, "Claude Code (project)"))

    environments.append(
        ClaudeEnvironment("code-home", home_mcp, "Claude Code (global)", exists=home_mcp.exists())
    )
    return environments


def server_config(endpoint: str = DEFAULT_MCP_ENDPOINT) -> dict:
    return {
        SERVER_KEY: {
            "command": "npx",
            "args": ["-y", "mcp-remote", endpoint],
            "description": SERVER_DESCRIPTION,
        }
    }


def read_json_config(path) -> Optional[dict]:
    """Parsed config, or None when missing or unparseable."""
    path = Path(path)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("Config file exists but couldn't be parsed: %s", path)
        return None
    return data if isinstance(data, dict) else None


def write_json_config(path, config: dict):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")


def is_configured(path) -> bool:
    config = read_json_config(path)
    if not config:
        return False
    servers = config.get("mcpServers")
    return isinstance(servers, dict) and bool(servers.get(SERVER_KEY))


def configure(path, endpoint: str = DEFAULT_MCP_ENDPOINT) -> bool:
    """Add the spawner entry to one config file. Returns False if already present."""
    if is_configured(path):
        return False
    config = read_json_config(path) or {}
    if not isinstance(config.get("mcpServers"), dict):
        config["mcpServers"] = {}
    config["mcpServers"].update(server_config(endpoint))
    write_json_config(path, config)
    return True
