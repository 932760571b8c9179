"""
Spawner configuration — environment-driven settings.

Values come from the process environment, optionally seeded from a .env
file in the working directory.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_REPO_URL = "https://github.com/vibeforge1111/vibeship-spawner-skills.git"
DEFAULT_MCP_ENDPOINT = "https://mcp.vibeship.co"
DEFAULT_PORT = 3000


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"true", "1", "yes", "y", "on"}


@dataclass
class Settings:
    """Runtime settings shared by the CLI and the MCP server."""

    home: Path
    skills_dir: Path
    repo_url: str = DEFAULT_REPO_URL
    mcp_endpoint: str = DEFAULT_MCP_ENDPOINT
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    trace_enabled: bool = True
    auto_reload: bool = True
    reload_check_interval: float = 2.0

    @property
    def memory_db(self) -> Path:
        return self.home / "memory.db"

    @property
    def legacy_memory_json(self) -> Path:
        return self.home / "memory.json"

    @property
    def trace_db(self) -> Path:
        return self.home / "trace.db"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from SPAWNER_* environment variables."""
        if load_env_file:
            load_dotenv()

        home = Path(os.getenv("SPAWNER_HOME", "~/.spawner")).expanduser()
        skills_dir = os.getenv("SPAWNER_SKILLS_DIR")
        return cls(
            home=home,
            skills_dir=Path(skills_dir).expanduser() if skills_dir else home / "skills",
            repo_url=os.getenv("SPAWNER_REPO_URL", DEFAULT_REPO_URL),
            mcp_endpoint=os.getenv("SPAWNER_MCP_ENDPOINT", DEFAULT_MCP_ENDPOINT),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            log_level=os.getenv("LOG_LEVEL", "info").upper(),
            trace_enabled=_as_bool(os.getenv("SPAWNER_TRACE"), True),
            auto_reload=_as_bool(os.getenv("SPAWNER_AUTO_RELOAD"), True),
            reload_check_interval=float(os.getenv("SPAWNER_RELOAD_CHECK_INTERVAL", "2.0")),
        )
