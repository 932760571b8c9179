"""
Skills checkout management — clone, pull and inspect ~/.spawner/skills with git.
"""

import logging
import subprocess
from pathlib import Path
from typing import Dict, Optional

from spawner.errors import SpawnerError

logger = logging.getLogger(__name__)


class InstallError(SpawnerError):
    """Raised when git is missing or a git command fails."""
    pass


def git_installed() -> bool:
    try:
        result = subprocess.run(
            ["git", "--version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        return result.returncode == 0
    except (OSError, subprocess.TimeoutExpired):
        return False


def skills_exist(skills_dir) -> bool:
    """True when *skills_dir* is a git checkout."""
    skills_dir = Path(skills_dir)
    return skills_dir.is_dir() and (skills_dir / ".git").exists()


def clone(repo_url: str, skills_dir) -> None:
    """Clone *repo_url* into *skills_dir*; git output goes to the terminal."""
    skills_dir = Path(skills_dir)
    skills_dir.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Cloning %s into %s", repo_url, skills_dir)
    result = subprocess.run(
        ["git", "clone", repo_url, str(skills_dir)],
        cwd=str(skills_dir.parent),
    )
    if result.returncode != 0:
        raise InstallError("Failed to clone repository")


def pull(skills_dir) -> None:
    logger.info("Pulling latest changes in %s", skills_dir)
    result = subprocess.run(["git", "pull"], cwd=str(skills_dir))
    if result.returncode != 0:
        raise InstallError("Failed to update. Check your internet connection.")


def _git_output(skills_dir, *args: str) -> Optional[str]:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=str(skills_dir),
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("git %s failed: %s", " ".join(args), e)
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def git_info(skills_dir) -> Dict[str, Optional[str]]:
    """Current branch and last commit ("<hash> <subject>") of the checkout."""
    return {
        "branch": _git_output(skills_dir, "branch", "--show-current"),
        "last_commit": _git_output(skills_dir, "log", "-1", "--format=%h %s"),
    }
