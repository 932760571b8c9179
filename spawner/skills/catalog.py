"""Directory-level view of a skills root: categories, skill dirs, counts."""

import re
from pathlib import Path
from typing import Dict, List, Tuple

# Top-level directories that never hold skills
NON_SKILL_DIRS = frozenset({"scripts", "cli", "dist", "node_modules", "mcp-server"})

DESCRIPTION_WIDTH = 50


def _is_category_dir(path: Path) -> bool:
    return (
        path.is_dir()
        and not path.name.startswith(".")
        and path.name not in NON_SKILL_DIRS
    )


def get_categories(root) -> List[str]:
    """Sorted category directory names under *root*."""
    root = Path(root)
    if not root.exists():
        return []
    return sorted(p.name for p in root.iterdir() if _is_category_dir(p))


def get_skills_in_category(root, category: str, require_skill_yaml: bool = False) -> List[str]:
    """Sorted skill directory names inside one category."""
    category_path = Path(root) / category
    if not category_path.is_dir():
        return []
    skills = []
    for path in category_path.iterdir():
        if not path.is_dir():
            continue
        if require_skill_yaml and not (path / "skill.yaml").exists():
            continue
        skills.append(path.name)
    return sorted(skills)


def count_skills(root) -> Tuple[int, Dict[str, int]]:
    """Count skills per category.

    Categories without any skill directories are left out.

    Returns:
        (total, {category: count})
    """
    per_category: Dict[str, int] = {}
    for category in get_categories(root):
        n = len(get_skills_in_category(root, category))
        if n:
            per_category[category] = n
    return sum(per_category.values()), per_category


_SINGLE_LINE_DESC = re.compile(r"""^description:\s*["']?([^|\n][^\n]*?)["']?\s*$""", re.MULTILINE)
_BLOCK_DESC = re.compile(r"^description:\s*[|>][-+]?\s*\n\s+(.+)$", re.MULTILINE)


def describe_skill(skill_dir, width: int = DESCRIPTION_WIDTH) -> str:
    """First line of a skill's description, read without a full YAML parse.

    Returns an empty string when skill.yaml is missing or has no description.
    """
    skill_yaml = Path(skill_dir) / "skill.yaml"
    if not skill_yaml.exists():
        return ""
    try:
        content = skill_yaml.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""

    match = _SINGLE_LINE_DESC.search(content)
    if not match or match.group(1).strip() in {"|", ">"}:
        match = _BLOCK_DESC.search(content)
    if not match:
        return ""

    text = match.group(1).strip()
    if len(text) > width:
        return text[:width] + "..."
    return text
