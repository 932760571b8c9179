"""
Spawner Skills — deep-format skill loader

A skill is a directory <category>/<skill-id>/ holding skill.yaml plus
optional companions (sharp-edges.yaml, validations.yaml,
collaboration.yaml, patterns.md, ...).
"""

import logging
import re
from pathlib import Path
from typing import Iterator, Optional

import yaml

from spawner.skills.models import Skill

logger = logging.getLogger(__name__)

# Never descend into these while walking a skills root
IGNORED_DIRS = frozenset({"node_modules", ".git", "mcp-server"})


def iter_skill_files(root: Path, filename: str, ignored=IGNORED_DIRS) -> Iterator[Path]:
    """Yield <root>/**/<dir>/<filename> files, skipping ignored directories."""
    root = Path(root)
    if not root.exists():
        return
    for path in sorted(set(root.glob(f"**/*/{filename}"))):
        rel_parts = path.relative_to(root).parts
        if any(part in ignored for part in rel_parts[:-1]):
            continue
        if path.is_file():
            yield path


def read_markdown(path: Path) -> Optional[str]:
    """Read a markdown file, or None when it is missing."""
    path = Path(path)
    if not path.exists():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None


def read_yaml(path: Path, fallback: bool = True):
    """Parse a YAML file.

    Files that PyYAML rejects (usually skill code samples with embedded
    template literals) go through regex field extraction when *fallback*
    is set. Returns None when the file is missing or yields nothing.
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        if not fallback:
            raise
        logger.debug("Fallback parsing %s (%s)", path.name, e)
        return extract_yaml_fields(content)


# ------------------------------------------------------------------
# Regex fallback for unparseable YAML
# ------------------------------------------------------------------

_SIMPLE_FIELDS = ("id", "name", "category", "version", "skill_id", "difficulty")
_LIST_FIELDS = ("tags", "triggers", "provides", "references")
_LIST_ITEM = re.compile(r"-\s+[\"']?([^\"'\n]+)[\"']?")


def _extract_list(content: str, field: str) -> Optional[list]:
    match = re.search(rf"^{field}:\s*\n((?:\s+-\s+.+\n?)+)", content, re.MULTILINE)
    if not match:
        return None
    return [item.strip() for item in _LIST_ITEM.findall(match.group(1))]


def extract_yaml_fields(content: str) -> Optional[dict]:
    """Pull the well-known top-level fields out of raw YAML text."""
    extracted = {}

    for field in _SIMPLE_FIELDS:
        match = re.search(rf"^{field}:\s*(.+)$", content, re.MULTILINE)
        if match:
            extracted[field] = re.sub(r"^[\"']|[\"']$", "", match.group(1).strip())

    desc = re.search(r"^description:\s*\|?\s*\n((?:[ ]{2,}.+\n?)+)", content, re.MULTILINE)
    if desc:
        extracted["description"] = re.sub(r"^[ ]{2,}", "", desc.group(1), flags=re.MULTILINE).strip()

    for field in _LIST_FIELDS:
        items = _extract_list(content, field)
        if items is not None:
            extracted[field] = items

    # Only mark that these exist; the nested structure is not recoverable
    if "patterns:" in content:
        extracted["patterns"] = [{
            "name": "See full skill for patterns",
            "description": "Contains implementation patterns with code examples",
        }]
    if "anti_patterns:" in content:
        extracted["anti_patterns"] = [{
            "name": "See full skill for anti-patterns",
            "description": "Contains anti-patterns with examples",
        }]
    if re.search(r"^handoffs:\s*\n\s+-", content, re.MULTILINE):
        extracted["handoffs"] = [{"to": "various", "when": "See full skill"}]

    return extracted or None


class SkillLoader:
    """Load skills from a deep-format skills root."""

    def __init__(self, root):
        self.root = Path(root).expanduser().resolve()

    def scan(self) -> list:
        """Load every skill.yaml below the root.

        Returns:
            List of Skill objects, sorted by path.
        """
        skills = []
        for path in iter_skill_files(self.root, "skill.yaml"):
            try:
                skill = self.load_skill_file(path)
            except Exception as e:
                logger.error("Error loading skill from %s: %s", path, e)
                continue
            if skill is not None:
                skills.append(skill)
        return skills

    def load_skill_file(self, path: Path) -> Optional[Skill]:
        """Build a Skill from one skill.yaml, or None for an empty file."""
        data = read_yaml(path)
        if not data:
            return None
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")

        parts = path.relative_to(self.root).parts
        category = parts[-3] if len(parts) >= 3 else "unknown"
        skill_id = str(data.get("id") or (parts[-2] if len(parts) >= 2 else "unknown"))

        identity = data.get("identity")
        description = data.get("description")
        if not description and isinstance(identity, dict):
            description = identity.get("role", "")

        tags = data.get("tags") or []
        if isinstance(tags, str):
            tags = [t.strip() for t in tags.split(",") if t.strip()]

        return Skill(
            id=skill_id,
            name=str(data.get("name") or skill_id),
            category=category,
            path=str(path),
            description=str(description or ""),
            identity=identity,
            patterns=data.get("patterns"),
            anti_patterns=data.get("anti_patterns"),
            tags=[str(t) for t in tags],
        )
