"""
Repository maintenance tasks for a skills checkout.

  - sync_skill_count()   -> rewrite advertised skill counts in docs
  - validate_yaml_tree() -> report every YAML file PyYAML cannot parse
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Pattern, Tuple

import yaml

from spawner.skills.catalog import count_skills

logger = logging.getLogger(__name__)

# (relative path, pattern, replacement builder)
DEFAULT_TARGETS: List[Tuple[str, Pattern, Callable[[int], str]]] = [
    ("README.md", re.compile(r"\*\*\d+\+? skills\*\*"), lambda n: f"**{n}+ skills**"),
    ("cli/README.md", re.compile(r"\d+\+? specialist skills"), lambda n: f"{n}+ specialist skills"),
    ("cli/package.json", re.compile(r"\d+\+? specialist skills"), lambda n: f"{n}+ specialist skills"),
]

YAML_IGNORED_DIRS = frozenset({"node_modules", ".git", "mcp-server", "dist", "build"})


@dataclass
class SyncReport:
    total: int
    categories: Dict[str, int]
    updated: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


def sync_skill_count(root, targets=None) -> SyncReport:
    """Count skills under *root* and update every target file that mentions a count."""
    root = Path(root)
    total, categories = count_skills(root)
    report = SyncReport(total=total, categories=categories)

    for rel_path, pattern, replacement in DEFAULT_TARGETS if targets is None else targets:
        path = root / rel_path
        if not path.exists():
            logger.warning("File not found: %s", rel_path)
            report.missing.append(rel_path)
            continue

        content = path.read_text(encoding="utf-8")
        new_content = pattern.sub(replacement(total), content)
        if new_content != content:
            path.write_text(new_content, encoding="utf-8")
            report.updated.append(rel_path)
            logger.info("Updated skill count in %s", rel_path)
        else:
            report.unchanged.append(rel_path)
    return report


@dataclass
class YamlError:
    file: str
    reason: str
    line: object = "unknown"
    column: object = "unknown"
    snippet: str = "no snippet"


def iter_yaml_files(root) -> List[Path]:
    root = Path(root)
    files = []
    for path in sorted(root.rglob("*.yaml")):
        rel_parts = path.relative_to(root).parts
        if any(part in YAML_IGNORED_DIRS for part in rel_parts[:-1]):
            continue
        if path.is_file():
            files.append(path)
    return files


def validate_yaml_tree(root) -> Tuple[int, List[YamlError]]:
    """Parse every *.yaml file under *root*.

    Returns:
        (number of files checked, list of YamlError for files that failed)
    """
    root = Path(root)
    files = iter_yaml_files(root)
    errors: List[YamlError] = []

    for path in files:
        rel = str(path.relative_to(root))
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            errors.append(YamlError(file=rel, reason=str(e)))
            continue
        if not content.strip():
            continue
        try:
            yaml.safe_load(content)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            errors.append(YamlError(
                file=rel,
                reason=getattr(e, "problem", None) or str(e),
                line=mark.line + 1 if mark else "unknown",
                column=mark.column + 1 if mark else "unknown",
                snippet=mark.get_snippet() if mark and mark.get_snippet() else "no snippet",
            ))
    return len(files), errors
