"""
Spawner dist builder — generates SKILL.md files from deep-format skills.

Sources stay in the category folders; generated documents land in
<dist>/<category>/<skill>.md.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from spawner.skills.catalog import get_categories, get_skills_in_category
from spawner.skills.document import render_skill_document

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    generated: int = 0
    skipped: int = 0
    outputs: List[str] = field(default_factory=list)


def build(root, dist_dir=None, only: Optional[str] = None) -> BuildReport:
    """Render every skill under *root* (or just *only*) into *dist_dir*."""
    root = Path(root)
    dist_dir = Path(dist_dir) if dist_dir else root / "dist"
    dist_dir.mkdir(parents=True, exist_ok=True)

    report = BuildReport()
    for category in get_categories(root):
        skills = get_skills_in_category(root, category, require_skill_yaml=True)
        if not skills:
            continue

        category_dir = dist_dir / category
        for skill_name in skills:
            if only and skill_name != only:
                continue

            content = render_skill_document(root / category / skill_name, category, skill_name)
            if content is None:
                report.skipped += 1
                continue

            category_dir.mkdir(parents=True, exist_ok=True)
            output = category_dir / f"{skill_name}.md"
            output.write_text(content, encoding="utf-8")
            report.outputs.append(str(output))
            report.generated += 1
            logger.debug("Generated %s/%s.md", category, skill_name)

    logger.info("Generated %d skills (%d skipped) into %s", report.generated, report.skipped, dist_dir)
    return report
