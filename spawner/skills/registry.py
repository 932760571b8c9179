"""
Spawner Skills Registry — Indexes and provides access to all skills.
"""

import logging
from typing import Optional

from spawner.skills.models import Skill
from spawner.skills.skill_loader import SkillLoader

logger = logging.getLogger(__name__)


class SkillRegistry:
    """Registry that indexes all skills and serves listing/search lookups.

    The skills root is scanned lazily on first access; call refresh()
    after skills are added or removed.
    """

    def __init__(self, root):
        self.loader = SkillLoader(root)
        self._skills: list = []
        self._loaded = False

    @property
    def root(self):
        return self.loader.root

    def _ensure_loaded(self):
        if not self._loaded:
            self._scan()

    def _scan(self):
        """Scan the skills root and index all skills."""
        self._skills = self.loader.scan()
        self._loaded = True
        if self._skills:
            logger.info("Skills registry: %d skills indexed from %s", len(self._skills), self.root)
        else:
            logger.info("Skills registry: no skills found under %s", self.root)

    def refresh(self):
        """Re-scan the skills root."""
        self._scan()

    def load(self, skills: list):
        """Replace the index with pre-built skills (used by tests and tooling)."""
        self._skills = list(skills)
        self._loaded = True

    def list_all(self) -> list:
        """List all indexed skills."""
        self._ensure_loaded()
        return list(self._skills)

    def categories(self) -> list:
        self._ensure_loaded()
        return sorted({s.category for s in self._skills})

    def list_skills(self, category: Optional[str] = None) -> list:
        """Return lightweight metadata, optionally filtered by category."""
        self._ensure_loaded()
        skills = self._skills
        if category:
            skills = [s for s in skills if s.category == category]
        return [s.summary() for s in skills]

    def search(self, query: str, category: Optional[str] = None) -> list:
        """Search skills by name, id and description.

        Every whitespace-separated word in *query* must appear in at least
        one of the three fields (case-insensitive).

        Args:
            query: Search text, e.g. "react patterns".
            category: Optional exact category filter.

        Returns:
            List of metadata dicts.
        """
        self._ensure_loaded()
        words = (query or "").lower().split()
        results = []
        for skill in self._skills:
            if category and skill.category != category:
                continue
            haystack = " ".join(
                (skill.name.lower(), skill.id.lower(), (skill.description or "").lower())
            )
            if all(word in haystack for word in words):
                results.append(skill.summary())
        return results

    def get(self, skill_id: str) -> Optional[Skill]:
        """Get a skill by id."""
        self._ensure_loaded()
        for skill in self._skills:
            if skill.id == skill_id:
                return skill
        return None
