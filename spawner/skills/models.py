"""Data types for deep-format skills."""

from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional

SUMMARY_LIMIT = 200


@dataclass
class Skill:
    """One skill loaded from <category>/<id>/skill.yaml."""

    id: str
    name: str
    category: str
    path: str
    description: str = ""
    identity: Any = None
    patterns: Optional[List[Any]] = None
    anti_patterns: Optional[List[Any]] = None
    tags: List[str] = field(default_factory=list)

    def summary(self) -> dict:
        """Lightweight metadata for listings and search results."""
        description = self.description or ""
        if len(description) > SUMMARY_LIMIT:
            description = description[:SUMMARY_LIMIT] + "..."
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": description,
        }

    def to_dict(self) -> dict:
        data = asdict(self)
        # tags are only present when the skill declares them
        if not data["tags"]:
            data.pop("tags")
        return data
