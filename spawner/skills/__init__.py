"""
Spawner Skills System

Skills are directories of YAML and markdown that describe a persona,
its patterns, anti-patterns, sharp edges and handoffs. They are NOT
executable code; they are manuals that guide an assistant.
"""

from spawner.skills.models import Skill
from spawner.skills.skill_loader import SkillLoader
from spawner.skills.registry import SkillRegistry

__all__ = ["Skill", "SkillLoader", "SkillRegistry"]
