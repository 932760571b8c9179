"""
Exceptions raised by Spawner handlers.
"""


class SpawnerError(Exception):
    """Base exception for Spawner errors."""
    pass


class SkillNotFoundError(SpawnerError):
    """Raised when a skill id is not present in the catalog."""

    def __init__(self, skill_id: str):
        super().__init__(f"Skill not found: {skill_id}")
        self.skill_id = skill_id


class UnknownToolError(SpawnerError):
    """Raised when a tool name has no registered handler."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class MemoryActionError(SpawnerError, ValueError):
    """Raised for malformed project memory requests."""
    pass
