"""
SpawnerContext — the managers behind the MCP tools, wired to one skills root.
"""

import logging
from pathlib import Path
from typing import Optional

from spawner.config import Settings
from spawner.memory import ProjectMemory
from spawner.orchestrate import Orchestrator
from spawner.services import HotReloader
from spawner.sharp_edges import SharpEdgeManager
from spawner.skills import SkillRegistry
from spawner.trace_logger import TraceLogger
from spawner.unstick import UnstickManager
from spawner.validation import ValidationManager

logger = logging.getLogger(__name__)


class SpawnerContext:
    """Holds the skill registry and every manager that reads from it."""

    def __init__(
        self,
        skills_root,
        memory: ProjectMemory,
        trace: Optional[TraceLogger] = None,
        auto_reload: bool = False,
        reload_check_interval: float = 2.0,
    ):
        self.skills_root = Path(skills_root).expanduser()
        self.skills = SkillRegistry(self.skills_root)
        self.validation = ValidationManager(self.skills_root)
        self.sharp_edges = SharpEdgeManager(self.skills_root)
        self.memory = memory
        self.unstick = UnstickManager(self.skills)
        self.orchestrator = Orchestrator()
        self.trace = trace
        self.reloader = HotReloader(
            watch_root=self.skills_root,
            on_reload=self.refresh,
            auto_reload=auto_reload,
            check_interval=reload_check_interval,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "SpawnerContext":
        memory = ProjectMemory(str(settings.memory_db))
        migrated = memory.migrate_json(str(settings.legacy_memory_json))
        if migrated:
            logger.info("Imported %d entries from legacy memory.json", migrated)

        trace = TraceLogger(str(settings.trace_db)) if settings.trace_enabled else None
        logger.info("[Setup] Loading skills from: %s", settings.skills_dir)
        return cls(
            skills_root=settings.skills_dir,
            memory=memory,
            trace=trace,
            auto_reload=settings.auto_reload,
            reload_check_interval=settings.reload_check_interval,
        )

    def refresh(self):
        """Rescan skills, validations and sharp edges."""
        self.skills.refresh()
        self.validation.refresh()
        self.sharp_edges.refresh()
