"""Hot-reload watcher for skill data served by the MCP server."""

import logging
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

from spawner.skills.skill_loader import IGNORED_DIRS

logger = logging.getLogger(__name__)

WATCH_PATTERNS = (
    "**/skill.yaml",
    "**/validations.yaml",
    "**/sharp-edges.yaml",
)


class HotReloader:
    """Polls skill YAML mtimes and refreshes in-process indexes on change."""

    def __init__(
        self,
        watch_root: Path,
        on_reload: Optional[Callable] = None,
        auto_reload: bool = True,
        check_interval: float = 2.0,
    ):
        self.watch_root = Path(watch_root)
        self.on_reload = on_reload  # callback e.g. SpawnerContext.refresh
        self.auto_reload = auto_reload
        self.check_interval = check_interval
        self._last_check = 0.0
        self._watch_mtimes: Dict[str, float] = {}
        self.refresh_snapshot()

    def _iter_watch_files(self):
        """Yield files whose change should trigger a reload."""
        if not self.watch_root.exists():
            return
        for pattern in WATCH_PATTERNS:
            for path in self.watch_root.glob(pattern):
                if IGNORED_DIRS.intersection(path.relative_to(self.watch_root).parts):
                    continue
                yield path

    def _snapshot(self) -> Dict[str, float]:
        snapshot: Dict[str, float] = {}
        for path in self._iter_watch_files():
            try:
                if path.is_file():
                    snapshot[str(path)] = path.stat().st_mtime
            except OSError:
                continue
        return snapshot

    def refresh_snapshot(self):
        """Capture latest file mtimes for watched files."""
        self._watch_mtimes = self._snapshot()

    def _detect_changed_files(self) -> List[Path]:
        """Return watched files added, modified or removed since the last snapshot."""
        current = self._snapshot()
        changed = [
            Path(key) for key, mtime in current.items()
            if key not in self._watch_mtimes or mtime > self._watch_mtimes[key]
        ]
        changed.extend(Path(key) for key in self._watch_mtimes if key not in current)
        self._watch_mtimes = current
        return changed

    def reload(self):
        if self.on_reload is not None:
            self.on_reload()

    def check_and_apply(self, force: bool = False) -> bool:
        """Reload when watched files changed. Returns True when a reload ran."""
        if not self.auto_reload:
            return False
        now = time.monotonic()
        if not force and now - self._last_check < self.check_interval:
            return False
        self._last_check = now

        changed = self._detect_changed_files()
        if not changed:
            return False

        self.reload()
        logger.info(
            "Skill hot-reload applied: %s",
            [str(p.relative_to(self.watch_root)) for p in changed],
        )
        return True
