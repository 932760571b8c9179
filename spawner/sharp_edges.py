"""
Spawner Sharp Edges — known gotchas with optional detection patterns.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

from spawner.skills.skill_loader import iter_skill_files, read_yaml

logger = logging.getLogger(__name__)


class SharpEdgeManager:
    """Loads sharp edges from a skills root and scans code for them."""

    def __init__(self, root):
        self.root = Path(root).expanduser().resolve()
        self.edges: List[dict] = []
        self._loaded = False

    def load_edges(self):
        """Collect `sharp_edges:` from every sharp-edges.yaml, tagged with skill_id."""
        self.edges = []
        for path in iter_skill_files(self.root, "sharp-edges.yaml"):
            try:
                data = read_yaml(path, fallback=False)
            except Exception as e:
                logger.error("Error loading sharp edges from %s: %s", path, e)
                continue
            if not isinstance(data, dict) or not isinstance(data.get("sharp_edges"), list):
                continue
            skill_id = path.parent.name
            for edge in data["sharp_edges"]:
                if isinstance(edge, dict):
                    self.edges.append({**edge, "skill_id": skill_id})

        self._loaded = True
        logger.info("Loaded %d sharp edges", len(self.edges))

    def refresh(self):
        self.load_edges()

    def check(self, code: Optional[str] = None, skill_id: Optional[str] = None) -> List[dict]:
        """Return sharp edges relevant to *skill_id* and/or present in *code*.

        Without code, every edge (of the given skill) is returned. With
        code, only edges whose detection_pattern matches it are kept.
        """
        if not self._loaded:
            self.load_edges()

        results = self.edges
        if skill_id:
            results = [e for e in results if e["skill_id"] == skill_id]

        if code:
            results = [e for e in results if self._detects(e, code)]
        return list(results)

    def _detects(self, edge: dict, code: str) -> bool:
        pattern = edge.get("detection_pattern")
        if not pattern:
            return False
        try:
            return re.search(pattern, code, re.IGNORECASE) is not None
        except re.error as e:
            logger.error("Invalid regex for edge %s: %s (%s)", edge.get("id"), pattern, e)
            return False
