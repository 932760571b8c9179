"""
Spawner Unstick — advice for when an assistant is stuck.
"""

import random
from typing import Optional

DEBUGGING_SKILL_ID = "debugging-master"

OBLIQUE_STRATEGIES = [
    "State the problem in words as clearly as possible.",
    "What is the simplest version of this problem?",
    "Have you tried turning it off and on again?",
    "Explain the problem to a rubber duck.",
    "What assumption are you making that is wrong?",
    "Look at the logs.",
    "Isolate the component.",
    "Write a failing test case.",
]

DEBUGGING_CHECKLIST = (
    "### Debugging Checklist\n"
    "1. Reproduce the issue consistently.\n"
    "2. Isolate the cause (binary search).\n"
    "3. Fix the root cause, not the symptom.\n"
    "4. Verify the fix."
)


class UnstickManager:
    """Pulls general debugging guidance from the debugging-master skill."""

    def __init__(self, skill_registry, rng: Optional[random.Random] = None):
        self.skill_registry = skill_registry
        self.rng = rng or random.Random()

    def _debugging_guidance(self) -> Optional[str]:
        skill = self.skill_registry.get(DEBUGGING_SKILL_ID)
        if not skill or not skill.patterns:
            return None
        for pattern in skill.patterns:
            if not isinstance(pattern, dict):
                continue
            name = str(pattern.get("name", "")).lower()
            if "scientific" in name or "process" in name:
                return pattern.get("guidance") or pattern.get("description")
        return None

    def get_advice(self, problem: str) -> str:
        """Return markdown advice for a stuck state described by *problem*."""
        guidance = self._debugging_guidance()
        if guidance:
            return f"## From Debugging Master\n\n{guidance}"

        strategy = self.rng.choice(OBLIQUE_STRATEGIES)
        return f"## Unstick Strategy\n\n{strategy}\n\n{DEBUGGING_CHECKLIST}"
