"""
Spawner Orchestrator — turns a high-level goal into a tool plan.

Keyword-based: each matching group contributes one step pointing at the
MCP tool that handles it.
"""

from typing import List, Tuple

# (keywords, step text); order is the order steps appear in the plan
PLAN_STEPS: List[Tuple[Tuple[str, ...], str]] = [
    (
        ("saas", "build", "create"),
        "**Find Skills**: Use `find_expert_skill` to find relevant skills "
        "(e.g., search for \"saas\", \"launcher\").\n"
        "   - Recommended: Check \"micro-saas-launcher\".",
    ),
    (
        ("stuck", "debug", "error"),
        "**Get Unstuck**: Use `get_troubleshooting_advice` with your problem description.",
    ),
    (
        ("validate", "check", "review"),
        "**Validate Code**: Use `validate_code_implementation` on your code files.",
    ),
    (
        ("watch", "warn", "risk"),
        "**Check Sharp Edges**: Use `analyze_risk_sharp_edges` to identify risks.",
    ),
]

EXPLORE_STEP = "**Explore**: Use `list_available_skills` to explore what's available."


class Orchestrator:
    def plan(self, task: str) -> str:
        lower_task = task.lower()
        steps = [
            text for keywords, text in PLAN_STEPS
            if any(kw in lower_task for kw in keywords)
        ]
        if not steps:
            steps = [EXPLORE_STEP]

        plan = f'## Orchestration Plan for: "{task}"\n\n'
        plan += "".join(f"{i}. {text}\n" for i, text in enumerate(steps, 1))
        plan += "\nUse these tools to proceed."
        return plan
