"""
Prompt templates offered by the MCP server.

Each builder returns the text of a single user message.
"""

import json
from typing import Optional


def plan_project(ctx, task: str) -> str:
    return ctx.orchestrator.plan(task)


def review_code(
    ctx,
    code: str,
    language: Optional[str] = None,
    context: Optional[str] = None,
) -> str:
    """Validation results plus sharp edges detected in *code*."""
    review = {
        "validations": ctx.validation.validate(code, language, context),
        "sharp_edges": ctx.sharp_edges.check(code, context),
    }
    return "Here is the code review:\n\n" + json.dumps(
        review, indent=2, ensure_ascii=False, default=str
    )


def debug_error(ctx, error: str) -> str:
    return ctx.unstick.get_advice(error)
