"""
Skill catalog tools — listing, search and full skill retrieval.
"""

import json
from typing import Optional

from spawner.errors import SkillNotFoundError


# ---------------------------------------------------------------------------
# Tool definitions
# ---------------------------------------------------------------------------

TOOLS = [
    {
        "name": "list_available_skills",
        "description": "List all available skill categories and skills. Use this to explore what capabilities are available.",
        "input_schema": {
            "type": "object",
            "properties": {
                "category": {
                    "type": "string",
                    "description": "Optional category to filter by"
                }
            },
            "required": []
        }
    },
    {
        "name": "find_expert_skill",
        "description": "Use this to find specialized expert knowledge. Input a query like 'react patterns' or 'database migration' to find skills that can help you.",
        "input_schema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search term for skills (name or description)"
                },
                "category": {
                    "type": "string",
                    "description": "Optional category to filter by"
                }
            },
            "required": ["query"]
        }
    },
    {
        "name": "consult_skill",
        "description": "Load the full context and instructions for a specific skill. Use this when you need deep expertise on a topic.",
        "input_schema": {
            "type": "object",
            "properties": {
                "id": {
                    "type": "string",
                    "description": "The unique ID of skill to load"
                }
            },
            "required": ["id"]
        }
    },
]


# ---------------------------------------------------------------------------
# Handler functions
# ---------------------------------------------------------------------------

def handle_list_available_skills(ctx, category: Optional[str] = None) -> str:
    """List skill metadata, optionally for one category."""
    skills = ctx.skills.list_skills(category)
    return json.dumps(skills, indent=2, ensure_ascii=False)


def handle_find_expert_skill(ctx, query: str, category: Optional[str] = None) -> str:
    """Search skills by name, id and description."""
    skills = ctx.skills.search(query, category)
    return json.dumps(skills, indent=2, ensure_ascii=False)


def handle_consult_skill(ctx, id: str) -> str:
    """Return the full skill record."""
    skill = ctx.skills.get(id)
    if skill is None:
        raise SkillNotFoundError(id)
    return json.dumps(skill.to_dict(), indent=2, ensure_ascii=False, default=str)


# Map tool names to handlers
HANDLERS = {
    "list_available_skills": handle_list_available_skills,
    "find_expert_skill": handle_find_expert_skill,
    "consult_skill": handle_consult_skill,
}
