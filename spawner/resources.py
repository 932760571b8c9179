"""
Manifest resource — describes what this MCP server offers.
"""

import json

from spawner.tools import get_all_tools

MANIFEST_URI = "spawner://manifest"
SERVER_NAME = "Spawner Skills MCP Server"
SERVER_VERSION = "1.0.0"

PROMPTS = [
    {
        "name": "plan-project",
        "description": "Analyze the request and create a step-by-step development plan using orchestration.",
    },
    {
        "name": "review-code",
        "description": "Check the code for sharp edges and validation errors.",
    },
    {
        "name": "debug-error",
        "description": "Use unstick strategies to solve this error.",
    },
]

RESOURCES = [
    {
        "name": "manifest",
        "uri": MANIFEST_URI,
        "description": "System manifest describing available capabilities",
    },
]

WORKFLOW = [
    "1. Use list_available_skills to explore available skills and categories",
    "2. Use find_expert_skill to search for specific expertise",
    "3. Use consult_skill to load detailed skill instructions",
    "4. Use validate_code_implementation to check code quality",
    "5. Use analyze_risk_sharp_edges to identify potential issues",
    "6. Use get_troubleshooting_advice when stuck",
    "7. Use orchestrate_development_plan for complex tasks",
    "8. Use access_project_memory to maintain state across sessions",
]

TIPS = [
    "Always consult relevant skills before implementing new features",
    "Run validation and sharp edge checks before finalizing code",
    "Use project memory to preserve important decisions",
    "The orchestrate tool can break down complex tasks automatically",
]


def build_manifest(ctx) -> dict:
    """Assemble the manifest for the skills currently loaded in *ctx*."""
    skill_count = len(ctx.skills.list_all())
    tools = [
        {"name": tool["name"], "description": tool["description"]}
        for tool in get_all_tools()
    ]
    return {
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "description": (
            f"This MCP server provides {skill_count} expert skills for development, "
            "deployment, and project management"
        ),
        "capabilities": {
            "tools": tools,
            "prompts": list(PROMPTS),
            "resources": list(RESOURCES),
        },
        "usage": {
            "workflow": list(WORKFLOW),
            "tips": list(TIPS),
        },
    }


def render_manifest(ctx) -> str:
    return json.dumps(build_manifest(ctx), indent=2, ensure_ascii=False)
