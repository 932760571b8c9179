"""
Code review tools — validation rules and sharp-edge detection.
"""

import json
from typing import Optional


# ---------------------------------------------------------------------------
# Tool definitions
# ---------------------------------------------------------------------------

TOOLS = [
    {
        "name": "validate_code_implementation",
        "description": "Validate code against defined patterns and rules. Use this before finalizing any code.",
        "input_schema": {
            "type": "object",
            "properties": {
                "code": {
                    "type": "string",
                    "description": "Code content to validate"
                },
                "language": {
                    "type": "string",
                    "description": "Programming language of code (e.g. typescript, python)"
                },
                "context": {
                    "type": "string",
                    "description": "Optional skill ID to load specific validations"
                }
            },
            "required": ["code"]
        }
    },
    {
        "name": "analyze_risk_sharp_edges",
        "description": "Scan code for 'sharp edges' - high-risk patterns or known gotchas. Use this proactively.",
        "input_schema": {
            "type": "object",
            "properties": {
                "code": {
                    "type": "string",
                    "description": "Code content to scan for sharp edges"
                },
                "skill_id": {
                    "type": "string",
                    "description": "Specific skill to check for sharp edges"
                }
            },
            "required": []
        }
    },
]


# ---------------------------------------------------------------------------
# Handler functions
# ---------------------------------------------------------------------------

def handle_validate_code_implementation(
    ctx,
    code: str,
    language: Optional[str] = None,
    context: Optional[str] = None,
) -> str:
    """Run validation rules over code; *context* is an optional skill id."""
    results = ctx.validation.validate(code, language, context)
    return json.dumps(results, indent=2, ensure_ascii=False)


def handle_analyze_risk_sharp_edges(
    ctx,
    code: Optional[str] = None,
    skill_id: Optional[str] = None,
) -> str:
    """Find sharp edges for a skill and/or present in code."""
    results = ctx.sharp_edges.check(code, skill_id)
    return json.dumps(results, indent=2, ensure_ascii=False, default=str)


# Map tool names to handlers
HANDLERS = {
    "validate_code_implementation": handle_validate_code_implementation,
    "analyze_risk_sharp_edges": handle_analyze_risk_sharp_edges,
}
