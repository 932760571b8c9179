"""
Project memory tool — store and recall project-level decisions.
"""

import json
from typing import Optional

from spawner.errors import MemoryActionError

ACTIONS = ("set", "get", "list")


TOOLS = [
    {
        "name": "access_project_memory",
        "description": "Store or retrieve project-level decisions and context. Use this to maintain continuity.",
        "input_schema": {
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": list(ACTIONS),
                    "description": "Action to perform"
                },
                "key": {
                    "type": "string",
                    "description": "Key for memory entry"
                },
                "value": {
                    "type": "string",
                    "description": "Value to store (only for 'set')"
                }
            },
            "required": ["action"]
        }
    },
]


def handle_access_project_memory(
    ctx,
    action: str,
    key: Optional[str] = None,
    value: Optional[str] = None,
) -> str:
    """Dispatch a memory action. `get` of an unknown key yields null."""
    if action == "set":
        if not key or not value:
            raise MemoryActionError("Key and value required for set")
        result = ctx.memory.set(key, value)
    elif action == "get":
        if not key:
            raise MemoryActionError("Key required for get")
        result = ctx.memory.get(key)
    elif action == "list":
        result = ctx.memory.list()
    else:
        raise MemoryActionError(f"Invalid action: {action}")

    return json.dumps(result, indent=2, ensure_ascii=False)


HANDLERS = {
    "access_project_memory": handle_access_project_memory,
}
