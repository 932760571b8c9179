"""
Guidance tools — troubleshooting advice and development planning.

Both return markdown rather than JSON.
"""


TOOLS = [
    {
        "name": "get_troubleshooting_advice",
        "description": "Get expert advice when you are stuck or seeing errors. Provides specific solutions based on the problem.",
        "input_schema": {
            "type": "object",
            "properties": {
                "problem": {
                    "type": "string",
                    "description": "Description of stuck state"
                }
            },
            "required": ["problem"]
        }
    },
    {
        "name": "orchestrate_development_plan",
        "description": "Create a comprehensive development plan for a high-level task. Break down complex goals into actionable steps.",
        "input_schema": {
            "type": "object",
            "properties": {
                "task": {
                    "type": "string",
                    "description": "The user's high-level goal"
                }
            },
            "required": ["task"]
        }
    },
]


def handle_get_troubleshooting_advice(ctx, problem: str) -> str:
    return ctx.unstick.get_advice(problem)


def handle_orchestrate_development_plan(ctx, task: str) -> str:
    return ctx.orchestrator.plan(task)


HANDLERS = {
    "get_troubleshooting_advice": handle_get_troubleshooting_advice,
    "orchestrate_development_plan": handle_orchestrate_development_plan,
}
