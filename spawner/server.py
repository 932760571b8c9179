"""
Spawner MCP server — exposes the skill tools, prompts and manifest over MCP.

Usage:
    spawner serve              # streamable HTTP on $PORT (default 3000) at /mcp
    spawner serve --stdio      # stdio, for MCP clients that spawn the server

Every tool call checks the skills tree for changed YAML first, then runs
the registered handler and records the call in the trace log.
"""

import logging
import time
import uuid
from typing import Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from spawner import prompts
from spawner.config import Settings
from spawner.context import SpawnerContext
from spawner.errors import SkillNotFoundError
from spawner.resources import MANIFEST_URI, PROMPTS, SERVER_VERSION, render_manifest
from spawner.tools import execute_tool, get_tool

logger = logging.getLogger(__name__)

SERVER_NAME = "spawner-skills"
MCP_PATH = "/mcp"

ERROR_PREFIXES = {
    "list_available_skills": "Error listing skills",
    "find_expert_skill": "Error searching skills",
    "consult_skill": "Error loading skill",
    "validate_code_implementation": "Error validating code",
    "access_project_memory": "Error accessing memory",
    "analyze_risk_sharp_edges": "Error checking sharp edges",
    "get_troubleshooting_advice": "Error getting unstick advice",
    "orchestrate_development_plan": "Error orchestrating",
}


def _description(name: str) -> str:
    tool = get_tool(name)
    return tool["description"] if tool else ""


def _prompt_description(name: str) -> str:
    for prompt in PROMPTS:
        if prompt["name"] == name:
            return prompt["description"]
    return ""


def call_tool(ctx: SpawnerContext, name: str, args: dict, session_id: str = "") -> str:
    """Run one tool for the MCP layer.

    Omitted optional arguments are dropped, the skill watcher gets a chance
    to reload, and the call is traced. Failures are re-raised as ToolError
    carrying the per-tool error prefix.
    """
    args = {k: v for k, v in args.items() if v is not None}
    start = time.monotonic()
    result = ""
    error = ""
    try:
        ctx.reloader.check_and_apply()
        result = execute_tool(name, args, ctx)
        return result
    except SkillNotFoundError as e:
        error = str(e)
        raise ToolError(error) from e
    except Exception as e:
        error = f"{ERROR_PREFIXES.get(name, 'Error')}: {e}"
        logger.error("Tool %s failed: %s", name, e)
        raise ToolError(error) from e
    finally:
        duration_ms = int((time.monotonic() - start) * 1000)
        if ctx.trace is not None:
            ctx.trace.log(
                tool=name,
                args=args,
                result=result,
                error=error,
                duration_ms=duration_ms,
                session_id=session_id,
            )


def build_server(ctx: SpawnerContext) -> FastMCP:
    """Create the FastMCP server bound to *ctx*."""
    mcp = FastMCP(name=SERVER_NAME, version=SERVER_VERSION)
    session_id = uuid.uuid4().hex[:12]

    # -- Tools ---------------------------------------------------------------

    @mcp.tool(name="list_available_skills", description=_description("list_available_skills"))
    def list_available_skills(category: Optional[str] = None) -> str:
        return call_tool(ctx, "list_available_skills", {"category": category}, session_id)

    @mcp.tool(name="find_expert_skill", description=_description("find_expert_skill"))
    def find_expert_skill(query: str, category: Optional[str] = None) -> str:
        return call_tool(
            ctx, "find_expert_skill", {"query": query, "category": category}, session_id
        )

    @mcp.tool(name="consult_skill", description=_description("consult_skill"))
    def consult_skill(id: str) -> str:
        return call_tool(ctx, "consult_skill", {"id": id}, session_id)

    @mcp.tool(
        name="validate_code_implementation",
        description=_description("validate_code_implementation"),
    )
    def validate_code_implementation(
        code: str,
        language: Optional[str] = None,
        context: Optional[str] = None,
    ) -> str:
        return call_tool(
            ctx,
            "validate_code_implementation",
            {"code": code, "language": language, "context": context},
            session_id,
        )

    @mcp.tool(name="access_project_memory", description=_description("access_project_memory"))
    def access_project_memory(
        action: Literal["set", "get", "list"],
        key: Optional[str] = None,
        value: Optional[str] = None,
    ) -> str:
        return call_tool(
            ctx,
            "access_project_memory",
            {"action": action, "key": key, "value": value},
            session_id,
        )

    @mcp.tool(
        name="analyze_risk_sharp_edges",
        description=_description("analyze_risk_sharp_edges"),
    )
    def analyze_risk_sharp_edges(
        code: Optional[str] = None,
        skill_id: Optional[str] = None,
    ) -> str:
        return call_tool(
            ctx,
            "analyze_risk_sharp_edges",
            {"code": code, "skill_id": skill_id},
            session_id,
        )

    @mcp.tool(
        name="get_troubleshooting_advice",
        description=_description("get_troubleshooting_advice"),
    )
    def get_troubleshooting_advice(problem: str) -> str:
        return call_tool(ctx, "get_troubleshooting_advice", {"problem": problem}, session_id)

    @mcp.tool(
        name="orchestrate_development_plan",
        description=_description("orchestrate_development_plan"),
    )
    def orchestrate_development_plan(task: str) -> str:
        return call_tool(ctx, "orchestrate_development_plan", {"task": task}, session_id)

    # -- Prompts -------------------------------------------------------------

    @mcp.prompt(name="plan-project", description=_prompt_description("plan-project"))
    def plan_project(task: str) -> str:
        return prompts.plan_project(ctx, task)

    @mcp.prompt(name="review-code", description=_prompt_description("review-code"))
    def review_code(
        code: str,
        language: Optional[str] = None,
        context: Optional[str] = None,
    ) -> str:
        return prompts.review_code(ctx, code, language, context)

    @mcp.prompt(name="debug-error", description=_prompt_description("debug-error"))
    def debug_error(error: str) -> str:
        return prompts.debug_error(ctx, error)

    # -- Resources -----------------------------------------------------------

    @mcp.resource(
        MANIFEST_URI,
        name="manifest",
        description="System manifest describing available capabilities",
        mime_type="application/json",
    )
    def manifest() -> str:
        return render_manifest(ctx)

    return mcp


def run(settings: Optional[Settings] = None, transport: str = "streamable-http"):
    """Build the context from settings and serve until interrupted."""
    settings = settings or Settings.from_env()
    ctx = SpawnerContext.from_settings(settings)
    server = build_server(ctx)

    if transport == "stdio":
        logger.info("[Server] Spawner Skills MCP Server running on stdio")
        server.run("stdio")
        return

    logger.info("[Server] Spawner Skills MCP Server running on port %s", settings.port)
    logger.info("[Server] MCP endpoint: http://localhost:%s%s", settings.port, MCP_PATH)
    server.run("streamable-http", host=settings.host, port=settings.port, path=MCP_PATH)
