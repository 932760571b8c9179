"""Tests for spawner.tools registry (get_all_tools, execute_tool)."""

import json

import pytest

from spawner.errors import MemoryActionError, SkillNotFoundError, UnknownToolError
from spawner.tools import execute_tool, get_all_tools, get_tool

EXPECTED_TOOLS = {
    "list_available_skills",
    "find_expert_skill",
    "consult_skill",
    "validate_code_implementation",
    "access_project_memory",
    "analyze_risk_sharp_edges",
    "get_troubleshooting_advice",
    "orchestrate_development_plan",
}


class TestGetAllTools:
    def test_all_tools_registered(self):
        names = {t["name"] for t in get_all_tools()}
        assert names == EXPECTED_TOOLS

    def test_returns_copy(self):
        tools1 = get_all_tools()
        tools2 = get_all_tools()
        assert tools1 is not tools2
        assert tools1 == tools2

    def test_get_tool(self):
        assert get_tool("consult_skill")["input_schema"]["required"] == ["id"]
        assert get_tool("nonexistent") is None


class TestToolSchemaFormat:
    def test_each_tool_has_required_keys(self):
        for tool in get_all_tools():
            assert "name" in tool, f"Tool missing 'name': {tool}"
            assert "description" in tool, f"Tool {tool.get('name')} missing 'description'"
            assert "input_schema" in tool, f"Tool {tool.get('name')} missing 'input_schema'"

    def test_input_schema_is_object_type(self):
        for tool in get_all_tools():
            schema = tool["input_schema"]
            assert schema["type"] == "object", f"Tool {tool['name']} schema type is not 'object'"
            assert "properties" in schema, f"Tool {tool['name']} schema missing 'properties'"

    def test_memory_action_enum(self):
        schema = get_tool("access_project_memory")["input_schema"]
        assert schema["properties"]["action"]["enum"] == ["set", "get", "list"]


class TestExecuteTool:
    def test_unknown_tool(self, context):
        with pytest.raises(UnknownToolError, match="Unknown tool: nonexistent_tool_xyz"):
            execute_tool("nonexistent_tool_xyz", {}, context)

    def test_list_available_skills(self, context):
        result = json.loads(execute_tool("list_available_skills", {}, context))
        assert len(result) == 5

    def test_list_available_skills_by_category(self, context):
        result = json.loads(execute_tool("list_available_skills", {"category": "ai"}, context))
        assert [s["id"] for s in result] == ["llm-architect"]

    def test_output_is_indented_json(self, context):
        text = execute_tool("list_available_skills", {"category": "ai"}, context)
        assert text.startswith("[\n  {")

    def test_find_expert_skill(self, context):
        result = json.loads(execute_tool("find_expert_skill", {"query": "react patterns"}, context))
        assert [s["id"] for s in result] == ["frontend"]

    def test_consult_skill(self, context):
        skill = json.loads(execute_tool("consult_skill", {"id": "backend"}, context))
        assert skill["name"] == "Backend Engineering"
        assert skill["patterns"][0]["name"] == "Repository Pattern"
        assert skill["identity"] == "You are a senior backend engineer."

    def test_consult_missing_skill(self, context):
        with pytest.raises(SkillNotFoundError, match="Skill not found: ghost"):
            execute_tool("consult_skill", {"id": "ghost"}, context)

    def test_validate_code_with_context(self, context):
        results = json.loads(execute_tool(
            "validate_code_implementation",
            {"code": "console.log(1)", "language": "javascript", "context": "backend"},
            context,
        ))
        assert [r["rule_id"] for r in results] == ["no-console-log"]

    def test_analyze_risk_sharp_edges(self, context):
        edges = json.loads(execute_tool(
            "analyze_risk_sharp_edges", {"code": "SELECT * FROM t"}, context
        ))
        assert [e["id"] for e in edges] == ["select-star"]

    def test_troubleshooting_returns_markdown(self, context):
        advice = execute_tool("get_troubleshooting_advice", {"problem": "tests hang"}, context)
        assert advice.startswith("## From Debugging Master")

    def test_orchestrate(self, context):
        plan = execute_tool("orchestrate_development_plan", {"task": "check my code"}, context)
        assert "**Validate Code**" in plan


class TestProjectMemoryTool:
    def test_set_then_get(self, context):
        stored = json.loads(execute_tool(
            "access_project_memory", {"action": "set", "key": "db", "value": "postgres"}, context
        ))
        assert stored["key"] == "db"
        fetched = json.loads(execute_tool(
            "access_project_memory", {"action": "get", "key": "db"}, context
        ))
        assert fetched["value"] == "postgres"

    def test_get_missing_is_null(self, context):
        text = execute_tool("access_project_memory", {"action": "get", "key": "nope"}, context)
        assert text == "null"

    def test_list(self, context):
        execute_tool("access_project_memory", {"action": "set", "key": "a", "value": "1"}, context)
        entries = json.loads(execute_tool("access_project_memory", {"action": "list"}, context))
        assert [e["key"] for e in entries] == ["a"]

    @pytest.mark.parametrize("args, message", [
        ({"action": "set", "key": "k"}, "Key and value required for set"),
        ({"action": "set", "value": "v"}, "Key and value required for set"),
        ({"action": "get"}, "Key required for get"),
        ({"action": "delete"}, "Invalid action: delete"),
    ])
    def test_errors(self, context, args, message):
        with pytest.raises(MemoryActionError, match=message):
            execute_tool("access_project_memory", args, context)
