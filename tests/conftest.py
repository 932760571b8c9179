"""Shared pytest fixtures for Spawner tests."""

import textwrap
from pathlib import Path

import pytest

from spawner.context import SpawnerContext
from spawner.memory import ProjectMemory
from spawner.trace_logger import TraceLogger


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


BACKEND_SKILL = """
    id: backend
    name: Backend Engineering
    version: 2.1.0
    description: Builds APIs, databases and server-side services
    tags:
      - api
      - database
    identity: You are a senior backend engineer.
    owns:
      - REST API design
      - Database access
    patterns:
      - name: Repository Pattern
        description: Keep persistence behind an interface.
        when: More than one data source
    anti_patterns:
      - name: God Service
        description: One service that does everything.
        why_bad: Impossible to test.
        instead: Split by bounded context.
    pairs_with:
      - frontend
"""

BACKEND_SHARP_EDGES = r"""
    sharp_edges:
      - id: select-star
        summary: SELECT * in production queries
        severity: high
        situation: Queries pull every column
        why: Schema changes silently break consumers.
        solution: List the columns you need.
        symptoms:
          - Slow queries
          - Broken serializers
        detection_pattern: 'select\s+\*'
      - id: missing-index
        summary: Foreign keys without indexes
        severity: medium
"""

BACKEND_VALIDATIONS = r"""
    validations:
      - id: no-console-log
        name: No console.log
        type: regex
        pattern: 'console\.log\('
        severity: warning
        message: Remove console.log before shipping.
        fix_action: Use a structured logger.
        file_patterns:
          - "**/*.ts"
          - "**/*.js"
      - id: no-hardcoded-secret
        name: No hardcoded secrets
        type: regex
        pattern: 'api_key\s*=\s*["'']'
        severity: error
        message: Secrets must come from the environment.
        fix_action: Read the key from an environment variable.
      - id: ast-only
        name: AST rule
        type: ast
        pattern: anything
"""

BACKEND_COLLABORATION = """
    delegation_triggers:
      - trigger: database schema
        delegate_to: postgres-wizard
        context: Schema design work
    receives_from:
      - skill: frontend
        context: API contracts
"""

FRONTEND_SKILL = """
    id: frontend
    name: Frontend
    description: React patterns and UI components
    tags: [react, ui]
"""

FRONTEND_VALIDATIONS = """
    validations:
      - id: no-inner-html
        name: No dangerouslySetInnerHTML
        type: regex
        pattern: dangerouslySetInnerHTML
        severity: error
        message: Avoid raw HTML injection.
        fix_action: Sanitize or render as text.
        file_patterns: "*.tsx"
"""

LLM_SKILL = """
    id: llm-architect
    name: LLM Architect
    description: LlamaIndex RAG pipelines and prompt design
"""

PAYMENTS_SKILL = """
    name: Stripe Integration
    description: |
      Stripe payments, subscriptions and webhooks
      for SaaS products.
"""

DEBUGGING_SKILL = """
    id: debugging-master
    name: Debugging Master
    identity:
      role: Systematic debugger
    patterns:
      - name: Rubber Ducking
        description: Talk it through.
      - name: Scientific Method
        guidance: Form a hypothesis, then design an experiment that can falsify it.
"""


@pytest.fixture
def skills_root(tmp_path):
    """A miniature skills repository with four categories."""
    root = tmp_path / "skills"
    _write(root / "development" / "backend" / "skill.yaml", BACKEND_SKILL)
    _write(root / "development" / "backend" / "sharp-edges.yaml", BACKEND_SHARP_EDGES)
    _write(root / "development" / "backend" / "validations.yaml", BACKEND_VALIDATIONS)
    _write(root / "development" / "backend" / "collaboration.yaml", BACKEND_COLLABORATION)
    _write(root / "development" / "frontend" / "skill.yaml", FRONTEND_SKILL)
    _write(root / "development" / "frontend" / "validations.yaml", FRONTEND_VALIDATIONS)
    _write(root / "ai" / "llm-architect" / "skill.yaml", LLM_SKILL)
    _write(root / "integrations" / "stripe-payments" / "skill.yaml", PAYMENTS_SKILL)
    _write(root / "debugging" / "debugging-master" / "skill.yaml", DEBUGGING_SKILL)
    # Not skills
    _write(root / "scripts" / "build.js", "// tooling\n")
    _write(root / "node_modules" / "pkg" / "skill.yaml", "id: vendored\nname: Vendored\n")
    (root / "empty").mkdir()
    return root


@pytest.fixture
def context(skills_root, tmp_path):
    """SpawnerContext over the miniature tree with throwaway databases."""
    state = tmp_path / "state"
    memory = ProjectMemory(str(state / "memory.db"))
    trace = TraceLogger(str(state / "trace.db"))
    ctx = SpawnerContext(skills_root, memory=memory, trace=trace)
    yield ctx
    memory.close()
    trace.close()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep Settings.from_env() away from the real ~/.spawner."""
    monkeypatch.setenv("SPAWNER_HOME", str(tmp_path / "home"))
    for name in (
        "SPAWNER_SKILLS_DIR",
        "SPAWNER_REPO_URL",
        "SPAWNER_MCP_ENDPOINT",
        "SPAWNER_TRACE",
        "SPAWNER_AUTO_RELOAD",
        "SPAWNER_RELOAD_CHECK_INTERVAL",
        "PORT",
        "HOST",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write():
    """Helper that writes dedented text to a path, creating parent dirs."""
    return _write
