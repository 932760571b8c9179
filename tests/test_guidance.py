"""Tests for spawner.unstick and spawner.orchestrate."""

import random

from spawner.orchestrate import Orchestrator
from spawner.skills import Skill, SkillRegistry
from spawner.unstick import DEBUGGING_CHECKLIST, OBLIQUE_STRATEGIES, UnstickManager


class TestUnstick:
    def test_debugging_master_guidance(self, skills_root):
        advice = UnstickManager(SkillRegistry(skills_root)).get_advice("tests fail")
        assert advice == (
            "## From Debugging Master\n\n"
            "Form a hypothesis, then design an experiment that can falsify it."
        )

    def test_description_used_when_no_guidance(self, tmp_path):
        registry = SkillRegistry(tmp_path)
        registry.load([Skill(
            id="debugging-master", name="DM", category="debugging", path="/p",
            patterns=[{"name": "Debugging Process", "description": "Reproduce first."}],
        )])
        advice = UnstickManager(registry).get_advice("x")
        assert advice == "## From Debugging Master\n\nReproduce first."

    def test_oblique_strategy_fallback(self, tmp_path):
        manager = UnstickManager(SkillRegistry(tmp_path), rng=random.Random(3))
        advice = manager.get_advice("stuck")
        assert advice.startswith("## Unstick Strategy\n\n")
        assert advice.endswith(DEBUGGING_CHECKLIST)
        strategy = advice.split("\n\n")[1]
        assert strategy in OBLIQUE_STRATEGIES

    def test_fallback_when_no_matching_pattern(self, tmp_path):
        registry = SkillRegistry(tmp_path)
        registry.load([Skill(
            id="debugging-master", name="DM", category="debugging", path="/p",
            patterns=[{"name": "Rubber Ducking", "guidance": "Talk."}],
        )])
        assert UnstickManager(registry).get_advice("x").startswith("## Unstick Strategy")

    def test_checklist_has_four_steps(self):
        assert DEBUGGING_CHECKLIST.count("\n") == 4
        assert len(OBLIQUE_STRATEGIES) == 8


class TestOrchestrator:
    def test_saas_task(self):
        plan = Orchestrator().plan("Build a SaaS for invoices")
        assert plan.startswith('## Orchestration Plan for: "Build a SaaS for invoices"\n\n')
        assert "1. **Find Skills**" in plan
        assert "micro-saas-launcher" in plan
        assert plan.endswith("\nUse these tools to proceed.")

    def test_steps_numbered_sequentially(self):
        plan = Orchestrator().plan("review the code and watch for risk")
        assert "1. **Validate Code**" in plan
        assert "2. **Check Sharp Edges**" in plan
        assert "**Find Skills**" not in plan

    def test_all_groups(self):
        plan = Orchestrator().plan("create app, debug error, check it, warn me")
        for i, label in enumerate(
            ["Find Skills", "Get Unstuck", "Validate Code", "Check Sharp Edges"], 1
        ):
            assert f"{i}. **{label}**" in plan

    def test_explore_when_nothing_matches(self):
        plan = Orchestrator().plan("hello")
        assert "1. **Explore**: Use `list_available_skills`" in plan

    def test_case_insensitive(self):
        assert "**Get Unstuck**" in Orchestrator().plan("I AM STUCK")
