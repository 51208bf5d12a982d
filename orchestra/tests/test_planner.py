"""Tests for execution planning."""

import pytest

from conftest import analysis_json, make_request
from orchestra.agents.analyzer import fallback_analysis, parse_analysis
from orchestra.agents.planner import ExecutionPlanner, interpolate
from orchestra.core.errors import AgentNotFoundError
from orchestra.core.model_selection import BALANCED_MODEL, IMAGE_MODEL, LITE_MODEL, PREMIUM_MODEL
from orchestra.core.schemas import CostSensitivity, DeliverableType, QualityLevel
from orchestra.workflows import AgentTemplate, PhaseTemplate


def analysis_for(deliverable_type: str):
    return parse_analysis(analysis_json(deliverable_type))


class TestInterpolate:
    """Tests for task template interpolation."""

    def test_fills_all_placeholders(self):
        request = make_request("grace", target_audience="teenagers")
        text = interpolate("{task} as {deliverableType} for {audience}", request, DeliverableType.ESSAY)
        assert text == "grace as essay for teenagers"

    def test_default_audience(self):
        text = interpolate("for {audience}", make_request(), DeliverableType.GENERAL)
        assert text == "for general audience"

    def test_braces_in_task_are_kept(self):
        text = interpolate("Research {task}", make_request("sets like {a, b}"), DeliverableType.GENERAL)
        assert text == "Research sets like {a, b}"


class TestForcedAgentPlan:
    """A forced agent bypasses the workflow templates."""

    def test_single_phase_single_task(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)
        request = make_request("Summarize Romans 8", context={"force_agent": "research-agent"})

        plan = planner.plan(request, fallback_analysis(request))

        assert len(plan.phases) == 1
        phase = plan.phases[0]
        assert phase.name == "execution"
        assert phase.parallel is False
        assert len(phase.tasks) == 1
        task = phase.tasks[0]
        assert task.agent_id == "research-agent"
        assert task.task == "Summarize Romans 8"
        assert plan.total_agents == 1
        assert plan.estimated_duration_ms == test_settings.per_agent_latency_ms
        assert plan.estimated_cost == policy.estimate_cost(task.model)

    def test_forced_agent_ignores_deliverable_type(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)
        request = make_request(context={"force_agent": "editor-agent"})

        plan = planner.plan(request, analysis_for("essay"))

        assert [t.agent_id for _, t in plan.iter_tasks()] == ["editor-agent"]

    def test_unknown_forced_agent_raises(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)
        request = make_request(context={"force_agent": "ghost-writer"})

        with pytest.raises(AgentNotFoundError) as exc_info:
            planner.plan(request, fallback_analysis(request))
        assert exc_info.value.agent_id == "ghost-writer"


class TestWorkflowPlan:
    """Tests for template-driven plans."""

    def test_essay_plan_shape(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)

        plan = planner.plan(make_request("servant leadership"), analysis_for("essay"))

        assert [p.name for p in plan.phases] == ["research", "planning", "writing", "enhancement"]
        assert [p.phase_id for p in plan.phases] == ["phase-1", "phase-2", "phase-3", "phase-4"]
        assert [p.parallel for p in plan.phases] == [True, False, False, True]
        assert [t.agent_id for t in plan.phases[2].tasks] == [
            "introduction-writer", "body-writer", "conclusion-writer",
        ]

    def test_totals_and_estimates(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)

        plan = planner.plan(make_request("servant leadership"), analysis_for("sermon"))

        tasks = [task for _, task in plan.iter_tasks()]
        assert plan.total_agents == sum(len(p.tasks) for p in plan.phases) == len(tasks)
        assert plan.estimated_duration_ms == plan.total_agents * test_settings.per_agent_latency_ms
        assert plan.estimated_cost == pytest.approx(sum(policy.estimate_cost(t.model) for t in tasks))

    def test_task_templates_interpolated(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)

        plan = planner.plan(make_request("servant leadership"), analysis_for("essay"))

        research = plan.phases[0].tasks[0]
        assert research.agent_id == "research-agent"
        assert research.task == "Research servant leadership"
        outline = plan.phases[1].tasks[0]
        assert outline.task == "Create essay outline for general audience: servant leadership"

    def test_phase_dependencies_resolved_to_ids(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)

        plan = planner.plan(make_request("servant leadership"), analysis_for("essay"))

        research, planning, writing, _ = plan.phases
        assert research.depends_on == ()
        assert planning.depends_on == (research.phase_id,)
        assert writing.depends_on == (planning.phase_id,)
        for task in research.tasks:
            assert task.dependencies == ()

    def test_sequential_tasks_chain_on_predecessor(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)

        plan = planner.plan(make_request("servant leadership"), analysis_for("essay"))

        writing = plan.phases[2]
        intro, body, conclusion = writing.tasks
        assert intro.dependencies == ("phase-2",)
        assert body.dependencies == ("phase-2", intro.task_id)
        assert conclusion.dependencies == ("phase-2", body.task_id)

    def test_parallel_tasks_do_not_chain(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)

        plan = planner.plan(make_request("servant leadership"), analysis_for("essay"))

        editor, seo = plan.phases[3].tasks
        assert editor.dependencies == seo.dependencies == ("phase-3",)

    def test_task_ids_unique(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)

        plan = planner.plan(make_request("servant leadership"), analysis_for("presentation"))

        ids = [task.task_id for _, task in plan.iter_tasks()]
        assert len(ids) == len(set(ids))

    def test_unknown_agents_skipped_and_empty_phases_dropped(self, catalog, policy, test_settings):
        templates = {
            DeliverableType.GENERAL: [
                PhaseTemplate("ghosts", False, (AgentTemplate("ghost-agent", "Haunt {task}"),)),
                PhaseTemplate(
                    "work",
                    True,
                    (
                        AgentTemplate("ghost-agent", "Haunt {task}"),
                        AgentTemplate("research-agent", "Process {task}"),
                    ),
                    depends_on=("ghosts",),
                ),
            ],
        }
        planner = ExecutionPlanner(catalog, policy, templates, test_settings)

        plan = planner.plan(make_request("grace"), analysis_for("general"))

        assert len(plan.phases) == 1
        phase = plan.phases[0]
        assert phase.phase_id == "phase-1"
        assert phase.name == "work"
        assert phase.depends_on == ()
        assert [t.agent_id for t in phase.tasks] == ["research-agent"]
        assert plan.total_agents == 1

    def test_missing_template_falls_back_to_general(self, catalog, policy, test_settings):
        templates = {
            DeliverableType.GENERAL: [
                PhaseTemplate("only", False, (AgentTemplate("research-agent", "Process {task}"),)),
            ],
        }
        planner = ExecutionPlanner(catalog, policy, templates, test_settings)

        plan = planner.plan(make_request("grace"), analysis_for("essay"))

        assert [p.name for p in plan.phases] == ["only"]

    def test_empty_plan_when_no_agent_resolves(self, catalog, policy, test_settings):
        templates = {
            DeliverableType.GENERAL: [
                PhaseTemplate("ghosts", False, (AgentTemplate("ghost-agent", "x"),)),
            ],
        }
        planner = ExecutionPlanner(catalog, policy, templates, test_settings)

        plan = planner.plan(make_request(), analysis_for("general"))

        assert plan.phases == ()
        assert plan.total_agents == 0
        assert plan.estimated_duration_ms == 0
        assert plan.estimated_cost == 0


class TestModelSelectionInPlans:
    """Models chosen per task from agent baselines and preferences."""

    def test_agent_baselines(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)

        plan = planner.plan(make_request("hope"), analysis_for("sermon"))

        models = {task.agent_id: task.model for _, task in plan.iter_tasks()}
        # premium domain agents count as complex work
        assert models["theology-analyst"] == PREMIUM_MODEL
        assert models["sermon-specialist"] == PREMIUM_MODEL
        assert models["illustration-finder"] == BALANCED_MODEL

    def test_cost_sensitive_simple_work_uses_lite(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)
        request = make_request("hope", cost_sensitivity=CostSensitivity.HIGH)

        plan = planner.plan(request, analysis_for("essay"))

        models = {task.agent_id: task.model for _, task in plan.iter_tasks()}
        assert models["seo-optimizer"] == LITE_MODEL

    def test_premium_quality_preference(self, catalog, policy, test_settings):
        planner = ExecutionPlanner(catalog, policy, settings=test_settings)
        request = make_request("hope", quality_level=QualityLevel.PREMIUM)

        plan = planner.plan(request, analysis_for("essay"))

        assert {task.model for _, task in plan.iter_tasks()} == {PREMIUM_MODEL}

    def test_image_agent_gets_image_model(self, catalog, policy, test_settings):
        templates = {
            DeliverableType.GENERAL: [
                PhaseTemplate("art", False, (AgentTemplate("image-generator", "Illustrate {task}"),)),
            ],
        }
        planner = ExecutionPlanner(catalog, policy, templates, test_settings)
        request = make_request("a lighthouse", quality_level=QualityLevel.PREMIUM)

        plan = planner.plan(request, analysis_for("general"))

        assert plan.phases[0].tasks[0].model == IMAGE_MODEL
