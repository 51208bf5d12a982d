"""Execution planning: turn an analysis into phases of agent tasks."""

import uuid
from typing import Dict, List, Optional

from orchestra.core.catalog import AgentCatalog, AgentDescriptor
from orchestra.core.config import Settings, settings as default_settings
from orchestra.core.errors import AgentNotFoundError
from orchestra.core.logging import get_logger
from orchestra.core.model_selection import ModelSelectionCriteria, ModelSelectionPolicy
from orchestra.core.schemas import (
    AgentTask,
    CostSensitivity,
    DeliverableType,
    ExecutionPlan,
    OrchestrationRequest,
    Phase,
    SpeedPriority,
    TaskAnalysis,
)
from orchestra.workflows.base import PhaseTemplate
from orchestra.workflows.templates import get_workflow_template

logger = get_logger(__name__)

DEFAULT_AUDIENCE = "general audience"
FORCED_PHASE_NAME = "execution"


def interpolate(template: str, request: OrchestrationRequest, deliverable_type: DeliverableType) -> str:
    """Fill ``{task}``, ``{deliverableType}`` and ``{audience}`` placeholders.

    Plain replacement, so braces in the user's text are left alone.
    """
    audience = request.preferences.target_audience or DEFAULT_AUDIENCE
    return (
        template
        .replace("{task}", request.task)
        .replace("{deliverableType}", deliverable_type.value)
        .replace("{audience}", audience)
    )


class ExecutionPlanner:
    """Builds an ``ExecutionPlan`` from a forced agent or a workflow template."""

    def __init__(
        self,
        catalog: AgentCatalog,
        policy: ModelSelectionPolicy,
        templates: Optional[Dict[DeliverableType, List[PhaseTemplate]]] = None,
        settings: Settings = default_settings,
    ):
        self.catalog = catalog
        self.policy = policy
        self.templates = templates
        self.settings = settings

    def plan(self, request: OrchestrationRequest, analysis: TaskAnalysis) -> ExecutionPlan:
        if request.force_agent:
            return self._forced_plan(request, request.force_agent)
        return self._workflow_plan(request, analysis)

    # ------------------------------------------------------------------
    # Plan shapes
    # ------------------------------------------------------------------

    def _forced_plan(self, request: OrchestrationRequest, agent_id: str) -> ExecutionPlan:
        agent = self.catalog.lookup(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)

        model = self._select_model(request, agent, request.task)
        task = AgentTask(task_id=f"phase-1-{agent.id}-1", agent_id=agent.id, task=request.task, model=model)
        phase = Phase(phase_id="phase-1", name=FORCED_PHASE_NAME, parallel=False, tasks=(task,))

        logger.info("forced_agent_plan", agent_id=agent.id, model=model)
        return ExecutionPlan(
            plan_id=str(uuid.uuid4()),
            phases=(phase,),
            total_agents=1,
            estimated_duration_ms=self.settings.per_agent_latency_ms,
            estimated_cost=self.policy.estimate_cost(model),
        )

    def _workflow_plan(self, request: OrchestrationRequest, analysis: TaskAnalysis) -> ExecutionPlan:
        templates = get_workflow_template(analysis.deliverable_type, self.templates)
        phases: List[Phase] = []
        phase_ids_by_name: Dict[str, str] = {}

        for template in templates:
            phase_id = f"phase-{len(phases) + 1}"
            depends_on = tuple(
                phase_ids_by_name[name] for name in template.depends_on if name in phase_ids_by_name
            )

            tasks: List[AgentTask] = []
            for slot in template.agents:
                agent = self.catalog.lookup(slot.agent_id)
                if agent is None:
                    logger.warning("workflow_agent_skipped", agent_id=slot.agent_id, phase=template.name)
                    continue

                text = interpolate(slot.task_template, request, analysis.deliverable_type)
                dependencies = list(depends_on)
                if not template.parallel and tasks:
                    dependencies.append(tasks[-1].task_id)

                tasks.append(AgentTask(
                    task_id=f"{phase_id}-{agent.id}-{len(tasks) + 1}",
                    agent_id=agent.id,
                    task=text,
                    model=self._select_model(request, agent, text),
                    dependencies=tuple(dependencies),
                    priority=template.priority,
                ))

            if not tasks:
                logger.warning("workflow_phase_dropped", phase=template.name)
                continue

            phase_ids_by_name[template.name] = phase_id
            phases.append(Phase(
                phase_id=phase_id,
                name=template.name,
                parallel=template.parallel,
                tasks=tuple(tasks),
                depends_on=depends_on,
            ))

        total_agents = sum(len(phase.tasks) for phase in phases)
        estimated_cost = sum(self.policy.estimate_cost(task.model) for phase in phases for task in phase.tasks)

        plan = ExecutionPlan(
            plan_id=str(uuid.uuid4()),
            phases=tuple(phases),
            total_agents=total_agents,
            estimated_duration_ms=total_agents * self.settings.per_agent_latency_ms,
            estimated_cost=estimated_cost,
        )
        logger.info(
            "execution_plan_created",
            deliverable_type=analysis.deliverable_type.value,
            phases=len(phases),
            total_agents=total_agents,
            estimated_cost=round(estimated_cost, 6),
        )
        return plan

    def _select_model(self, request: OrchestrationRequest, agent: AgentDescriptor, text: str) -> str:
        prefs = request.preferences
        criteria = ModelSelectionCriteria(
            task_complexity=self.policy.estimate_complexity(text, agent),
            quality_requirement=self.policy.resolve_quality(text, prefs.quality_level),
            speed_priority=prefs.speed_priority or SpeedPriority.MEDIUM,
            cost_sensitivity=prefs.cost_sensitivity or CostSensitivity.MEDIUM,
            needs_image_generation=agent.generates_images,
        )
        return self.policy.select_model(criteria)
