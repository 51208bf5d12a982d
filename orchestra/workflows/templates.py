"""
Workflow templates keyed by deliverable type.

A template is an ordered list of phases. Each phase names the agents it runs,
whether they run concurrently, and which earlier phases (by name) it builds
on. Task templates may reference ``{task}``, ``{deliverableType}`` and
``{audience}``; the planner fills them in.

Usage:
    from orchestra.workflows import get_workflow_template

    for phase in get_workflow_template(DeliverableType.ESSAY):
        print(phase.name, [a.agent_id for a in phase.agents])
"""

from typing import Dict, List, Optional

from orchestra.core.schemas import DeliverableType
from orchestra.workflows.base import AgentTemplate, PhaseTemplate
from orchestra.workflows.presentation import PRESENTATION_WORKFLOW


# =============================================================================
# Written deliverables
# =============================================================================

ESSAY_WORKFLOW: List[PhaseTemplate] = [
    PhaseTemplate(
        name="research",
        parallel=True,
        agents=(
            AgentTemplate("research-agent", "Research {task}"),
            AgentTemplate("critical-appraiser", "Provide critical analysis for: {task}"),
        ),
    ),
    PhaseTemplate(
        name="planning",
        parallel=False,
        agents=(
            AgentTemplate("outline-agent", "Create essay outline for {audience}: {task}"),
            AgentTemplate("title-generator", "Suggest a title for this {deliverableType}: {task}"),
        ),
        depends_on=("research",),
    ),
    PhaseTemplate(
        name="writing",
        parallel=False,
        agents=(
            AgentTemplate("introduction-writer", "Write introduction"),
            AgentTemplate("body-writer", "Write main body"),
            AgentTemplate("conclusion-writer", "Write conclusion"),
        ),
        depends_on=("planning",),
    ),
    PhaseTemplate(
        name="enhancement",
        parallel=True,
        agents=(
            AgentTemplate("editor-agent", "Edit and polish"),
            AgentTemplate("seo-optimizer", "Optimize for web"),
        ),
        depends_on=("writing",),
    ),
]

ARTICLE_WORKFLOW: List[PhaseTemplate] = [
    PhaseTemplate(
        name="research",
        parallel=True,
        agents=(
            AgentTemplate("research-agent", "Research {task}"),
            AgentTemplate("source-validator", "Verify the key claims for an article on: {task}"),
        ),
    ),
    PhaseTemplate(
        name="planning",
        parallel=False,
        agents=(
            AgentTemplate("outline-agent", "Create article outline for {audience}: {task}"),
            AgentTemplate("title-generator", "Write a headline for this {deliverableType}: {task}"),
        ),
        depends_on=("research",),
    ),
    PhaseTemplate(
        name="writing",
        parallel=False,
        agents=(
            AgentTemplate("introduction-writer", "Write an engaging article introduction"),
            AgentTemplate("body-writer", "Write the article body"),
            AgentTemplate("conclusion-writer", "Write the article conclusion"),
        ),
        depends_on=("planning",),
    ),
    PhaseTemplate(
        name="enhancement",
        parallel=True,
        agents=(
            AgentTemplate("editor-agent", "Edit and polish"),
            AgentTemplate("seo-optimizer", "Optimize for web"),
        ),
        depends_on=("writing",),
    ),
]

SERMON_WORKFLOW: List[PhaseTemplate] = [
    PhaseTemplate(
        name="scripture",
        parallel=True,
        agents=(
            AgentTemplate("biblical-research", "Research scripture for {task}"),
            AgentTemplate("theology-analyst", "Analyze theological context"),
        ),
    ),
    PhaseTemplate(
        name="structure",
        parallel=False,
        agents=(
            AgentTemplate("sermon-specialist", "Create sermon outline for {audience}"),
        ),
        depends_on=("scripture",),
    ),
    PhaseTemplate(
        name="content",
        parallel=False,
        agents=(
            AgentTemplate("introduction-writer", "Write sermon introduction"),
            AgentTemplate("body-writer", "Develop main points"),
            AgentTemplate("illustration-finder", "Find illustrations"),
            AgentTemplate("conclusion-writer", "Write application and invitation"),
        ),
        depends_on=("structure",),
    ),
]

COURSE_WORKFLOW: List[PhaseTemplate] = [
    PhaseTemplate(
        name="design",
        parallel=False,
        agents=(
            AgentTemplate("curriculum-designer", "Design course structure for {audience}: {task}"),
        ),
    ),
]

GENERAL_WORKFLOW: List[PhaseTemplate] = [
    PhaseTemplate(
        name="execution",
        parallel=False,
        agents=(
            AgentTemplate("research-agent", "Process {task}"),
        ),
    ),
]


WORKFLOW_TEMPLATES: Dict[DeliverableType, List[PhaseTemplate]] = {
    DeliverableType.PRESENTATION: PRESENTATION_WORKFLOW,
    DeliverableType.ESSAY: ESSAY_WORKFLOW,
    DeliverableType.ARTICLE: ARTICLE_WORKFLOW,
    DeliverableType.SERMON: SERMON_WORKFLOW,
    DeliverableType.COURSE: COURSE_WORKFLOW,
    DeliverableType.GENERAL: GENERAL_WORKFLOW,
}


def get_workflow_template(
    deliverable_type: DeliverableType,
    templates: Optional[Dict[DeliverableType, List[PhaseTemplate]]] = None,
) -> List[PhaseTemplate]:
    """Phases for a deliverable type, falling back to the general workflow."""
    table = templates if templates is not None else WORKFLOW_TEMPLATES
    return table.get(deliverable_type) or table.get(DeliverableType.GENERAL, GENERAL_WORKFLOW)
