"""
Workflow definitions for the orchestrator.

Available workflows:
- presentation: narrative slide deck pipeline ending in a formatter pass
- essay / article: research, outline, sequential writing, enhancement
- sermon: scripture study, homiletic structure, sequential content
- course: curriculum design only
- general: a single research pass
"""

from .base import AgentTemplate, PhaseTemplate
from .presentation import (
    PRESENTATION_AGENT_IDS,
    PRESENTATION_END,
    PRESENTATION_START,
    PRESENTATION_WORKFLOW,
    presentation_agent_prompt,
)
from .templates import WORKFLOW_TEMPLATES, get_workflow_template

__all__ = [
    "AgentTemplate",
    "PhaseTemplate",
    "PRESENTATION_AGENT_IDS",
    "PRESENTATION_END",
    "PRESENTATION_START",
    "PRESENTATION_WORKFLOW",
    "presentation_agent_prompt",
    "WORKFLOW_TEMPLATES",
    "get_workflow_template",
]
