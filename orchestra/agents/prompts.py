"""Prompt construction for the analysis call and agent tasks."""

import json
from typing import Any, Dict, Optional

from orchestra.core.catalog import AgentDescriptor
from orchestra.core.schemas import AgentTask, OrchestrationRequest
from orchestra.workflows.presentation import PRESENTATION_AGENT_IDS, presentation_agent_prompt

CRITICAL_APPRAISER_ID = "critical-appraiser"


ANALYSIS_PROMPT = """You are the Master Orchestrator analyzing a user request to determine the best approach.

User Request: "{task}"
{context_section}
Analyze this request and provide a structured response with:
1. The type of deliverable - IMPORTANT: Only set as "presentation" if the user explicitly asks for a presentation, slides, or slide deck. Otherwise choose essay, article, sermon, course, or general.
2. Required capabilities needed from specialist agents
3. Estimated complexity (simple, moderate, or complex)
4. Suggested workflow approach
5. Whether image generation is needed
6. Whether critical appraisal is needed (for topics requiring balanced evaluation)
7. Any special considerations

CRITICAL: Do NOT set deliverableType to "presentation" unless the user explicitly requests one with phrases like:
- "create a presentation about..."
- "make me slides on..."
- "build a slide deck for..."
- "I need slides about..."
- "generate a presentation on..."
- "I need a PowerPoint presentation on..."
- "turn this into a presentation"
- "create a pitch deck for..."

Simply mentioning a topic (for example "an essay about the presentation of Jesus at the temple") or asking questions should NOT trigger presentation mode.

Respond with JSON only:
{{
  "deliverableType": "presentation | essay | article | sermon | course | general",
  "requiredCapabilities": ["capability1", "capability2"],
  "estimatedComplexity": "simple | moderate | complex",
  "suggestedWorkflow": "workflow-name",
  "estimatedAgents": 3,
  "requiresImageGeneration": false,
  "requiresCriticalAppraisal": false,
  "metadata": {{
    "specialConsiderations": ["consideration1"],
    "estimatedSlides": 10,
    "estimatedWords": 1500,
    "estimatedWeeks": 4
  }}
}}"""


def build_analysis_prompt(request: OrchestrationRequest) -> str:
    context_section = ""
    if request.context:
        context_section = f"\nAdditional Context: {json.dumps(request.context, default=str)}\n"
    return ANALYSIS_PROMPT.format(task=request.task, context_section=context_section)


def _header(agent: AgentDescriptor) -> str:
    lines = [f"You are {agent.name}, a specialist in {agent.description}."]
    if agent.responsibilities:
        lines.append("")
        lines.append("Your responsibilities include:")
        lines.extend(f"- {r}" for r in agent.responsibilities)
    return "\n".join(lines)


def _section(title: str, payload: Optional[Dict[str, Any]]) -> str:
    if not payload:
        return ""
    return f"{title}:\n{json.dumps(payload, indent=2, default=str)}"


def build_agent_prompt(
    agent: AgentDescriptor,
    task: AgentTask,
    request: OrchestrationRequest,
    dependency_outputs: Optional[Dict[str, Any]] = None,
) -> str:
    """Compose the full prompt for one agent task.

    Dependency outputs are serialized under "Previous Work" so a task sees
    what the tasks and phases it depends on produced.
    """
    preferences = request.preferences.to_dict()
    parts = [_header(agent)]

    if agent.id in PRESENTATION_AGENT_IDS:
        parts.append(presentation_agent_prompt(agent.id))
        closing = (
            "Remember: Follow the STRICT presentation formatting rules above. "
            "Every slide must be readable at a glance."
        )
    elif agent.id == CRITICAL_APPRAISER_ID:
        closing = (
            "Please provide a comprehensive critical appraisal that:\n"
            "1. Identifies key strengths and weaknesses\n"
            "2. Evaluates evidence quality and reliability\n"
            "3. Presents multiple perspectives fairly\n"
            "4. Highlights assumptions and potential biases\n"
            "5. Suggests areas for improvement or further investigation\n"
            "6. Provides a balanced conclusion\n\n"
            "Be thorough but fair, analytical but constructive."
        )
    else:
        closing = "Please complete this task according to your specialization."
        if "critical-appraisal" in agent.capabilities:
            closing += " Include critical evaluation and balanced perspectives in your response."
        closing += " Provide clear, actionable output that can be used by other agents or presented to the user."

    parts.append(f"Task: {task.task}")
    parts.append(f"Original Request: {request.task}")

    dependency_title = "Previous Research" if agent.id == CRITICAL_APPRAISER_ID else "Previous Work"
    parts.append(_section(dependency_title, dependency_outputs))
    if agent.id != CRITICAL_APPRAISER_ID:
        parts.append(_section("User Preferences", preferences))

    parts.append(closing)
    return "\n\n".join(p for p in parts if p)
