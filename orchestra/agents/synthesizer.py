"""Result synthesis: merge agent outputs into one deliverable.

Pure functions of (executions, analysis). Empty or all-failed traces still
produce a well-formed deliverable.
"""

from typing import Any, Dict, List, Optional, Sequence

from orchestra.core.schemas import AgentExecution, DeliverableType, TaskAnalysis

FORMATTER_AGENT_ID = "formatter-agent"
SLIDE_MARKERS = ("## Slide", "### Slide", "[Slide", "[PRESENTATION START]")
SECTION_SEPARATOR = "\n\n---\n\n"

WRITTEN_SLOTS = {
    "title": "title-generator",
    "introduction": "introduction-writer",
    "body": "body-writer",
    "conclusion": "conclusion-writer",
}
SEO_AGENT_ID = "seo-optimizer"


def _successful(executions: Sequence[AgentExecution]) -> List[AgentExecution]:
    return [e for e in executions if e.success and e.output]


def _output_of(executions: Sequence[AgentExecution], agent_id: str) -> Optional[str]:
    """Latest successful output of an agent; later passes refine earlier ones."""
    output = None
    for execution in executions:
        if execution.agent_id == agent_id and execution.success and execution.output:
            output = execution.output
    return output


def synthesize_presentation(executions: Sequence[AgentExecution], analysis: TaskAnalysis) -> Dict[str, Any]:
    successful = _successful(executions)
    metadata: Dict[str, Any] = {
        "agent_count": len(executions),
        "workflow": "multi-agent-presentation",
    }

    content = _output_of(executions, FORMATTER_AGENT_ID)
    if content is not None:
        metadata["source"] = FORMATTER_AGENT_ID
    else:
        slide_output = next(
            (e for e in successful if any(marker in e.output for marker in SLIDE_MARKERS)),
            None,
        )
        if slide_output is not None:
            content = slide_output.output
            metadata["source"] = slide_output.agent_id
        else:
            content = SECTION_SEPARATOR.join(f"### {e.agent_name}\n\n{e.output}" for e in successful)
            metadata["warning"] = "Formatter output unavailable; combined raw agent outputs"

    return {
        "type": DeliverableType.PRESENTATION.value,
        "content": content,
        "metadata": metadata,
    }


def synthesize_written(executions: Sequence[AgentExecution], analysis: TaskAnalysis) -> Dict[str, Any]:
    """Essays, articles and sermons share the same section slots."""
    sections = {slot: _output_of(executions, agent_id) or "" for slot, agent_id in WRITTEN_SLOTS.items()}
    content = f"{sections['introduction']}\n\n{sections['body']}\n\n{sections['conclusion']}"

    metadata: Dict[str, Any] = {
        "agent_count": len(executions),
        "successful_agents": len(_successful(executions)),
    }
    seo = _output_of(executions, SEO_AGENT_ID)
    if seo:
        metadata["seo"] = seo

    return {
        "type": analysis.deliverable_type.value,
        "title": sections["title"],
        "content": content,
        "sections": {
            "introduction": sections["introduction"],
            "body": sections["body"],
            "conclusion": sections["conclusion"],
        },
        "metadata": metadata,
    }


def synthesize_course(executions: Sequence[AgentExecution], analysis: TaskAnalysis) -> Dict[str, Any]:
    return {
        "type": DeliverableType.COURSE.value,
        "modules": [],
        "metadata": {"status": "not_implemented"},
    }


def synthesize_general(executions: Sequence[AgentExecution], analysis: TaskAnalysis) -> Dict[str, Any]:
    return {
        "type": DeliverableType.GENERAL.value,
        "results": [
            {"agent_name": e.agent_name, "output": e.output} for e in _successful(executions)
        ],
        "metadata": {"analysis": analysis.to_dict()},
    }


def synthesize(executions: Sequence[AgentExecution], analysis: TaskAnalysis) -> Dict[str, Any]:
    """Build the deliverable for ``analysis.deliverable_type``."""
    deliverable_type = analysis.deliverable_type

    if deliverable_type == DeliverableType.PRESENTATION:
        return synthesize_presentation(executions, analysis)
    if deliverable_type in (DeliverableType.ESSAY, DeliverableType.ARTICLE, DeliverableType.SERMON):
        return synthesize_written(executions, analysis)
    if deliverable_type == DeliverableType.COURSE:
        return synthesize_course(executions, analysis)
    return synthesize_general(executions, analysis)
