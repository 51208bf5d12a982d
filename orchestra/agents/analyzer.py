"""Task analysis: one reasoning call that classifies the request.

The model's JSON answer is untrusted. It is cleaned of incidental
formatting, validated against ``AnalysisPayload`` and replaced by a
conservative default whenever it cannot be used.
"""

import json
from dataclasses import replace
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from orchestra.agents.prompts import build_analysis_prompt
from orchestra.core.catalog import AgentCatalog
from orchestra.core.config import Settings, settings as default_settings
from orchestra.core.errors import AgentNotFoundError, AnalysisDecodeError
from orchestra.core.logging import get_logger
from orchestra.core.model_selection import ModelSelectionPolicy
from orchestra.core.schemas import (
    DeliverableType,
    OrchestrationRequest,
    TaskAnalysis,
    TaskComplexity,
)
from orchestra.llm.base import GenerativeBackend
from orchestra.routing import is_explicit_presentation_request

logger = get_logger(__name__)

FALLBACK_CAPABILITIES = ("research", "content-writing")


class AnalysisPayload(BaseModel):
    """Schema of the analysis agent's JSON answer."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    deliverable_type: DeliverableType = Field(DeliverableType.GENERAL, alias="deliverableType")
    required_capabilities: List[str] = Field(default_factory=list, alias="requiredCapabilities")
    estimated_complexity: TaskComplexity = Field(TaskComplexity.MODERATE, alias="estimatedComplexity")
    suggested_workflow: str = Field("standard", alias="suggestedWorkflow")
    estimated_agents: int = Field(3, ge=1, alias="estimatedAgents")
    requires_image_generation: bool = Field(False, alias="requiresImageGeneration")
    requires_critical_appraisal: bool = Field(False, alias="requiresCriticalAppraisal")
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # null means "use the default", same as an absent key
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_analysis(self) -> TaskAnalysis:
        capabilities = list(dict.fromkeys(self.required_capabilities))
        if self.requires_critical_appraisal and "critical-appraisal" not in capabilities:
            capabilities.append("critical-appraisal")

        return TaskAnalysis(
            deliverable_type=self.deliverable_type,
            required_capabilities=tuple(capabilities),
            estimated_complexity=self.estimated_complexity,
            suggested_workflow=self.suggested_workflow,
            estimated_agents=self.estimated_agents,
            requires_image_generation=self.requires_image_generation,
            metadata=dict(self.metadata),
        )


def strip_formatting(raw: str) -> str:
    """Remove markdown fences and any prose around the JSON object."""
    text = raw.strip()
    if text.startswith("```"):
        text = text[3:]
        if text.lower().startswith("json"):
            text = text[4:]
    if text.endswith("```"):
        text = text[:-3]
    text = text.strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start:end + 1]


def parse_analysis(raw: str) -> TaskAnalysis:
    """Decode and validate an analysis answer, raising AnalysisDecodeError on failure."""
    cleaned = strip_formatting(raw)
    try:
        data = json.loads(cleaned)
    except ValueError as e:
        raise AnalysisDecodeError(f"Analysis is not valid JSON: {e}", raw_response=raw) from e

    if not isinstance(data, dict):
        raise AnalysisDecodeError("Analysis JSON is not an object", raw_response=raw)

    try:
        payload = AnalysisPayload.model_validate(data)
    except ValidationError as e:
        raise AnalysisDecodeError(f"Analysis failed validation: {e}", raw_response=raw) from e

    return payload.to_analysis()


def fallback_analysis(request: OrchestrationRequest) -> TaskAnalysis:
    return TaskAnalysis(
        deliverable_type=request.deliverable_type or DeliverableType.GENERAL,
        required_capabilities=FALLBACK_CAPABILITIES,
        estimated_complexity=TaskComplexity.MODERATE,
        suggested_workflow="standard",
        estimated_agents=3,
        requires_image_generation=False,
        metadata={"fallback": True},
    )


def enforce_presentation_rule(analysis: TaskAnalysis, request: OrchestrationRequest) -> TaskAnalysis:
    """Presentation only when the caller's own text explicitly asked for one."""
    explicit = is_explicit_presentation_request(request.task)

    if explicit and analysis.deliverable_type != DeliverableType.PRESENTATION:
        logger.info("presentation_type_enforced", previous=analysis.deliverable_type.value)
        return replace(analysis, deliverable_type=DeliverableType.PRESENTATION)

    if not explicit and analysis.deliverable_type == DeliverableType.PRESENTATION:
        hint = request.deliverable_type
        downgraded = hint if hint and hint != DeliverableType.PRESENTATION else DeliverableType.GENERAL
        logger.info("presentation_type_downgraded", downgraded_to=downgraded.value)
        return replace(analysis, deliverable_type=downgraded)

    return analysis


class TaskAnalyzer:
    """Classifies a request with a single call to the analysis agent."""

    def __init__(
        self,
        catalog: AgentCatalog,
        policy: ModelSelectionPolicy,
        backend: GenerativeBackend,
        settings: Settings = default_settings,
    ):
        self.catalog = catalog
        self.policy = policy
        self.backend = backend
        self.settings = settings

    async def analyze(self, request: OrchestrationRequest) -> TaskAnalysis:
        agent = self.catalog.lookup(self.settings.analysis_agent_id)
        if agent is None:
            raise AgentNotFoundError(self.settings.analysis_agent_id)

        model = agent.default_model
        params = self.policy.parameters(model, agent, task_type="analysis")
        prompt = build_analysis_prompt(request)

        try:
            raw = await self.backend.complete(prompt, model, params)
        except Exception as e:
            logger.warning("analysis_call_failed", error=str(e), error_type=type(e).__name__)
            analysis = fallback_analysis(request)
        else:
            try:
                analysis = parse_analysis(raw)
            except AnalysisDecodeError as e:
                logger.warning("analysis_decode_failed", error=str(e), raw_length=len(e.raw_response))
                analysis = fallback_analysis(request)

        analysis = enforce_presentation_rule(analysis, request)
        logger.info(
            "task_analyzed",
            deliverable_type=analysis.deliverable_type.value,
            complexity=analysis.estimated_complexity.value,
            capabilities=list(analysis.required_capabilities),
        )
        return analysis
