"""Model selection and cost estimation.

Provides:
- Model choice from task complexity, quality, speed and cost preferences
- Heuristic complexity and quality detection from task text
- Per-model generation parameters with agent overrides
- Cost estimates from per-model output pricing
"""

from dataclasses import dataclass
from typing import Dict, Optional

from orchestra.core.catalog import AgentDescriptor
from orchestra.core.schemas import (
    AgentCategory,
    CostSensitivity,
    QualityLevel,
    SpeedPriority,
    TaskComplexity,
)


# =============================================================================
# Model Tiers
# =============================================================================

PREMIUM_MODEL = "claude-opus-4-20250514"
BALANCED_MODEL = "claude-sonnet-4-20250514"
LITE_MODEL = "claude-3-5-haiku-20241022"
IMAGE_MODEL = "gpt-image-1"

# Pricing in USD per million tokens
MODEL_PRICING = {
    PREMIUM_MODEL: {"input": 15.00, "output": 75.00},
    BALANCED_MODEL: {"input": 3.00, "output": 15.00},
    LITE_MODEL: {"input": 0.80, "output": 4.00},
    IMAGE_MODEL: {"input": 5.00, "output": 40.00},
}

MODEL_PARAMETERS = {
    PREMIUM_MODEL: {"max_output_tokens": 8192, "temperature": 0.4},
    BALANCED_MODEL: {"max_output_tokens": 4096, "temperature": 0.6},
    LITE_MODEL: {"max_output_tokens": 2048, "temperature": 0.3},
    IMAGE_MODEL: {"max_output_tokens": 4096, "temperature": 0.7},
}

COMPLEX_INDICATORS = [
    "analyze deeply",
    "theological",
    "comprehensive",
    "detailed analysis",
    "complex",
    "nuanced",
    "in-depth",
    "scholarly",
    "academic",
    "research extensively",
]

SIMPLE_INDICATORS = [
    "format",
    "title",
    "headline",
    "check",
    "verify",
    "simple",
    "quick",
    "brief",
    "short",
    "basic",
]

PREMIUM_INDICATORS = ["professional", "publication", "formal", "academic", "scholarly"]
BASIC_INDICATORS = ["draft", "quick", "rough", "initial", "basic"]


@dataclass(frozen=True)
class ModelSelectionCriteria:
    """Inputs to model selection for one task."""
    task_complexity: TaskComplexity
    quality_requirement: QualityLevel
    speed_priority: SpeedPriority = SpeedPriority.MEDIUM
    cost_sensitivity: CostSensitivity = CostSensitivity.MEDIUM
    needs_image_generation: bool = False


@dataclass(frozen=True)
class ModelParameters:
    """Generation parameters passed to the backend."""
    max_output_tokens: int
    temperature: float


class ModelSelectionPolicy:
    """Chooses a model per task and estimates what it will cost."""

    def __init__(
        self,
        pricing: Optional[Dict[str, Dict[str, float]]] = None,
        default_estimated_tokens: int = 1000,
    ):
        self.pricing = pricing or MODEL_PRICING
        self.default_estimated_tokens = default_estimated_tokens

    def select_model(self, criteria: ModelSelectionCriteria) -> str:
        # Image generation overrides every other criterion
        if criteria.needs_image_generation:
            return IMAGE_MODEL

        if (
            criteria.task_complexity == TaskComplexity.COMPLEX
            or criteria.quality_requirement == QualityLevel.PREMIUM
        ):
            return PREMIUM_MODEL

        if criteria.task_complexity == TaskComplexity.SIMPLE and (
            criteria.speed_priority == SpeedPriority.HIGH
            or criteria.cost_sensitivity == CostSensitivity.HIGH
        ):
            return LITE_MODEL

        if (
            criteria.quality_requirement == QualityLevel.BASIC
            and criteria.cost_sensitivity != CostSensitivity.LOW
        ):
            return LITE_MODEL

        return BALANCED_MODEL

    def estimate_cost(self, model: str, tokens: Optional[int] = None) -> float:
        """Estimated USD cost of ``tokens`` output tokens on ``model``."""
        if tokens is None:
            tokens = self.default_estimated_tokens
        pricing = self.pricing.get(model, self.pricing.get(BALANCED_MODEL, MODEL_PRICING[BALANCED_MODEL]))
        return round((tokens / 1_000_000) * pricing["output"], 6)

    def estimate_complexity(self, text: str, agent: Optional[AgentDescriptor] = None) -> TaskComplexity:
        """Heuristic complexity of ``text``, with the agent's baseline taking precedence."""
        if agent is not None:
            if agent.category == AgentCategory.DOMAIN and agent.default_model == PREMIUM_MODEL:
                return TaskComplexity.COMPLEX
            if agent.category == AgentCategory.QUALITY and agent.default_model == LITE_MODEL:
                return TaskComplexity.SIMPLE

        text_lower = text.lower()
        complex_count = sum(1 for indicator in COMPLEX_INDICATORS if indicator in text_lower)
        simple_count = sum(1 for indicator in SIMPLE_INDICATORS if indicator in text_lower)

        if complex_count > simple_count:
            return TaskComplexity.COMPLEX
        if simple_count > complex_count:
            return TaskComplexity.SIMPLE
        return TaskComplexity.MODERATE

    def resolve_quality(self, text: str, hint: Optional[QualityLevel] = None) -> QualityLevel:
        """Caller's quality preference, else a guess from the task text."""
        if hint is not None:
            return hint

        text_lower = text.lower()
        if any(indicator in text_lower for indicator in PREMIUM_INDICATORS):
            return QualityLevel.PREMIUM
        if any(indicator in text_lower for indicator in BASIC_INDICATORS):
            return QualityLevel.BASIC
        return QualityLevel.STANDARD

    def parameters(
        self,
        model: str,
        agent: Optional[AgentDescriptor] = None,
        task_type: Optional[str] = None,
    ) -> ModelParameters:
        params = dict(MODEL_PARAMETERS.get(model, MODEL_PARAMETERS[BALANCED_MODEL]))

        if agent is not None:
            if agent.temperature is not None:
                params["temperature"] = agent.temperature
            if agent.max_output_tokens is not None:
                params["max_output_tokens"] = agent.max_output_tokens

        if task_type in ("creative", "brainstorming"):
            params["temperature"] = min(params["temperature"] + 0.2, 1.0)
        elif task_type in ("factual", "analysis"):
            params["temperature"] = max(params["temperature"] - 0.2, 0.1)

        return ModelParameters(**params)
