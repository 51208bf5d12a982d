"""Data model shared by the analyzer, planner, executor and synthesizer.

Plans and analyses are frozen once built; execution records are plain
dataclasses filled in by the executor. Every record serializes with
``to_dict()`` for persistence and API output.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Enums for type safety
# =============================================================================

class DeliverableType(str, Enum):
    """Final artifact produced by an orchestration run."""
    PRESENTATION = "presentation"
    ESSAY = "essay"
    ARTICLE = "article"
    SERMON = "sermon"
    COURSE = "course"
    GENERAL = "general"


class TaskComplexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class QualityLevel(str, Enum):
    BASIC = "basic"
    STANDARD = "standard"
    PREMIUM = "premium"


class SpeedPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CostSensitivity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AgentCategory(str, Enum):
    """Agent families in the catalog."""
    ORCHESTRATOR = "orchestrator"
    RESEARCH = "research"
    CONTENT = "content"
    VISUAL = "visual"
    DOMAIN = "domain"
    QUALITY = "quality"


class SessionStatus(str, Enum):
    """Lifecycle of an orchestration session."""
    PLANNING = "planning"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionStatus.COMPLETED, SessionStatus.FAILED)


# =============================================================================
# Request
# =============================================================================

@dataclass
class Preferences:
    """Caller preferences that steer model selection and prompts."""
    quality_level: Optional[QualityLevel] = None
    speed_priority: Optional[SpeedPriority] = None
    cost_sensitivity: Optional[CostSensitivity] = None
    target_audience: Optional[str] = None
    tone: Optional[str] = None
    length: Optional[str] = None  # short, medium, long
    include_images: bool = False
    disable_grounding: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "quality_level": self.quality_level.value if self.quality_level else None,
            "speed_priority": self.speed_priority.value if self.speed_priority else None,
            "cost_sensitivity": self.cost_sensitivity.value if self.cost_sensitivity else None,
            "target_audience": self.target_audience,
            "tone": self.tone,
            "length": self.length,
            "include_images": self.include_images,
            "disable_grounding": self.disable_grounding,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class OrchestrationRequest:
    """A single free-text task submitted for orchestration."""
    user_id: str
    task: str
    deliverable_type: Optional[DeliverableType] = None
    context: Dict[str, Any] = field(default_factory=dict)
    preferences: Preferences = field(default_factory=Preferences)
    session_id: Optional[str] = None

    @property
    def force_agent(self) -> Optional[str]:
        """Agent id the caller wants to invoke directly, if any."""
        return self.context.get("force_agent") or None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "task": self.task,
            "deliverable_type": self.deliverable_type.value if self.deliverable_type else None,
            "context": dict(self.context),
            "preferences": self.preferences.to_dict(),
            "session_id": self.session_id,
        }


# =============================================================================
# Analysis and plan
# =============================================================================

@dataclass(frozen=True)
class TaskAnalysis:
    """Structured reading of a request, produced once per run."""
    deliverable_type: DeliverableType
    required_capabilities: Tuple[str, ...]
    estimated_complexity: TaskComplexity
    suggested_workflow: str
    estimated_agents: int
    requires_image_generation: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deliverable_type": self.deliverable_type.value,
            "required_capabilities": list(self.required_capabilities),
            "estimated_complexity": self.estimated_complexity.value,
            "suggested_workflow": self.suggested_workflow,
            "estimated_agents": self.estimated_agents,
            "requires_image_generation": self.requires_image_generation,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class AgentTask:
    """One agent invocation inside a phase."""
    task_id: str
    agent_id: str
    task: str
    model: str
    dependencies: Tuple[str, ...] = ()
    priority: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task_id": self.task_id,
            "agent_id": self.agent_id,
            "task": self.task,
            "model": self.model,
            "dependencies": list(self.dependencies),
            "priority": self.priority,
        }


@dataclass(frozen=True)
class Phase:
    """An ordered stage of the plan, run concurrently or sequentially."""
    phase_id: str
    name: str
    parallel: bool
    tasks: Tuple[AgentTask, ...]
    depends_on: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase_id": self.phase_id,
            "name": self.name,
            "parallel": self.parallel,
            "tasks": [t.to_dict() for t in self.tasks],
            "depends_on": list(self.depends_on),
        }


@dataclass(frozen=True)
class ExecutionPlan:
    """Phase-ordered plan. Duration and cost are display-only estimates."""
    plan_id: str
    phases: Tuple[Phase, ...]
    total_agents: int
    estimated_duration_ms: int
    estimated_cost: float

    def iter_tasks(self) -> Iterator[Tuple[Phase, AgentTask]]:
        for phase in self.phases:
            for task in phase.tasks:
                yield phase, task

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan_id": self.plan_id,
            "phases": [p.to_dict() for p in self.phases],
            "total_agents": self.total_agents,
            "estimated_duration_ms": self.estimated_duration_ms,
            "estimated_cost": round(self.estimated_cost, 6),
        }


# =============================================================================
# Execution and results
# =============================================================================

@dataclass
class AgentExecution:
    """Outcome of one agent task, successful or not."""
    execution_id: str
    agent_id: str
    agent_name: str
    model: str
    phase: str
    input: Dict[str, Any]
    output: Optional[str]
    success: bool
    error: Optional[str] = None
    tokens_used: int = 0
    execution_time_ms: int = 0
    cost: float = 0.0
    timestamp: datetime = field(default_factory=utcnow)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "execution_id": self.execution_id,
            "agent_id": self.agent_id,
            "agent_name": self.agent_name,
            "model": self.model,
            "phase": self.phase,
            "input": self.input,
            "output": self.output,
            "success": self.success,
            "error": self.error,
            "tokens_used": self.tokens_used,
            "execution_time_ms": self.execution_time_ms,
            "cost": self.cost,
            "timestamp": self.timestamp.isoformat(),
            "metadata": dict(self.metadata),
        }


@dataclass
class CostBreakdown:
    """Cost totals across a run's executions."""
    total: float = 0.0
    by_agent: Dict[str, float] = field(default_factory=dict)
    by_model: Dict[str, float] = field(default_factory=dict)
    by_phase: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "by_agent": dict(self.by_agent),
            "by_model": dict(self.by_model),
            "by_phase": dict(self.by_phase),
        }


@dataclass
class OrchestrationResult:
    """Everything the caller receives from a completed run."""
    success: bool
    session_id: str
    deliverable: Dict[str, Any]
    deliverable_type: DeliverableType
    agent_trace: List[AgentExecution]
    cost: CostBreakdown
    duration_ms: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "session_id": self.session_id,
            "deliverable": self.deliverable,
            "deliverable_type": self.deliverable_type.value,
            "agent_trace": [e.to_dict() for e in self.agent_trace],
            "cost": self.cost.to_dict(),
            "duration_ms": self.duration_ms,
            "metadata": self.metadata,
        }
