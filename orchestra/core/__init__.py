"""Core module for the orchestration engine."""

from .config import Settings, settings
from .database import get_db, init_db
from .errors import (
    AgentExecutionError,
    AgentNotFoundError,
    AgentTimeoutError,
    AnalysisDecodeError,
    InvalidSessionTransition,
    OrchestraError,
    OrchestrationError,
    SessionExistsError,
)
from .schemas import (
    AgentCategory,
    AgentExecution,
    AgentTask,
    CostBreakdown,
    CostSensitivity,
    DeliverableType,
    ExecutionPlan,
    OrchestrationRequest,
    OrchestrationResult,
    Phase,
    Preferences,
    QualityLevel,
    SessionStatus,
    SpeedPriority,
    TaskAnalysis,
    TaskComplexity,
)

__all__ = [
    "Settings",
    "settings",
    "get_db",
    "init_db",
    "AgentExecutionError",
    "AgentNotFoundError",
    "AgentTimeoutError",
    "AnalysisDecodeError",
    "InvalidSessionTransition",
    "OrchestraError",
    "OrchestrationError",
    "SessionExistsError",
    "AgentCategory",
    "AgentExecution",
    "AgentTask",
    "CostBreakdown",
    "CostSensitivity",
    "DeliverableType",
    "ExecutionPlan",
    "OrchestrationRequest",
    "OrchestrationResult",
    "Phase",
    "Preferences",
    "QualityLevel",
    "SessionStatus",
    "SpeedPriority",
    "TaskAnalysis",
    "TaskComplexity",
]
