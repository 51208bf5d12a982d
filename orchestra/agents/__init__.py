"""Specialist agents and the pipeline stages that drive them."""

from .analyzer import TaskAnalyzer
from .definitions import ALL_AGENTS, default_catalog
from .executor import AgentExecutor
from .orchestrator import Orchestrator, create_orchestrator
from .planner import ExecutionPlanner
from .synthesizer import synthesize

__all__ = [
    "ALL_AGENTS",
    "AgentExecutor",
    "ExecutionPlanner",
    "Orchestrator",
    "TaskAnalyzer",
    "create_orchestrator",
    "default_catalog",
    "synthesize",
]
