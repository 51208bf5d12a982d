"""Template building blocks shared by every workflow."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AgentTemplate:
    """One agent slot inside a phase template."""
    agent_id: str
    task_template: str


@dataclass(frozen=True)
class PhaseTemplate:
    """A named stage of a workflow.

    ``depends_on`` names earlier phases; the planner resolves the names to
    phase ids of the built plan.
    """
    name: str
    parallel: bool
    agents: Tuple[AgentTemplate, ...]
    depends_on: Tuple[str, ...] = ()
    priority: int = 1
