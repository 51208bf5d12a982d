"""Exception hierarchy for the orchestration engine.

Only ``OrchestrationError`` reaches callers of ``Orchestrator.orchestrate``.
Per-task failures are captured into ``AgentExecution`` records and analysis
decode failures are recovered with a default analysis.
"""

from typing import Optional


class OrchestraError(Exception):
    """Base class for engine errors."""


class AgentNotFoundError(OrchestraError):
    """An agent id is not present in the catalog."""

    def __init__(self, agent_id: str):
        super().__init__(f"Agent not found: {agent_id}")
        self.agent_id = agent_id


class AnalysisDecodeError(OrchestraError):
    """The analysis agent's answer could not be decoded or validated."""

    def __init__(self, message: str, raw_response: str = ""):
        super().__init__(message)
        self.raw_response = raw_response


class AgentExecutionError(OrchestraError):
    """A single agent task failed."""

    def __init__(self, message: str, agent_id: str, task_id: Optional[str] = None):
        super().__init__(message)
        self.agent_id = agent_id
        self.task_id = task_id


class AgentTimeoutError(AgentExecutionError):
    """A single agent task exceeded its time limit."""

    def __init__(self, agent_id: str, task_id: Optional[str], timeout_seconds: float):
        super().__init__(
            f"Agent '{agent_id}' timed out after {timeout_seconds:g}s",
            agent_id=agent_id,
            task_id=task_id,
        )
        self.timeout_seconds = timeout_seconds


class InvalidSessionTransition(OrchestraError):
    """A session status change violates the planning -> executing -> terminal order."""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot transition session from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class SessionExistsError(OrchestraError):
    """A session id is already taken by another run."""

    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} already exists")
        self.session_id = session_id


class OrchestrationError(OrchestraError):
    """Pipeline-level failure surfaced to the caller."""

    def __init__(
        self,
        message: str,
        code: str = "ORCHESTRATION_ERROR",
        session_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.session_id = session_id
