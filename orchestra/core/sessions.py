"""Orchestration session lifecycle and storage.

A session moves planning -> executing -> completed | failed and never leaves
a terminal state. A session id belongs to exactly one run: creating a session
with a taken id raises SessionExistsError. Other store errors are best-effort;
the orchestrator logs them and carries on, so durability is not transactional
with execution.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from orchestra.core.database import SessionLocal, get_db
from orchestra.core.errors import InvalidSessionTransition, SessionExistsError
from orchestra.core.logging import get_logger
from orchestra.core.models import OrchestrationSessionRecord
from orchestra.core.schemas import (
    AgentExecution,
    CostBreakdown,
    ExecutionPlan,
    OrchestrationRequest,
    OrchestrationResult,
    SessionStatus,
    TaskAnalysis,
    utcnow,
)

logger = get_logger(__name__)


ALLOWED_TRANSITIONS = {
    SessionStatus.PLANNING: {SessionStatus.EXECUTING, SessionStatus.FAILED},
    SessionStatus.EXECUTING: {SessionStatus.COMPLETED, SessionStatus.FAILED},
    SessionStatus.COMPLETED: set(),
    SessionStatus.FAILED: set(),
}


def check_transition(current: SessionStatus, requested: SessionStatus) -> None:
    """Raise InvalidSessionTransition unless ``requested`` may follow ``current``."""
    if requested not in ALLOWED_TRANSITIONS[current]:
        raise InvalidSessionTransition(current.value, requested.value)


@dataclass
class OrchestrationSession:
    """In-memory view of a persisted orchestration run."""
    session_id: str
    request: OrchestrationRequest
    status: SessionStatus = SessionStatus.PLANNING
    analysis: Optional[TaskAnalysis] = None
    plan: Optional[ExecutionPlan] = None
    agent_trace: List[AgentExecution] = field(default_factory=list)
    cost: CostBreakdown = field(default_factory=CostBreakdown)
    result: Optional[OrchestrationResult] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def user_id(self) -> str:
        return self.request.user_id

    def transition(self, status: SessionStatus) -> None:
        check_transition(self.status, status)
        self.status = status
        self.updated_at = utcnow()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "status": self.status.value,
            "request": self.request.to_dict(),
            "analysis": self.analysis.to_dict() if self.analysis else None,
            "plan": self.plan.to_dict() if self.plan else None,
            "agent_trace": [e.to_dict() for e in self.agent_trace],
            "cost": self.cost.to_dict(),
            "result": self.result.to_dict() if self.result else None,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class SessionStore(Protocol):
    """Durable storage for orchestration sessions."""

    async def create(self, session: OrchestrationSession) -> None:
        ...

    async def update(
        self,
        session_id: str,
        status: SessionStatus,
        result: Optional[OrchestrationResult] = None,
        analysis: Optional[TaskAnalysis] = None,
        plan: Optional[ExecutionPlan] = None,
    ) -> None:
        ...

    async def get(self, session_id: str) -> Optional[Dict[str, Any]]:
        ...


class InMemorySessionStore:
    """Process-local session store, used by the CLI and tests."""

    def __init__(self):
        self._sessions: Dict[str, OrchestrationSession] = {}

    async def create(self, session: OrchestrationSession) -> None:
        if session.session_id in self._sessions:
            raise SessionExistsError(session.session_id)
        self._sessions[session.session_id] = session

    async def update(
        self,
        session_id: str,
        status: SessionStatus,
        result: Optional[OrchestrationResult] = None,
        analysis: Optional[TaskAnalysis] = None,
        plan: Optional[ExecutionPlan] = None,
    ) -> None:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found")

        session.transition(status)
        if analysis is not None:
            session.analysis = analysis
        if plan is not None:
            session.plan = plan
        if result is not None:
            session.result = result
            session.agent_trace = list(result.agent_trace)
            session.cost = result.cost

    async def get(self, session_id: str) -> Optional[Dict[str, Any]]:
        session = self._sessions.get(session_id)
        return session.to_dict() if session else None

    def status_of(self, session_id: str) -> Optional[SessionStatus]:
        session = self._sessions.get(session_id)
        return session.status if session else None


class SqlAlchemySessionStore:
    """Session store backed by the ``orchestration_sessions`` table.

    SQLAlchemy calls are synchronous, so each operation runs in a worker
    thread to keep the event loop free.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    async def create(self, session: OrchestrationSession) -> None:
        await asyncio.to_thread(self._create, session)

    async def update(
        self,
        session_id: str,
        status: SessionStatus,
        result: Optional[OrchestrationResult] = None,
        analysis: Optional[TaskAnalysis] = None,
        plan: Optional[ExecutionPlan] = None,
    ) -> None:
        await asyncio.to_thread(self._update, session_id, status, result, analysis, plan)

    async def get(self, session_id: str) -> Optional[Dict[str, Any]]:
        return await asyncio.to_thread(self._get, session_id)

    def _create(self, session: OrchestrationSession) -> None:
        try:
            self._insert(session)
        except IntegrityError as e:
            # lost a race with another insert of the same id
            raise SessionExistsError(session.session_id) from e

    def _insert(self, session: OrchestrationSession) -> None:
        with get_db(self.session_factory) as db:
            if db.get(OrchestrationSessionRecord, session.session_id) is not None:
                raise SessionExistsError(session.session_id)
            db.add(OrchestrationSessionRecord(
                id=session.session_id,
                user_id=session.user_id,
                status=session.status,
                task=session.request.task,
                request=session.request.to_dict(),
                analysis=session.analysis.to_dict() if session.analysis else None,
                plan=session.plan.to_dict() if session.plan else None,
                agent_trace=[],
                cost=session.cost.to_dict(),
                created_at=session.created_at,
                updated_at=session.updated_at,
            ))

    def _update(
        self,
        session_id: str,
        status: SessionStatus,
        result: Optional[OrchestrationResult],
        analysis: Optional[TaskAnalysis],
        plan: Optional[ExecutionPlan],
    ) -> None:
        with get_db(self.session_factory) as db:
            record = db.query(OrchestrationSessionRecord).filter(
                OrchestrationSessionRecord.id == session_id
            ).first()
            if record is None:
                raise KeyError(f"Session {session_id} not found")

            check_transition(record.status, status)
            record.status = status
            record.updated_at = utcnow()
            if analysis is not None:
                record.analysis = analysis.to_dict()
            if plan is not None:
                record.plan = plan.to_dict()
            if result is not None:
                result_dict = result.to_dict()
                record.result = result_dict
                record.agent_trace = result_dict["agent_trace"]
                record.cost = result_dict["cost"]

            logger.debug("session_record_updated", session_id=session_id, status=status.value)

    def _get(self, session_id: str) -> Optional[Dict[str, Any]]:
        with get_db(self.session_factory) as db:
            record = db.query(OrchestrationSessionRecord).filter(
                OrchestrationSessionRecord.id == session_id
            ).first()
            return record.to_dict() if record else None
