"""Database models for orchestration sessions."""

from sqlalchemy import Column, String, Text, DateTime, Enum, JSON, Index
from sqlalchemy.orm import declarative_base

from orchestra.core.schemas import SessionStatus, utcnow

Base = declarative_base()


class OrchestrationSessionRecord(Base):
    """Durable record of one orchestration run, keyed by session id.

    Written only by the run that owns the session id.
    """

    __tablename__ = "orchestration_sessions"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(255), nullable=False, index=True)

    status = Column(Enum(SessionStatus), default=SessionStatus.PLANNING, nullable=False)

    task = Column(Text, nullable=False)
    request = Column(JSON, nullable=False)
    analysis = Column(JSON, nullable=True)
    plan = Column(JSON, nullable=True)

    agent_trace = Column(JSON, default=list)
    cost = Column(JSON, default=dict)
    result = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_orchestration_sessions_user_status", "user_id", "status"),
    )

    def to_dict(self) -> dict:
        return {
            "session_id": self.id,
            "user_id": self.user_id,
            "status": self.status.value,
            "request": self.request,
            "analysis": self.analysis,
            "plan": self.plan,
            "agent_trace": self.agent_trace or [],
            "cost": self.cost or {},
            "result": self.result,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
