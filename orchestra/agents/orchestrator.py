"""Orchestrator: the public entry point of the engine.

Runs analyze -> plan -> execute -> synthesize -> account for one request and
keeps the session record in step:

    planning --(analysis + plan)--> executing --(result)--> completed
        \\                              \\
         +-----------> failed <----------+

Only ``OrchestrationError`` escapes ``orchestrate``. A session id already in
the store fails the run with code ``SESSION_EXISTS``; any other session store
error is logged and ignored so a storage outage never fails a run.
"""

import time
import uuid
from typing import Dict, List, Optional, Tuple

from orchestra.agents.analyzer import TaskAnalyzer
from orchestra.agents.executor import AgentExecutor
from orchestra.agents.planner import ExecutionPlanner
from orchestra.agents.synthesizer import synthesize
from orchestra.core.catalog import AgentCatalog
from orchestra.core.config import Settings, settings as default_settings
from orchestra.core.cost import calculate_costs
from orchestra.core.errors import OrchestrationError, SessionExistsError
from orchestra.core.logging import get_logger, log_execution, session_id_var, user_id_var
from orchestra.core.model_selection import ModelSelectionPolicy
from orchestra.core.schemas import (
    DeliverableType,
    ExecutionPlan,
    OrchestrationRequest,
    OrchestrationResult,
    SessionStatus,
    TaskAnalysis,
)
from orchestra.core.sessions import OrchestrationSession, SessionStore
from orchestra.llm.base import GenerativeBackend
from orchestra.workflows.base import PhaseTemplate

logger = get_logger(__name__)


class Orchestrator:
    """Coordinates specialist agents to produce one deliverable."""

    def __init__(
        self,
        catalog: AgentCatalog,
        policy: ModelSelectionPolicy,
        backend: GenerativeBackend,
        session_store: SessionStore,
        templates: Optional[Dict[DeliverableType, List[PhaseTemplate]]] = None,
        settings: Settings = default_settings,
    ):
        self.session_store = session_store
        self.analyzer = TaskAnalyzer(catalog, policy, backend, settings)
        self.planner = ExecutionPlanner(catalog, policy, templates, settings)
        self.executor = AgentExecutor(catalog, policy, backend, settings)

    async def preview(self, request: OrchestrationRequest) -> Tuple[TaskAnalysis, ExecutionPlan]:
        """Analyze and plan without executing anything or touching the session store."""
        analysis = await self.analyzer.analyze(request)
        return analysis, self.planner.plan(request, analysis)

    @log_execution
    async def orchestrate(self, request: OrchestrationRequest) -> OrchestrationResult:
        session_id = request.session_id or str(uuid.uuid4())
        session_token = session_id_var.set(session_id)
        user_token = user_id_var.set(request.user_id)
        start = time.monotonic()

        try:
            try:
                await self._store("create", self.session_store.create(
                    OrchestrationSession(session_id=session_id, request=request)
                ))
            except SessionExistsError as e:
                # the record belongs to another run; never touch it
                logger.warning("session_id_taken")
                raise OrchestrationError(str(e), code="SESSION_EXISTS", session_id=session_id) from e

            try:
                result = await self._run(session_id, request, start)
            except Exception as e:
                logger.error("orchestration_failed", error=str(e), error_type=type(e).__name__)
                await self._store("update", self.session_store.update(session_id, SessionStatus.FAILED))
                raise OrchestrationError(
                    f"Orchestration failed: {e}",
                    code="ORCHESTRATION_ERROR",
                    session_id=session_id,
                ) from e

            await self._store("update", self.session_store.update(
                session_id, SessionStatus.COMPLETED, result=result
            ))
            logger.info(
                "orchestration_completed",
                deliverable_type=result.deliverable_type.value,
                agent_count=len(result.agent_trace),
                duration_ms=result.duration_ms,
                cost=round(result.cost.total, 6),
            )
            return result
        finally:
            user_id_var.reset(user_token)
            session_id_var.reset(session_token)

    async def _run(self, session_id: str, request: OrchestrationRequest, start: float) -> OrchestrationResult:
        analysis = await self.analyzer.analyze(request)
        plan = self.planner.plan(request, analysis)

        await self._store("update", self.session_store.update(
            session_id, SessionStatus.EXECUTING, analysis=analysis, plan=plan
        ))

        executions = await self.executor.execute(plan, request)
        deliverable = synthesize(executions, analysis)
        cost = calculate_costs(executions)

        return OrchestrationResult(
            success=True,
            session_id=session_id,
            deliverable=deliverable,
            deliverable_type=analysis.deliverable_type,
            agent_trace=executions,
            cost=cost,
            duration_ms=int((time.monotonic() - start) * 1000),
            metadata={"analysis": analysis.to_dict(), "plan": plan.to_dict()},
        )

    async def _store(self, operation: str, call) -> None:
        try:
            await call
        except SessionExistsError:
            raise
        except Exception as e:
            logger.warning(
                "session_store_failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )


def create_orchestrator(
    backend: Optional[GenerativeBackend] = None,
    session_store: Optional[SessionStore] = None,
    settings: Settings = default_settings,
) -> Orchestrator:
    """Orchestrator wired to the built-in catalog, policy and templates.

    Defaults to the Anthropic backend and the SQL session store.
    """
    from orchestra.agents.definitions import default_catalog
    from orchestra.core.sessions import SqlAlchemySessionStore
    from orchestra.llm.anthropic_backend import AnthropicBackend

    return Orchestrator(
        catalog=default_catalog(),
        policy=ModelSelectionPolicy(default_estimated_tokens=settings.default_estimated_tokens),
        backend=backend or AnthropicBackend(),
        session_store=session_store or SqlAlchemySessionStore(),
        settings=settings,
    )
