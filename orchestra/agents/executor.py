"""Plan execution.

Phases run strictly in order. A parallel phase launches all of its tasks at
once and waits for every one to settle; a sequential phase runs its tasks one
after another so each can read its predecessor's output. A failing task is
recorded and never stops its siblings or later phases.
"""

import asyncio
import time
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from orchestra.agents.prompts import build_agent_prompt
from orchestra.core.catalog import AgentCatalog, AgentDescriptor
from orchestra.core.config import Settings, settings as default_settings
from orchestra.core.errors import AgentExecutionError, AgentNotFoundError, AgentTimeoutError
from orchestra.core.logging import get_logger
from orchestra.core.model_selection import ModelSelectionPolicy
from orchestra.core.schemas import (
    AgentCategory,
    AgentExecution,
    AgentTask,
    ExecutionPlan,
    OrchestrationRequest,
    Phase,
)
from orchestra.llm.base import GenerativeBackend

logger = get_logger(__name__)


class CallKind(str, Enum):
    PLAIN = "plain"
    GROUNDED = "grounded"
    IMAGE = "image"


def call_kind_for(agent: AgentDescriptor, disable_grounding: bool = False) -> CallKind:
    """Backend call an agent needs. Every category must be handled here."""
    if agent.generates_images:
        return CallKind.IMAGE

    category = agent.category
    if category == AgentCategory.ORCHESTRATOR:
        kind = CallKind.PLAIN
    elif category == AgentCategory.RESEARCH:
        kind = CallKind.GROUNDED
    elif category == AgentCategory.CONTENT:
        kind = CallKind.GROUNDED
    elif category == AgentCategory.VISUAL:
        kind = CallKind.GROUNDED
    elif category == AgentCategory.DOMAIN:
        kind = CallKind.GROUNDED
    elif category == AgentCategory.QUALITY:
        kind = CallKind.GROUNDED
    else:
        raise ValueError(f"Unhandled agent category: {category!r}")

    if kind == CallKind.GROUNDED and disable_grounding:
        return CallKind.PLAIN
    return kind


class ResultsMap:
    """Append-only store of task outputs and phase aggregates for one run."""

    def __init__(self):
        self._entries: Dict[str, Any] = {}

    def put(self, key: str, value: Any) -> None:
        if key in self._entries:
            raise KeyError(f"Result already recorded for {key}")
        self._entries[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def select(self, keys) -> Dict[str, Any]:
        """Entries for ``keys`` that have been recorded, in key order."""
        return {key: self._entries[key] for key in keys if key in self._entries}


class AgentExecutor:
    """Runs an ``ExecutionPlan`` against a generative backend."""

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

    async def execute(self, plan: ExecutionPlan, request: OrchestrationRequest) -> List[AgentExecution]:
        """Execute every phase and return the executions in plan order."""
        results = ResultsMap()
        trace: List[AgentExecution] = []

        for phase in plan.phases:
            logger.info(
                "phase_started",
                phase_id=phase.phase_id,
                phase=phase.name,
                parallel=phase.parallel,
                tasks=len(phase.tasks),
            )

            if phase.parallel:
                executions = await asyncio.gather(
                    *(self._run_task(phase, task, request, results) for task in phase.tasks)
                )
                for task, execution in zip(phase.tasks, executions):
                    self._record_output(results, task, execution)
            else:
                executions = []
                for task in phase.tasks:
                    execution = await self._run_task(phase, task, request, results)
                    self._record_output(results, task, execution)
                    executions.append(execution)

            results.put(phase.phase_id, {
                "tasks": [task.task_id for task in phase.tasks],
                "results": [execution.to_dict() for execution in executions],
            })
            trace.extend(executions)

            logger.info(
                "phase_completed",
                phase_id=phase.phase_id,
                phase=phase.name,
                succeeded=sum(1 for e in executions if e.success),
                failed=sum(1 for e in executions if not e.success),
            )

        return trace

    @staticmethod
    def _record_output(results: ResultsMap, task: AgentTask, execution: AgentExecution) -> None:
        if execution.success:
            results.put(task.task_id, execution.output)

    async def _run_task(
        self,
        phase: Phase,
        task: AgentTask,
        request: OrchestrationRequest,
        results: ResultsMap,
    ) -> AgentExecution:
        """Run one task. Never raises; failures become unsuccessful executions."""
        start = time.monotonic()
        agent = self.catalog.lookup(task.agent_id)
        task_input = {
            "task": task.task,
            "context": {
                "original_request": request.task,
                "dependencies": list(task.dependencies),
                "task_context": dict(request.context),
            },
        }

        try:
            if agent is None:
                raise AgentNotFoundError(task.agent_id)

            timeout = self.settings.agent_timeout_seconds
            try:
                output, tokens, metadata = await asyncio.wait_for(
                    self._invoke(agent, task, request, results),
                    timeout=timeout,
                )
            except asyncio.TimeoutError as e:
                raise AgentTimeoutError(agent.id, task.task_id, timeout) from e

        except Exception as e:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.warning(
                "agent_task_failed",
                task_id=task.task_id,
                agent_id=task.agent_id,
                phase=phase.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return AgentExecution(
                execution_id=task.task_id,
                agent_id=task.agent_id,
                agent_name=agent.name if agent else task.agent_id,
                model=task.model,
                phase=phase.name,
                input=task_input,
                output=None,
                success=False,
                error=str(e),
                execution_time_ms=elapsed_ms,
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        cost = self.policy.estimate_cost(task.model, tokens)
        logger.info(
            "agent_task_completed",
            task_id=task.task_id,
            agent_id=agent.id,
            model=task.model,
            phase=phase.name,
            tokens_used=tokens,
            duration_ms=elapsed_ms,
        )
        return AgentExecution(
            execution_id=task.task_id,
            agent_id=agent.id,
            agent_name=agent.name,
            model=task.model,
            phase=phase.name,
            input=task_input,
            output=output,
            success=True,
            tokens_used=tokens,
            execution_time_ms=elapsed_ms,
            cost=cost,
            metadata=metadata,
        )

    async def _invoke(
        self,
        agent: AgentDescriptor,
        task: AgentTask,
        request: OrchestrationRequest,
        results: ResultsMap,
    ) -> Tuple[str, int, Dict[str, Any]]:
        kind = call_kind_for(agent, request.preferences.disable_grounding)
        metadata: Dict[str, Any] = {"call_kind": kind.value}

        if kind == CallKind.IMAGE:
            image = await self.backend.generate_image(
                task.task,
                style=request.context.get("image_style"),
                aspect_ratio=request.context.get("aspect_ratio"),
            )
            if image.error or image.reference is None:
                raise AgentExecutionError(
                    f"Image generation failed: {image.error or 'no image returned'}",
                    agent_id=agent.id,
                    task_id=task.task_id,
                )
            # image payloads are not text, so they are charged at the default estimate
            metadata["image"] = True
            return image.reference, self.settings.default_estimated_tokens, metadata

        dependency_outputs = results.select(task.dependencies)
        prompt = build_agent_prompt(agent, task, request, dependency_outputs or None)
        params = self.policy.parameters(task.model, agent)

        if kind == CallKind.GROUNDED:
            completion = await self.backend.complete_grounded(prompt, task.model, params)
            output = completion.text
            metadata["sources"] = list(completion.sources)
        else:
            output = await self.backend.complete(prompt, task.model, params)

        metadata["tokens_estimated"] = True
        return output, self._approximate_tokens(output), metadata

    def _approximate_tokens(self, text: Optional[str]) -> int:
        if not text:
            return 0
        return len(text) // self.settings.chars_per_token
