"""Pytest configuration and fixtures."""

import asyncio
import json
import os
from typing import Any, Dict, List, Optional

import pytest

# Set test environment before importing app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"
os.environ.pop("ANTHROPIC_API_KEY", None)
os.environ.pop("OPENAI_API_KEY", None)

from orchestra.agents.definitions import default_catalog
from orchestra.core.catalog import AgentCatalog
from orchestra.core.config import Settings
from orchestra.core.model_selection import ModelParameters, ModelSelectionPolicy
from orchestra.core.schemas import (
    AgentExecution,
    DeliverableType,
    OrchestrationRequest,
    Preferences,
)
from orchestra.core.sessions import InMemorySessionStore
from orchestra.llm.base import GroundedCompletion, ImageResult


def analysis_json(deliverable_type: str = "general", **overrides: Any) -> str:
    """A well-formed analysis answer as the analysis agent would send it."""
    payload = {
        "deliverableType": deliverable_type,
        "requiredCapabilities": ["research", "content-writing"],
        "estimatedComplexity": "moderate",
        "suggestedWorkflow": f"{deliverable_type}-workflow",
        "estimatedAgents": 4,
        "requiresImageGeneration": False,
        "requiresCriticalAppraisal": False,
        "metadata": {"specialConsiderations": []},
    }
    payload.update(overrides)
    return json.dumps(payload)


class FakeBackend:
    """Scripted ``GenerativeBackend``.

    Agents are recognised from the "You are <name>," prompt header. Outputs,
    failures and delays are keyed by agent id; the analysis call is answered
    with ``analysis_response``. Every call is recorded in ``calls``.
    """

    def __init__(
        self,
        catalog: AgentCatalog,
        outputs: Optional[Dict[str, str]] = None,
        failures: Optional[Dict[str, Exception]] = None,
        delays: Optional[Dict[str, float]] = None,
        analysis_response: Any = None,
        image: Optional[ImageResult] = None,
    ):
        self.catalog = catalog
        self.outputs = outputs or {}
        self.failures = failures or {}
        self.delays = delays or {}
        self.analysis_response = analysis_response if analysis_response is not None else analysis_json()
        self.image = image or ImageResult(url="https://images.example.com/1.png")
        self.calls: List[Dict[str, Any]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def agent_for(self, prompt: str) -> Optional[str]:
        for agent in self.catalog.all():
            if prompt.startswith(f"You are {agent.name}, "):
                return agent.id
        return None

    def prompts_for(self, agent_id: str) -> List[str]:
        return [c["prompt"] for c in self.calls if c["agent_id"] == agent_id]

    async def _respond(self, kind: str, agent_id: Optional[str], prompt: str, model: Optional[str]) -> str:
        self.calls.append({"kind": kind, "agent_id": agent_id, "prompt": prompt, "model": model})
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(agent_id or "")
            if delay:
                await asyncio.sleep(delay)
            if agent_id in self.failures:
                raise self.failures[agent_id]
            return self.outputs.get(agent_id, f"{agent_id} output")
        finally:
            self.in_flight -= 1

    async def complete(self, prompt: str, model: str, params: ModelParameters) -> str:
        agent_id = self.agent_for(prompt)
        if agent_id is None:
            self.calls.append({"kind": "analysis", "agent_id": None, "prompt": prompt, "model": model})
            if isinstance(self.analysis_response, Exception):
                raise self.analysis_response
            return self.analysis_response
        return await self._respond("plain", agent_id, prompt, model)

    async def complete_grounded(self, prompt: str, model: str, params: ModelParameters) -> GroundedCompletion:
        agent_id = self.agent_for(prompt)
        text = await self._respond("grounded", agent_id, prompt, model)
        return GroundedCompletion(text=text, sources=[{"url": "https://example.com/source", "title": "Source"}])

    async def generate_image(
        self,
        prompt: str,
        style: Optional[str] = None,
        aspect_ratio: Optional[str] = None,
    ) -> ImageResult:
        await self._respond("image", "image-generator", prompt, None)
        return self.image


@pytest.fixture
def catalog() -> AgentCatalog:
    return default_catalog()


@pytest.fixture
def policy() -> ModelSelectionPolicy:
    return ModelSelectionPolicy()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(agent_timeout_seconds=5.0, per_agent_latency_ms=5000)


@pytest.fixture
def backend(catalog) -> FakeBackend:
    return FakeBackend(catalog)


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


def make_request(
    task: str = "Explore servant leadership",
    deliverable_type: Optional[DeliverableType] = None,
    context: Optional[Dict[str, Any]] = None,
    session_id: Optional[str] = None,
    **preferences: Any,
) -> OrchestrationRequest:
    return OrchestrationRequest(
        user_id="user-1",
        task=task,
        deliverable_type=deliverable_type,
        context=context or {},
        preferences=Preferences(**preferences),
        session_id=session_id,
    )


def make_execution(
    agent_id: str,
    output: Optional[str] = "output",
    success: bool = True,
    cost: float = 0.0,
    phase: str = "phase",
    model: str = "model-a",
    agent_name: Optional[str] = None,
) -> AgentExecution:
    return AgentExecution(
        execution_id=f"task-{agent_id}",
        agent_id=agent_id,
        agent_name=agent_name or agent_id.replace("-", " ").title(),
        model=model,
        phase=phase,
        input={"task": "t"},
        output=output if success else None,
        success=success,
        error=None if success else "failed",
        cost=cost,
    )
