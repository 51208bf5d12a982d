"""End-to-end tests for the orchestrator."""

import pytest

from conftest import FakeBackend, analysis_json, make_request
from orchestra.agents.orchestrator import Orchestrator, create_orchestrator
from orchestra.core.errors import OrchestrationError
from orchestra.core.schemas import DeliverableType, SessionStatus
from orchestra.workflows import PRESENTATION_WORKFLOW


DECK = (
    "[PRESENTATION START]\n"
    "## Slide 1: Servant Leadership\n"
    "- Lead by serving\n"
    "[PRESENTATION END]"
)


class FailingStore:
    """A session store whose every call fails."""

    async def create(self, session):
        raise ConnectionError("database unavailable")

    async def update(self, session_id, status, result=None, analysis=None, plan=None):
        raise ConnectionError("database unavailable")

    async def get(self, session_id):
        raise ConnectionError("database unavailable")


def make_orchestrator(catalog, policy, backend, store, test_settings) -> Orchestrator:
    return Orchestrator(catalog, policy, backend, store, settings=test_settings)


class TestOrchestrate:
    """Tests for the full pipeline."""

    @pytest.mark.asyncio
    async def test_presentation_request(self, catalog, policy, store, test_settings):
        # the analysis answer says "essay"; the explicit request wins
        backend = FakeBackend(
            catalog,
            outputs={"formatter-agent": DECK},
            analysis_response=analysis_json("essay"),
        )
        orchestrator = make_orchestrator(catalog, policy, backend, store, test_settings)

        result = await orchestrator.orchestrate(
            make_request("Create a presentation about servant leadership", session_id="s1")
        )

        assert result.success is True
        assert result.session_id == "s1"
        assert result.deliverable_type == DeliverableType.PRESENTATION
        assert result.deliverable["content"] == DECK
        assert len(result.agent_trace) == sum(len(p.agents) for p in PRESENTATION_WORKFLOW)
        assert all(e.success for e in result.agent_trace)
        assert result.cost.total > 0
        assert result.cost.total == sum(e.cost for e in result.agent_trace)
        assert result.duration_ms >= 0
        assert store.status_of("s1") == SessionStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_metadata_carries_analysis_and_plan(self, catalog, policy, store, test_settings):
        backend = FakeBackend(catalog, analysis_response=analysis_json("essay"))
        orchestrator = make_orchestrator(catalog, policy, backend, store, test_settings)

        result = await orchestrator.orchestrate(make_request("Write an essay on grace"))

        assert result.metadata["analysis"]["deliverable_type"] == "essay"
        plan = result.metadata["plan"]
        assert [p["name"] for p in plan["phases"]] == ["research", "planning", "writing", "enhancement"]
        assert plan["total_agents"] == len(result.agent_trace)

    @pytest.mark.asyncio
    async def test_trace_in_plan_order(self, catalog, policy, store, test_settings):
        backend = FakeBackend(catalog, analysis_response=analysis_json("essay"))
        orchestrator = make_orchestrator(catalog, policy, backend, store, test_settings)

        result = await orchestrator.orchestrate(make_request("Write an essay on grace"))

        planned = [
            task["task_id"]
            for phase in result.metadata["plan"]["phases"]
            for task in phase["tasks"]
        ]
        assert [e.execution_id for e in result.agent_trace] == planned

    @pytest.mark.asyncio
    async def test_generated_session_id(self, catalog, policy, store, backend, test_settings):
        orchestrator = make_orchestrator(catalog, policy, backend, store, test_settings)

        first = await orchestrator.orchestrate(make_request())
        second = await orchestrator.orchestrate(make_request())

        assert first.session_id != second.session_id
        assert (await store.get(first.session_id))["status"] == "completed"

    @pytest.mark.asyncio
    async def test_forced_agent(self, catalog, policy, store, test_settings):
        backend = FakeBackend(catalog, outputs={"editor-agent": "Polished text"})
        orchestrator = make_orchestrator(catalog, policy, backend, store, test_settings)

        result = await orchestrator.orchestrate(
            make_request("Tighten this paragraph", context={"force_agent": "editor-agent"})
        )

        assert [e.agent_id for e in result.agent_trace] == ["editor-agent"]
        assert result.deliverable["results"] == [
            {"agent_name": catalog.lookup("editor-agent").name, "output": "Polished text"}
        ]

    @pytest.mark.asyncio
    async def test_agent_failures_do_not_fail_the_run(self, catalog, policy, store, test_settings):
        backend = FakeBackend(
            catalog,
            failures={"critical-appraiser": RuntimeError("boom")},
            analysis_response=analysis_json("essay"),
        )
        orchestrator = make_orchestrator(catalog, policy, backend, store, test_settings)

        result = await orchestrator.orchestrate(make_request("Write an essay on grace", session_id="s1"))

        failed = [e for e in result.agent_trace if not e.success]
        assert [e.agent_id for e in failed] == ["critical-appraiser"]
        assert result.cost.by_agent["critical-appraiser"] == 0.0
        assert store.status_of("s1") == SessionStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_unknown_forced_agent_fails_session(self, catalog, policy, store, backend, test_settings):
        orchestrator = make_orchestrator(catalog, policy, backend, store, test_settings)

        with pytest.raises(OrchestrationError) as exc_info:
            await orchestrator.orchestrate(
                make_request(context={"force_agent": "ghost-agent"}, session_id="s1")
            )

        assert exc_info.value.session_id == "s1"
        assert exc_info.value.code == "ORCHESTRATION_ERROR"
        assert "ghost-agent" in str(exc_info.value)
        assert store.status_of("s1") == SessionStatus.FAILED

    @pytest.mark.asyncio
    async def test_reused_session_id_fails_without_touching_record(self, catalog, policy, store, test_settings):
        backend = FakeBackend(catalog, outputs={"research-agent": "FIRST"})
        orchestrator = make_orchestrator(catalog, policy, backend, store, test_settings)
        await orchestrator.orchestrate(make_request("Summarise grace", session_id="s1"))
        calls_after_first = len(backend.calls)

        with pytest.raises(OrchestrationError) as exc_info:
            await orchestrator.orchestrate(make_request("Summarise hope", session_id="s1"))

        assert exc_info.value.code == "SESSION_EXISTS"
        assert exc_info.value.session_id == "s1"
        assert len(backend.calls) == calls_after_first
        record = await store.get("s1")
        assert record["status"] == "completed"
        assert record["request"]["task"] == "Summarise grace"
        assert record["agent_trace"][0]["output"] == "FIRST"

    @pytest.mark.asyncio
    async def test_store_failures_are_not_fatal(self, catalog, policy, backend, test_settings):
        orchestrator = make_orchestrator(catalog, policy, backend, FailingStore(), test_settings)

        result = await orchestrator.orchestrate(make_request())

        assert result.success is True

    @pytest.mark.asyncio
    async def test_store_failures_do_not_mask_run_failure(self, catalog, policy, backend, test_settings):
        orchestrator = make_orchestrator(catalog, policy, backend, FailingStore(), test_settings)

        with pytest.raises(OrchestrationError):
            await orchestrator.orchestrate(make_request(context={"force_agent": "ghost-agent"}))


class TestPreview:
    """Dry runs analyze and plan only."""

    @pytest.mark.asyncio
    async def test_preview_runs_no_agents(self, catalog, policy, store, test_settings):
        backend = FakeBackend(catalog, analysis_response=analysis_json("sermon"))
        orchestrator = make_orchestrator(catalog, policy, backend, store, test_settings)

        analysis, plan = await orchestrator.preview(make_request("A sermon on hope", session_id="s1"))

        assert analysis.deliverable_type == DeliverableType.SERMON
        assert plan.total_agents > 0
        assert [c["kind"] for c in backend.calls] == ["analysis"]
        assert await store.get("s1") is None


class TestCreateOrchestrator:
    """Tests for default wiring."""

    def test_uses_given_backend_and_store(self, backend, store, test_settings):
        orchestrator = create_orchestrator(backend=backend, session_store=store, settings=test_settings)

        assert orchestrator.session_store is store
        assert orchestrator.executor.backend is backend
