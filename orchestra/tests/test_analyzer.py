"""Tests for task analysis."""

import json

import pytest

from conftest import FakeBackend, analysis_json, make_request
from orchestra.agents.analyzer import (
    FALLBACK_CAPABILITIES,
    TaskAnalyzer,
    enforce_presentation_rule,
    fallback_analysis,
    parse_analysis,
    strip_formatting,
)
from orchestra.agents.definitions import ALL_AGENTS
from orchestra.core.catalog import AgentCatalog
from orchestra.core.errors import AgentNotFoundError, AnalysisDecodeError
from orchestra.core.schemas import DeliverableType, TaskComplexity


class TestStripFormatting:
    """Tests for cleaning the raw analysis answer."""

    def test_strips_json_fence(self):
        raw = '```json\n{"deliverableType": "essay"}\n```'
        assert strip_formatting(raw) == '{"deliverableType": "essay"}'

    def test_strips_bare_fence(self):
        raw = '```\n{"a": 1}\n```'
        assert strip_formatting(raw) == '{"a": 1}'

    def test_strips_leading_prose(self):
        raw = 'Here is my analysis:\n{"a": {"b": 2}}\nHope this helps.'
        assert strip_formatting(raw) == '{"a": {"b": 2}}'

    def test_leaves_text_without_braces(self):
        assert strip_formatting("no json here") == "no json here"


class TestParseAnalysis:
    """Tests for decoding and validating the analysis payload."""

    def test_parses_valid_payload(self):
        analysis = parse_analysis(analysis_json("essay", estimatedComplexity="complex", estimatedAgents=7))

        assert analysis.deliverable_type == DeliverableType.ESSAY
        assert analysis.estimated_complexity == TaskComplexity.COMPLEX
        assert analysis.estimated_agents == 7
        assert analysis.required_capabilities == ("research", "content-writing")
        assert analysis.suggested_workflow == "essay-workflow"

    def test_parses_fenced_payload(self):
        analysis = parse_analysis(f"```json\n{analysis_json('sermon')}\n```")
        assert analysis.deliverable_type == DeliverableType.SERMON

    def test_critical_appraisal_flag_adds_capability(self):
        analysis = parse_analysis(analysis_json(requiresCriticalAppraisal=True))
        assert "critical-appraisal" in analysis.required_capabilities

    def test_critical_appraisal_not_duplicated(self):
        analysis = parse_analysis(analysis_json(
            requiredCapabilities=["critical-appraisal"],
            requiresCriticalAppraisal=True,
        ))
        assert analysis.required_capabilities == ("critical-appraisal",)

    def test_nulls_take_defaults(self):
        analysis = parse_analysis(json.dumps({
            "deliverableType": "article",
            "requiredCapabilities": None,
            "estimatedComplexity": None,
            "metadata": None,
        }))
        assert analysis.deliverable_type == DeliverableType.ARTICLE
        assert analysis.required_capabilities == ()
        assert analysis.estimated_complexity == TaskComplexity.MODERATE
        assert analysis.suggested_workflow == "standard"
        assert analysis.estimated_agents == 3
        assert analysis.metadata == {}

    def test_snake_case_keys_accepted(self):
        analysis = parse_analysis(json.dumps({"deliverable_type": "course"}))
        assert analysis.deliverable_type == DeliverableType.COURSE

    @pytest.mark.parametrize("raw", [
        "not json at all",
        "{broken json",
        "[1, 2, 3]",
        analysis_json(estimatedComplexity="extreme"),
        analysis_json("podcast"),
        analysis_json(estimatedAgents=0),
    ])
    def test_invalid_payloads_raise_decode_error(self, raw):
        with pytest.raises(AnalysisDecodeError):
            parse_analysis(raw)


class TestFallbackAnalysis:
    """Tests for the conservative default analysis."""

    def test_fallback_defaults(self):
        analysis = fallback_analysis(make_request())

        assert analysis.deliverable_type == DeliverableType.GENERAL
        assert analysis.required_capabilities == FALLBACK_CAPABILITIES
        assert analysis.estimated_complexity == TaskComplexity.MODERATE
        assert analysis.suggested_workflow == "standard"
        assert analysis.estimated_agents == 3
        assert analysis.requires_image_generation is False

    def test_fallback_uses_request_hint(self):
        analysis = fallback_analysis(make_request(deliverable_type=DeliverableType.ESSAY))
        assert analysis.deliverable_type == DeliverableType.ESSAY


class TestPresentationRule:
    """Presentation is only chosen when the caller's text asks for one."""

    def test_model_presentation_downgraded_to_general(self):
        analysis = parse_analysis(analysis_json("presentation"))
        result = enforce_presentation_rule(analysis, make_request("Explore servant leadership"))
        assert result.deliverable_type == DeliverableType.GENERAL

    def test_model_presentation_downgraded_to_hint(self):
        analysis = parse_analysis(analysis_json("presentation"))
        request = make_request("Explore servant leadership", deliverable_type=DeliverableType.ESSAY)
        assert enforce_presentation_rule(analysis, request).deliverable_type == DeliverableType.ESSAY

    def test_presentation_hint_alone_is_not_explicit(self):
        analysis = parse_analysis(analysis_json("presentation"))
        request = make_request("Explore servant leadership", deliverable_type=DeliverableType.PRESENTATION)
        assert enforce_presentation_rule(analysis, request).deliverable_type == DeliverableType.GENERAL

    def test_explicit_request_forces_presentation(self):
        analysis = parse_analysis(analysis_json("essay"))
        request = make_request("Create a presentation about servant leadership")
        assert enforce_presentation_rule(analysis, request).deliverable_type == DeliverableType.PRESENTATION

    def test_topic_mention_keeps_model_answer(self):
        analysis = parse_analysis(analysis_json("essay"))
        request = make_request("Create an essay about the presentation of Jesus at the temple")
        assert enforce_presentation_rule(analysis, request) is analysis

    @pytest.mark.parametrize("task", [
        "I need a PowerPoint presentation on AI",
        "Turn this essay into a presentation",
        "Can you create a pitch deck for our startup?",
    ])
    def test_explicit_model_presentation_kept(self, task):
        analysis = parse_analysis(analysis_json("presentation"))
        assert enforce_presentation_rule(analysis, make_request(task)) is analysis

    def test_non_presentation_answer_kept(self):
        analysis = parse_analysis(analysis_json("sermon"))
        result = enforce_presentation_rule(analysis, make_request("A sermon on hope"))
        assert result is analysis


class TestTaskAnalyzer:
    """Tests for the analysis call itself."""

    @pytest.mark.asyncio
    async def test_analyze_uses_orchestrator_agent(self, catalog, policy, test_settings):
        backend = FakeBackend(catalog, analysis_response=analysis_json("essay"))
        analyzer = TaskAnalyzer(catalog, policy, backend, test_settings)

        analysis = await analyzer.analyze(make_request("Write an essay on grace"))

        assert analysis.deliverable_type == DeliverableType.ESSAY
        assert len(backend.calls) == 1
        call = backend.calls[0]
        assert call["kind"] == "analysis"
        assert call["model"] == catalog.lookup("orchestrator").default_model
        assert "Write an essay on grace" in call["prompt"]

    @pytest.mark.asyncio
    async def test_garbage_answer_falls_back(self, catalog, policy, test_settings):
        backend = FakeBackend(catalog, analysis_response="I think this is an essay.")
        analyzer = TaskAnalyzer(catalog, policy, backend, test_settings)

        analysis = await analyzer.analyze(make_request(deliverable_type=DeliverableType.SERMON))

        assert analysis.deliverable_type == DeliverableType.SERMON
        assert analysis.required_capabilities == FALLBACK_CAPABILITIES
        assert analysis.metadata.get("fallback") is True

    @pytest.mark.asyncio
    async def test_backend_error_falls_back(self, catalog, policy, test_settings):
        backend = FakeBackend(catalog, analysis_response=RuntimeError("provider down"))
        analyzer = TaskAnalyzer(catalog, policy, backend, test_settings)

        analysis = await analyzer.analyze(make_request())

        assert analysis.deliverable_type == DeliverableType.GENERAL
        assert analysis.estimated_agents == 3

    @pytest.mark.asyncio
    async def test_fallback_still_honours_explicit_presentation(self, catalog, policy, test_settings):
        backend = FakeBackend(catalog, analysis_response="garbage")
        analyzer = TaskAnalyzer(catalog, policy, backend, test_settings)

        analysis = await analyzer.analyze(make_request("Create a presentation about servant leadership"))

        assert analysis.deliverable_type == DeliverableType.PRESENTATION

    @pytest.mark.asyncio
    async def test_topic_mention_not_forced_to_presentation(self, catalog, policy, test_settings):
        backend = FakeBackend(catalog, analysis_response=analysis_json("essay"))
        analyzer = TaskAnalyzer(catalog, policy, backend, test_settings)

        analysis = await analyzer.analyze(
            make_request("Create an essay about the presentation of Jesus at the temple")
        )

        assert analysis.deliverable_type == DeliverableType.ESSAY

    @pytest.mark.asyncio
    async def test_missing_analysis_agent_raises(self, policy, test_settings):
        catalog = AgentCatalog([a for a in ALL_AGENTS if a.id != "orchestrator"])
        analyzer = TaskAnalyzer(catalog, policy, FakeBackend(catalog), test_settings)

        with pytest.raises(AgentNotFoundError):
            await analyzer.analyze(make_request())
