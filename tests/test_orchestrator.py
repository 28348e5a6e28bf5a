"""Tests for the analysis orchestrator."""

import pytest

from agenda_detector.exceptions import AnalysisError, LLMConnectionError
from agenda_detector.orchestrator import (
    STAGE_INCONSISTENCY,
    STAGE_LINGUISTIC,
    STAGE_MOTIVE,
    STAGE_PLANNING,
    STAGE_SYNTHESIS,
    STAGE_VECTOR_SEARCH,
    STAGE_WEB_SEARCH,
    AnalysisOrchestrator,
    Pipeline,
    initial_steps,
)
from helpers import CONTRADICTION_REPLY, LINGUISTIC_REPLY, MOTIVE_REPLY, REPORT_MARKDOWN

FIXED_STAGES = [STAGE_LINGUISTIC, STAGE_INCONSISTENCY, STAGE_MOTIVE, STAGE_SYNTHESIS]


class ProgressRecorder:
    """Collects progress callbacks in call order."""

    def __init__(self):
        self.events = []

    def __call__(self, step, status, details=None):
        self.events.append((step, status, details))

    def transitions(self):
        return [(step, status) for step, status, _ in self.events]


@pytest.mark.asyncio
async def test_fixed_pipeline_progress_order(fake_llm, subject):
    """Test each stage reports running then completed, in declared order."""
    fake_llm.queue(LINGUISTIC_REPLY, CONTRADICTION_REPLY, MOTIVE_REPLY, REPORT_MARKDOWN)
    progress = ProgressRecorder()

    result = await AnalysisOrchestrator(fake_llm).run_analysis(subject, "Taxes must rise.", progress)

    expected = []
    for stage in FIXED_STAGES:
        expected += [(stage, "running"), (stage, "completed")]
    assert progress.transitions() == expected
    assert result.markdown_report == REPORT_MARKDOWN
    assert result.evidence.linguistic_analysis.framing == LINGUISTIC_REPLY["framing"]
    assert len(result.evidence.inconsistency_checks) == 1
    assert len(result.evidence.motive_checks) == 1


@pytest.mark.asyncio
async def test_fixed_pipeline_completed_details(fake_llm, subject):
    """Test completed callbacks carry the stage result."""
    fake_llm.queue(LINGUISTIC_REPLY, {"contradictions": []}, [], REPORT_MARKDOWN)
    progress = ProgressRecorder()

    await AnalysisOrchestrator(fake_llm).run_analysis(subject, "Taxes must rise.", progress)

    details = {step: d for step, status, d in progress.events if status == "completed"}
    assert details[STAGE_LINGUISTIC]["euphemisms"] == ["revenue enhancement"]
    assert details[STAGE_INCONSISTENCY] == []
    assert details[STAGE_MOTIVE] == []
    assert details[STAGE_SYNTHESIS] is None


@pytest.mark.asyncio
async def test_failure_stops_pipeline(fake_llm, subject):
    """Test a transport failure in stage two stops the run with one error."""
    fake_llm.queue(LINGUISTIC_REPLY, LLMConnectionError("http://llm.test/api/generate"))
    progress = ProgressRecorder()

    with pytest.raises(AnalysisError) as exc_info:
        await AnalysisOrchestrator(fake_llm).run_analysis(subject, "Taxes must rise.", progress)

    assert progress.transitions() == [
        (STAGE_LINGUISTIC, "running"),
        (STAGE_LINGUISTIC, "completed"),
        (STAGE_INCONSISTENCY, "running"),
        (STAGE_INCONSISTENCY, "error"),
    ]
    assert len(fake_llm.calls) == 2
    assert exc_info.value.stage == STAGE_INCONSISTENCY
    assert str(exc_info.value).startswith("Error during local analysis: ")
    assert isinstance(exc_info.value.__cause__, LLMConnectionError)


@pytest.mark.asyncio
async def test_failure_in_synthesis(fake_llm, subject):
    """Test synthesis failures are reported against the synthesis stage."""
    fake_llm.queue(LINGUISTIC_REPLY, CONTRADICTION_REPLY, MOTIVE_REPLY, LLMConnectionError("http://llm.test"))
    progress = ProgressRecorder()

    with pytest.raises(AnalysisError) as exc_info:
        await AnalysisOrchestrator(fake_llm).run_analysis(subject, "Taxes must rise.", progress)

    assert progress.transitions()[-1] == (STAGE_SYNTHESIS, "error")
    assert exc_info.value.stage == STAGE_SYNTHESIS


@pytest.mark.asyncio
async def test_planned_pipeline_runs_sorted_plan(fake_llm, subject):
    """Test the planned pipeline runs linguistic first, then the rest in order."""
    fake_llm.queue(
        {
            "steps": [
                {"tool": "web_search", "query": "tax votes"},
                {"tool": "linguistic_analysis", "query": "Taxes must rise."},
                {"tool": "local_vector_search", "query": "past tax speeches"},
                {"tool": "web_search", "query": "donors"},
            ]
        },
        LINGUISTIC_REPLY,
        {"results": [{"title": "A", "url": "https://a.test", "snippet": "a"}]},
        [{"source": "Speech 2023", "content": "No new taxes."}],
        [{"title": "B", "url": "https://b.test", "snippet": "b"}],
        REPORT_MARKDOWN,
    )
    progress = ProgressRecorder()

    result = await AnalysisOrchestrator(fake_llm).run_analysis(
        subject, "Taxes must rise.", progress, pipeline=Pipeline.PLANNED
    )

    running = [step for step, status in progress.transitions() if status == "running"]
    assert running == [
        STAGE_PLANNING,
        STAGE_LINGUISTIC,
        STAGE_WEB_SEARCH,
        STAGE_VECTOR_SEARCH,
        STAGE_WEB_SEARCH,
        STAGE_SYNTHESIS,
    ]
    assert [r.title for r in result.evidence.web_searches] == ["A", "B"]
    assert result.evidence.vector_searches[0].source == "Speech 2023"
    assert "tax votes" in fake_llm.calls[2]["prompt"]

    plan_details = progress.events[1][2]
    assert [s["tool"] for s in plan_details["steps"]][0] == "linguistic_analysis"


@pytest.mark.asyncio
async def test_planned_pipeline_error_prefix(fake_llm, subject):
    """Test the planned pipeline uses its own error prefix."""
    fake_llm.queue("not json at all")
    progress = ProgressRecorder()

    with pytest.raises(AnalysisError) as exc_info:
        await AnalysisOrchestrator(fake_llm).run_analysis(
            subject, "Taxes must rise.", progress, pipeline="planned"
        )

    assert str(exc_info.value).startswith("Error during analysis: ")
    assert progress.transitions() == [(STAGE_PLANNING, "running"), (STAGE_PLANNING, "error")]


def test_initial_steps():
    """Test the pending step lists of both pipelines."""
    assert [s.name for s in initial_steps(Pipeline.FIXED)] == FIXED_STAGES
    assert [s.name for s in initial_steps(Pipeline.PLANNED)] == [STAGE_PLANNING, STAGE_SYNTHESIS]
    assert all(s.status == "pending" for s in initial_steps(Pipeline.FIXED))


@pytest.mark.asyncio
async def test_failing_progress_callback_still_raises_analysis_error(fake_llm, subject):
    """Test a callback that cannot record the error does not mask the failure."""
    fake_llm.queue(LLMConnectionError("http://llm.test/api/generate"))

    def progress(step, status, details=None):
        if status == "error":
            raise KeyError("ui gone")

    with pytest.raises(AnalysisError) as exc_info:
        await AnalysisOrchestrator(fake_llm).run_analysis(subject, "Taxes must rise.", progress)

    assert exc_info.value.stage == STAGE_LINGUISTIC
    assert isinstance(exc_info.value.__cause__, LLMConnectionError)
