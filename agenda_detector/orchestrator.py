"""Analysis orchestrator: runs the pipeline stages in order and reports progress."""

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol

from pydantic import BaseModel

from agenda_detector.agents.inconsistency import InconsistencyAgent
from agenda_detector.agents.linguistic import LinguisticAgent
from agenda_detector.agents.motive import MotiveAgent
from agenda_detector.agents.planner import PlannerAgent, order_plan_steps
from agenda_detector.agents.synthesizer import ReportSynthesizer
from agenda_detector.agents.vector_search import VectorSearchAgent
from agenda_detector.agents.web_search import WebSearchAgent
from agenda_detector.exceptions import AnalysisError
from agenda_detector.schemas.evidence import AnalysisResult, Evidence, PlanStep
from agenda_detector.schemas.subject import ProgressStep, Subject
from agenda_detector.services.llm_client import LLMClient

logger = logging.getLogger(__name__)

STAGE_PLANNING = "Intake & Planning"
STAGE_LINGUISTIC = "Linguistic Analysis"
STAGE_INCONSISTENCY = "Inconsistency Check"
STAGE_MOTIVE = "Motive & Financial Analysis"
STAGE_WEB_SEARCH = "Web Search"
STAGE_VECTOR_SEARCH = "Local Vector Search"
STAGE_SYNTHESIS = "Synthesis & Reporting"


class Pipeline(str, Enum):
    """Selectable pipeline definitions."""

    FIXED = "fixed"  # linguistic, inconsistency, motive, synthesis
    PLANNED = "planned"  # model-generated plan, then synthesis


PIPELINE_STAGES: Dict[Pipeline, List[str]] = {
    Pipeline.FIXED: [STAGE_LINGUISTIC, STAGE_INCONSISTENCY, STAGE_MOTIVE, STAGE_SYNTHESIS],
    Pipeline.PLANNED: [STAGE_PLANNING, STAGE_SYNTHESIS],
}

ERROR_PREFIXES: Dict[Pipeline, str] = {
    Pipeline.FIXED: "Error during local analysis",
    Pipeline.PLANNED: "Error during analysis",
}

TOOL_STAGES: Dict[str, str] = {
    "linguistic_analysis": STAGE_LINGUISTIC,
    "web_search": STAGE_WEB_SEARCH,
    "local_vector_search": STAGE_VECTOR_SEARCH,
}


class ProgressCallback(Protocol):
    def __call__(self, step: str, status: str, details: Optional[Any] = None) -> None: ...


def initial_steps(pipeline: Pipeline) -> List[ProgressStep]:
    """Pending progress list a new report starts with."""
    return [ProgressStep(name=name) for name in PIPELINE_STAGES[Pipeline(pipeline)]]


def _details(value: Any) -> Any:
    """Plain JSON-compatible copy of a stage result for display."""
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, list):
        return [_details(v) for v in value]
    return value


class AnalysisOrchestrator:
    """Runs one analysis as a strictly sequential chain of model calls.

    No stage is retried and no stage runs concurrently with another. The
    first failure stops the run and surfaces as a single AnalysisError.
    """

    def __init__(self, llm_client: LLMClient):
        """Initialize orchestrator and its agents."""
        self.llm = llm_client
        self.planner = PlannerAgent(llm_client)
        self.linguistic = LinguisticAgent(llm_client)
        self.inconsistency = InconsistencyAgent(llm_client)
        self.motive = MotiveAgent(llm_client)
        self.web_search = WebSearchAgent(llm_client)
        self.vector_search = VectorSearchAgent(llm_client)
        self.synthesizer = ReportSynthesizer(llm_client)

        # Tool registry for planned steps
        self.tools: Dict[str, Callable[[str, PlanStep, Evidence], Awaitable[Any]]] = {
            "linguistic_analysis": self._run_linguistic_step,
            "web_search": self._run_web_search_step,
            "local_vector_search": self._run_vector_search_step,
        }

    async def run_analysis(
        self,
        subject: Subject,
        statement: str,
        update_progress: ProgressCallback,
        pipeline: Pipeline = Pipeline.FIXED,
    ) -> AnalysisResult:
        """
        Run every stage of a pipeline for one statement.

        Args:
            subject: Subject whose history is consulted
            statement: Statement to analyze
            update_progress: Called with (step, 'running') before and
                (step, 'completed', details) after each stage
            pipeline: Which pipeline definition to run

        Returns:
            The synthesized report and the collected evidence

        Raises:
            AnalysisError: Wrapping the first stage failure
        """
        pipeline = Pipeline(pipeline)
        evidence = Evidence()
        current_stage: Optional[str] = None

        def report(step: str, status: str, details: Optional[Any] = None) -> None:
            nonlocal current_stage
            current_stage = step if status == "running" else None
            update_progress(step, status, details)

        logger.info(f"Starting {pipeline.value} analysis for {subject.name}")

        try:
            if pipeline is Pipeline.PLANNED:
                await self._run_planned(subject, statement, evidence, report)
            else:
                await self._run_fixed(subject, statement, evidence, report)

            report(STAGE_SYNTHESIS, "running")
            markdown_report = await self.synthesizer.execute(subject.name, statement, evidence)
            report(STAGE_SYNTHESIS, "completed")

        except Exception as e:
            failed_stage = current_stage
            if failed_stage is not None:
                try:
                    update_progress(failed_stage, "error")
                except Exception as callback_error:
                    logger.warning(f"Could not mark {failed_stage!r} as failed: {callback_error}")
            logger.error(f"Analysis failed at stage {failed_stage!r}: {e}", exc_info=True)
            raise AnalysisError(f"{ERROR_PREFIXES[pipeline]}: {e}", stage=failed_stage) from e

        logger.info(f"Analysis for {subject.name} completed")
        return AnalysisResult(markdown_report=markdown_report, evidence=evidence)

    async def _run_fixed(
        self,
        subject: Subject,
        statement: str,
        evidence: Evidence,
        report: ProgressCallback,
    ) -> None:
        """Linguistic analysis, inconsistency check, motive check."""
        report(STAGE_LINGUISTIC, "running")
        evidence.linguistic_analysis = await self.linguistic.execute(statement)
        report(STAGE_LINGUISTIC, "completed", _details(evidence.linguistic_analysis))

        report(STAGE_INCONSISTENCY, "running")
        evidence.inconsistency_checks = await self.inconsistency.execute(subject, statement)
        report(STAGE_INCONSISTENCY, "completed", _details(evidence.inconsistency_checks))

        report(STAGE_MOTIVE, "running")
        evidence.motive_checks = await self.motive.execute(subject, statement)
        report(STAGE_MOTIVE, "completed", _details(evidence.motive_checks))

    async def _run_planned(
        self,
        subject: Subject,
        statement: str,
        evidence: Evidence,
        report: ProgressCallback,
    ) -> None:
        """Plan, then execute each planned step in order."""
        report(STAGE_PLANNING, "running")
        plan = await self.planner.execute(statement)
        plan.steps = order_plan_steps(plan.steps)
        report(STAGE_PLANNING, "completed", _details(plan))

        for step in plan.steps:
            stage = TOOL_STAGES[step.tool]
            report(stage, "running")
            results = await self.tools[step.tool](statement, step, evidence)
            report(stage, "completed", _details(results))

    async def _run_linguistic_step(self, statement: str, step: PlanStep, evidence: Evidence) -> Any:
        # The full statement is analyzed whatever the planned query says
        evidence.linguistic_analysis = await self.linguistic.execute(statement)
        return evidence.linguistic_analysis

    async def _run_web_search_step(self, statement: str, step: PlanStep, evidence: Evidence) -> Any:
        results = await self.web_search.execute(step.query)
        evidence.web_searches.extend(results)
        return results

    async def _run_vector_search_step(self, statement: str, step: PlanStep, evidence: Evidence) -> Any:
        results = await self.vector_search.execute(step.query)
        evidence.vector_searches.extend(results)
        return results
