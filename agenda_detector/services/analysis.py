"""Glue between the orchestrator and the session store."""

import logging
from typing import Optional

from agenda_detector.exceptions import AnalysisError, ReportNotFound, SubjectNotFound
from agenda_detector.orchestrator import AnalysisOrchestrator, Pipeline
from agenda_detector.schemas.subject import FinalReport
from agenda_detector.services.session_store import SessionStore

logger = logging.getLogger(__name__)


async def run_report(
    store: SessionStore,
    orchestrator: AnalysisOrchestrator,
    subject_id: str,
    report_id: str,
    pipeline: Pipeline = Pipeline.FIXED,
) -> Optional[FinalReport]:
    """
    Run the analysis for a report created with SessionStore.create_report.

    Runs on one subject are serialized so their progress updates never
    interleave. A failed analysis is recorded on the report, not raised.

    Args:
        store: Session store holding the report
        orchestrator: Orchestrator to run
        subject_id: Owning subject
        report_id: Report to fill in
        pipeline: Pipeline definition to run

    Returns:
        The updated report, or None if the subject or report was deleted
        while the analysis ran
    """

    def update_progress(step, status, details=None):
        store.update_progress(subject_id, report_id, step, status, details)

    try:
        async with store.report_lock(subject_id):
            # Documents added while the run is in flight belong to the next run
            subject = store.get_subject(subject_id).model_copy(deep=True)
            report = store.get_report(subject_id, report_id)

            try:
                result = await orchestrator.run_analysis(
                    subject,
                    report.original_statement,
                    update_progress,
                    pipeline=pipeline,
                )
            except AnalysisError as e:
                logger.error(f"Report {report_id} failed: {e}")
                return store.fail_report(subject_id, report_id, str(e))

            logger.info(f"Report {report_id} completed")
            return store.complete_report(subject_id, report_id, result)

    except (SubjectNotFound, ReportNotFound):
        logger.warning(f"Report {report_id} was discarded before its analysis finished")
        return None
