"""Analysis report routes."""

import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from agenda_detector.config import settings
from agenda_detector.dependencies import get_orchestrator, get_store
from agenda_detector.exceptions import ReportNotFound, SubjectNotFound
from agenda_detector.orchestrator import AnalysisOrchestrator, Pipeline
from agenda_detector.schemas.api import ReportStartResponse, StatementSubmit
from agenda_detector.schemas.subject import FinalReport
from agenda_detector.services.analysis import run_report
from agenda_detector.services.session_store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subjects/{subject_id}/reports", tags=["reports"])


@router.post("", response_model=ReportStartResponse, status_code=202)
async def start_report(
    subject_id: str,
    data: StatementSubmit,
    background_tasks: BackgroundTasks,
    store: SessionStore = Depends(get_store),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """Create a report and run its analysis in the background."""
    pipeline = Pipeline(data.pipeline or settings.DEFAULT_PIPELINE)

    try:
        report = store.create_report(subject_id, data.statement, pipeline)
    except SubjectNotFound:
        raise HTTPException(status_code=404, detail="Subject not found")

    background_tasks.add_task(run_report, store, orchestrator, subject_id, report.id, pipeline)

    logger.info(f"Scheduled {pipeline.value} analysis for report {report.id}")

    return ReportStartResponse(
        subject_id=subject_id,
        report=report.model_copy(deep=True),
        message="Analysis started",
    )


@router.get("", response_model=List[FinalReport])
async def list_reports(
    subject_id: str,
    store: SessionStore = Depends(get_store),
):
    """List a subject's reports, most recent first."""
    try:
        return store.get_subject(subject_id).reports
    except SubjectNotFound:
        raise HTTPException(status_code=404, detail="Subject not found")


@router.get("/{report_id}", response_model=FinalReport)
async def get_report(
    subject_id: str,
    report_id: str,
    store: SessionStore = Depends(get_store),
):
    """Get a report with its progress and evidence."""
    try:
        return store.get_report(subject_id, report_id)
    except SubjectNotFound:
        raise HTTPException(status_code=404, detail="Subject not found")
    except ReportNotFound:
        raise HTTPException(status_code=404, detail="Report not found")
