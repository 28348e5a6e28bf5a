"""In-memory session state: subjects, documents, reports and selection."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from agenda_detector.exceptions import DuplicateSubject, ReportNotFound, SubjectNotFound
from agenda_detector.orchestrator import Pipeline, initial_steps
from agenda_detector.schemas.evidence import AnalysisResult
from agenda_detector.schemas.subject import (
    FinalReport,
    IngestedDocument,
    ProgressStep,
    Subject,
)

logger = logging.getLogger(__name__)


class SessionStore:
    """Single owner of all session state.

    Every mutation goes through a method here. State lives for the process
    lifetime only.
    """

    def __init__(self, default_subject_name: Optional[str] = None):
        """Initialize the store, optionally seeded with one subject."""
        self._subjects: List[Subject] = []
        self._selected_id: Optional[str] = None
        self._locks: Dict[str, asyncio.Lock] = {}

        if default_subject_name:
            self.add_subject(default_subject_name)

    # Subjects

    def list_subjects(self) -> List[Subject]:
        """All subjects in creation order."""
        return list(self._subjects)

    def get_subject(self, subject_id: str) -> Subject:
        """Look up a subject by id."""
        for subject in self._subjects:
            if subject.id == subject_id:
                return subject
        raise SubjectNotFound(f"Subject {subject_id} not found")

    def add_subject(self, name: str) -> Subject:
        """Create a subject and select it."""
        name = name.strip()
        if not name:
            raise ValueError("Subject name must not be empty")
        if any(s.name == name for s in self._subjects):
            raise DuplicateSubject(f"Subject '{name}' already exists")

        subject = Subject(name=name)
        self._subjects.append(subject)
        self._selected_id = subject.id
        logger.info(f"Created subject {subject.id} ({name})")
        return subject

    def delete_subject(self, subject_id: str) -> None:
        """Remove a subject; selection only moves if it pointed at this one."""
        subject = self.get_subject(subject_id)
        self._subjects.remove(subject)
        self._locks.pop(subject_id, None)

        if self._selected_id == subject_id:
            self._selected_id = self._subjects[0].id if self._subjects else None

        logger.info(f"Deleted subject {subject_id}")

    def select_subject(self, subject_id: str) -> Subject:
        """Make a subject the current selection."""
        subject = self.get_subject(subject_id)
        self._selected_id = subject.id
        return subject

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def selected_subject(self) -> Optional[Subject]:
        """The selected subject, or None."""
        if self._selected_id is None:
            return None
        return self.get_subject(self._selected_id)

    # Documents

    def add_documents(self, subject_id: str, documents: List[IngestedDocument]) -> List[IngestedDocument]:
        """Append documents to a subject. No deduplication."""
        subject = self.get_subject(subject_id)
        subject.ingested_data.extend(documents)
        logger.info(f"Added {len(documents)} documents to subject {subject_id}")
        return documents

    # Reports

    def report_lock(self, subject_id: str) -> asyncio.Lock:
        """Lock serializing analysis runs on one subject."""
        self.get_subject(subject_id)
        if subject_id not in self._locks:
            self._locks[subject_id] = asyncio.Lock()
        return self._locks[subject_id]

    def get_report(self, subject_id: str, report_id: str) -> FinalReport:
        """Look up a report of a subject."""
        for report in self.get_subject(subject_id).reports:
            if report.id == report_id:
                return report
        raise ReportNotFound(f"Report {report_id} not found")

    def create_report(self, subject_id: str, statement: str, pipeline: Pipeline = Pipeline.FIXED) -> FinalReport:
        """Start a report with empty evidence and every step pending."""
        subject = self.get_subject(subject_id)
        pipeline = Pipeline(pipeline)
        report = FinalReport(
            original_statement=statement,
            progress=initial_steps(pipeline),
            pipeline=pipeline.value,
            status="running",
        )
        subject.reports.insert(0, report)
        logger.info(f"Created report {report.id} for subject {subject_id}")
        return report

    def update_progress(
        self,
        subject_id: str,
        report_id: str,
        step_name: str,
        status: str,
        details: Optional[Any] = None,
    ) -> ProgressStep:
        """
        Record a stage transition.

        Steps the pipeline did not declare up front are appended. Starting a
        step while another is running is rejected.
        """
        report = self.get_report(subject_id, report_id)
        step = next((p for p in report.progress if p.name == step_name), None)
        if step is None:
            step = ProgressStep(name=step_name)
            report.progress.append(step)

        if status == "running":
            running = [p.name for p in report.progress if p.status == "running" and p is not step]
            if running:
                raise RuntimeError(f"Cannot start '{step_name}' while '{running[0]}' is running")

        step.status = status
        if details is not None or status != "error":
            step.details = details
        return step

    def complete_report(self, subject_id: str, report_id: str, result: AnalysisResult) -> FinalReport:
        """Merge a finished analysis and mark every step completed."""
        report = self.get_report(subject_id, report_id)
        report.markdown_report = result.markdown_report
        report.evidence = result.evidence
        for step in report.progress:
            step.status = "completed"
        report.status = "success"
        report.error = None
        return report

    def fail_report(self, subject_id: str, report_id: str, message: str) -> FinalReport:
        """Record a failed analysis; partial progress stays as it is."""
        report = self.get_report(subject_id, report_id)
        report.status = "error"
        report.error = message
        return report
