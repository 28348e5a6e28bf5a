"""Session data model: subjects, their documents and reports."""

import uuid
from datetime import datetime, timezone
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

from agenda_detector.schemas.evidence import Evidence

DocumentType = Literal["vote", "donation", "speech", "article", "leak", "tweet", "other"]
DocumentStatus = Literal["pending", "processing", "indexed", "error"]
ProgressStatus = Literal["pending", "running", "completed", "error"]
ReportStatus = Literal["idle", "running", "success", "error"]
PipelineName = Literal["fixed", "planned"]


def new_id(prefix: str) -> str:
    """Generate a prefixed unique id, e.g. ``doc-3f2a...``."""
    return f"{prefix}-{uuid.uuid4().hex}"


def utc_now_iso() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class IngestedDocument(BaseModel):
    """A piece of evidence associated with a subject."""

    id: str = Field(default_factory=lambda: new_id("doc"))
    subject: str
    type: DocumentType = "other"
    source: str  # filename or URL
    date: str  # YYYY-MM-DD
    content: str
    status: DocumentStatus = "indexed"


class ProgressStep(BaseModel):
    """One named pipeline stage and its status."""

    name: str
    status: ProgressStatus = "pending"
    details: Optional[Any] = None


class FinalReport(BaseModel):
    """A single analysis of one statement."""

    id: str = Field(default_factory=lambda: new_id("report"))
    original_statement: str
    markdown_report: str = ""
    evidence: Evidence = Field(default_factory=Evidence)
    progress: List[ProgressStep] = []
    timestamp: str = Field(default_factory=utc_now_iso)
    pipeline: PipelineName = "fixed"
    status: ReportStatus = "idle"
    error: Optional[str] = None


class Subject(BaseModel):
    """The person or entity being analyzed."""

    id: str = Field(default_factory=lambda: new_id("subj"))
    name: str
    ingested_data: List[IngestedDocument] = []
    reports: List[FinalReport] = []  # most recent first
