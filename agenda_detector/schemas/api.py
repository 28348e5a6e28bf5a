"""Request and response schemas for the HTTP routes."""

from typing import List, Optional

from pydantic import BaseModel, Field

from agenda_detector.schemas.subject import FinalReport, PipelineName


class LLMSettings(BaseModel):
    """Runtime configuration of the text-generation endpoint."""

    endpoint: str
    model: str


class SubjectCreate(BaseModel):
    """Schema for creating a subject."""

    name: str = Field(min_length=1)


class SubjectSummary(BaseModel):
    """Subject listing entry."""

    id: str
    name: str
    document_count: int
    report_count: int
    selected: bool


class StatementSubmit(BaseModel):
    """Schema for submitting a statement for analysis."""

    statement: str = Field(min_length=1)
    pipeline: Optional[PipelineName] = None


class ReportStartResponse(BaseModel):
    """Response after scheduling an analysis."""

    subject_id: str
    report: FinalReport
    message: str


class DocumentsAdded(BaseModel):
    """Response after adding documents to a subject."""

    subject_id: str
    added: int
    document_ids: List[str]
