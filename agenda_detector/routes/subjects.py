"""Subject routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from agenda_detector.dependencies import get_store
from agenda_detector.exceptions import DuplicateSubject, SubjectNotFound
from agenda_detector.schemas.api import SubjectCreate, SubjectSummary
from agenda_detector.schemas.subject import Subject
from agenda_detector.services.session_store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subjects", tags=["subjects"])


def _summary(subject: Subject, store: SessionStore) -> SubjectSummary:
    return SubjectSummary(
        id=subject.id,
        name=subject.name,
        document_count=len(subject.ingested_data),
        report_count=len(subject.reports),
        selected=subject.id == store.selected_id,
    )


@router.get("", response_model=List[SubjectSummary])
async def list_subjects(store: SessionStore = Depends(get_store)):
    """List all subjects."""
    return [_summary(s, store) for s in store.list_subjects()]


@router.post("", response_model=Subject, status_code=201)
async def create_subject(
    data: SubjectCreate,
    store: SessionStore = Depends(get_store),
):
    """Create a subject and select it."""
    try:
        return store.add_subject(data.name)
    except DuplicateSubject as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/selected", response_model=Subject)
async def get_selected_subject(store: SessionStore = Depends(get_store)):
    """Get the currently selected subject."""
    subject = store.selected_subject()
    if subject is None:
        raise HTTPException(status_code=404, detail="No subject selected")
    return subject


@router.get("/{subject_id}", response_model=Subject)
async def get_subject(
    subject_id: str,
    store: SessionStore = Depends(get_store),
):
    """Get a subject with its documents and reports."""
    try:
        return store.get_subject(subject_id)
    except SubjectNotFound:
        raise HTTPException(status_code=404, detail="Subject not found")


@router.post("/{subject_id}/select", response_model=SubjectSummary)
async def select_subject(
    subject_id: str,
    store: SessionStore = Depends(get_store),
):
    """Make a subject the current selection."""
    try:
        subject = store.select_subject(subject_id)
    except SubjectNotFound:
        raise HTTPException(status_code=404, detail="Subject not found")
    return _summary(subject, store)


@router.delete("/{subject_id}")
async def delete_subject(
    subject_id: str,
    store: SessionStore = Depends(get_store),
):
    """Delete a subject with its documents and reports."""
    try:
        store.delete_subject(subject_id)
    except SubjectNotFound:
        raise HTTPException(status_code=404, detail="Subject not found")

    return {"message": "Subject deleted", "selected_subject_id": store.selected_id}
