"""LLM settings routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from agenda_detector.dependencies import get_llm_client
from agenda_detector.schemas.api import LLMSettings
from agenda_detector.services.llm_client import LLMClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=LLMSettings)
async def read_settings(llm_client: LLMClient = Depends(get_llm_client)):
    """Current endpoint and model."""
    return llm_client.settings


@router.put("", response_model=LLMSettings)
async def update_settings(
    data: LLMSettings,
    llm_client: LLMClient = Depends(get_llm_client),
):
    """Replace the endpoint and model for the rest of the session."""
    if not data.endpoint.strip() or not data.model.strip():
        raise HTTPException(status_code=400, detail="Endpoint and model are required")

    llm_client.configure(LLMSettings(endpoint=data.endpoint.strip(), model=data.model.strip()))
    return llm_client.settings
