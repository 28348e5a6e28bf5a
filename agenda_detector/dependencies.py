"""FastAPI dependencies exposing application-owned state."""

from fastapi import Request

from agenda_detector.orchestrator import AnalysisOrchestrator
from agenda_detector.services.llm_client import LLMClient
from agenda_detector.services.session_store import SessionStore


def get_store(request: Request) -> SessionStore:
    """Session store owned by the application."""
    return request.app.state.store


def get_llm_client(request: Request) -> LLMClient:
    """Shared LLM client."""
    return request.app.state.llm_client


def get_orchestrator(request: Request) -> AnalysisOrchestrator:
    """Orchestrator bound to the shared LLM client."""
    return request.app.state.orchestrator
