"""Shared dependencies for API routes."""

from config import settings
from services.cv_store import CVStore
from services.pipeline.orchestrator import TransformationOrchestrator, build_orchestrator

_store: CVStore | None = None
_orchestrator: TransformationOrchestrator | None = None


def get_store() -> CVStore:
    global _store
    if _store is None:
        _store = CVStore()
    return _store


def get_orchestrator() -> TransformationOrchestrator:
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = build_orchestrator(settings)
    return _orchestrator
