"""Transformation orchestrator: provider fallback chain for CV text.

Flow:
    extracted text
      ├─ OpenAI     → parse → normalize → style   (confidence 0.95)
      ├─ Anthropic  → parse → normalize → style   (confidence 0.90)
      ├─ Google     → parse → normalize → style   (confidence 0.85)
      └─ basic_parse(text)                        (confidence 0.60)

Providers are tried strictly in order and the first success wins. Every
provider turn produces a ProviderAttempt; the attempts are folded into a
FallbackState, and ProcessingMetadata is built once from the final state.
An unconfigured provider is skipped and adds no error.
"""

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from config import Settings
from models.cv import (
    CONFIDENCE_BY_PROVIDER,
    CVRecord,
    ProcessingMetadata,
    ProviderTag,
    TransformedCV,
)
from services.basic_parser import basic_parse
from services.normalizer import normalize_cv
from services.providers.base import ProviderAdapter
from services.providers.registry import build_adapters
from services.response_parser import parse_ai_response
from services.style_corrector import apply_style_to_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSucceeded:
    tag: ProviderTag
    record: CVRecord


@dataclass(frozen=True)
class ProviderFailed:
    tag: ProviderTag
    message: str


@dataclass(frozen=True)
class ProviderSkipped:
    tag: ProviderTag


ProviderAttempt = Union[ProviderSucceeded, ProviderFailed, ProviderSkipped]


@dataclass(frozen=True)
class FallbackState:
    success: ProviderSucceeded | None = None
    errors: tuple[str, ...] = ()


def fold_attempt(state: FallbackState, attempt: ProviderAttempt) -> FallbackState:
    """Advance the fallback state by one provider attempt.

    Once a provider has succeeded the state is final and later attempts are ignored.
    """
    if state.success is not None:
        return state
    if isinstance(attempt, ProviderSucceeded):
        return FallbackState(success=attempt, errors=state.errors)
    if isinstance(attempt, ProviderFailed):
        return FallbackState(errors=state.errors + (attempt.message,))
    return state


def _attach_metadata(record: CVRecord, metadata: ProcessingMetadata) -> TransformedCV:
    return TransformedCV.model_validate(
        {**record.model_dump(), "ai_processing_details": metadata}
    )


class TransformationOrchestrator:
    """Runs one CV text through the provider chain. Holds no per-call state."""

    def __init__(self, adapters: Sequence[ProviderAdapter]) -> None:
        self.adapters = list(adapters)

    async def _attempt(
        self,
        adapter: ProviderAdapter,
        text: str,
        preferences: Mapping[str, Any] | None,
    ) -> ProviderAttempt:
        if not adapter.is_configured:
            logger.info("%s client not available, skipping", adapter.display_name)
            return ProviderSkipped(adapter.tag)

        logger.info("Attempting %s transformation...", adapter.display_name)
        try:
            raw = await adapter.call_provider(text, preferences)
            record = apply_style_to_record(normalize_cv(parse_ai_response(raw)))
        except Exception as e:
            logger.warning("%s failed, trying fallback: %s", adapter.display_name, e)
            return ProviderFailed(adapter.tag, f"{adapter.display_name} failed: {e}")

        logger.info("%s transformation successful", adapter.display_name)
        return ProviderSucceeded(adapter.tag, record)

    async def transform(
        self,
        text: str,
        preferences: Mapping[str, Any] | None = None,
    ) -> TransformedCV:
        """Turn extracted CV text into a TransformedCV. Never raises on provider failure."""
        start = time.perf_counter()
        logger.info("Transforming CV text (%d chars)", len(text))

        state = FallbackState()
        for adapter in self.adapters:
            state = fold_attempt(state, await self._attempt(adapter, text, preferences))
            if state.success is not None:
                break

        if state.success is not None:
            tag, record = state.success.tag, state.success.record
        else:
            logger.warning("All AI providers failed, using basic parsing")
            tag, record = ProviderTag.BASIC_PARSING, basic_parse(text)

        metadata = ProcessingMetadata(
            provider_used=tag,
            elapsed_ms=max(0, int((time.perf_counter() - start) * 1000)),
            confidence_score=CONFIDENCE_BY_PROVIDER[tag],
            errors=state.errors,
        )
        return _attach_metadata(record, metadata)


def build_orchestrator(settings: Settings) -> TransformationOrchestrator:
    """Wire configured provider adapters into an orchestrator."""
    return TransformationOrchestrator(build_adapters(settings.provider_configs()))
