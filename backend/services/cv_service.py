"""Background processing for one uploaded CV: extract, transform, store."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from models.cv import CVDocument, CVStatus, FileType
from services import file_processor
from services.cv_store import CVStore
from services.errors import ExtractionError
from services.pipeline.orchestrator import TransformationOrchestrator

logger = logging.getLogger(__name__)


async def process_upload(
    store: CVStore,
    orchestrator: TransformationOrchestrator,
    cv_id: str,
    buffer: bytes,
    file_type: FileType,
    preferences: Mapping[str, Any] | None = None,
) -> CVDocument:
    """Run the pipeline for one document.

    Only extraction errors end in status ``error``; once text exists the
    orchestrator always yields a result and the document is ``completed``.
    """
    logger.info("Starting file processing for CV %s (%s)", cv_id, file_type.value)
    store.set_status(cv_id, CVStatus.PROCESSING)

    try:
        # Format readers block; run them in a worker thread
        text = await asyncio.to_thread(file_processor.extract_text, buffer, file_type)
    except ExtractionError as e:
        logger.error("Text extraction failed for CV %s: %s", cv_id, e)
        return store.finish(cv_id, CVStatus.ERROR, errors=[str(e)])

    validation = file_processor.validate_content(text)
    for warning in validation.warnings:
        logger.warning("CV %s: %s", cv_id, warning)
    store.set_extracted_text(cv_id, text)
    logger.info("Text extraction completed for CV %s, length: %d", cv_id, len(text))

    transformed = await orchestrator.transform(text, preferences)
    doc = store.finish(cv_id, CVStatus.COMPLETED, transformed_data=transformed)
    logger.info(
        "CV %s processing completed via %s",
        cv_id,
        transformed.ai_processing_details.provider_used.value,
    )
    return doc
