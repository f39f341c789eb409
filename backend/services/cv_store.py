"""In-memory document store for uploaded CVs."""

import logging
import uuid
from datetime import datetime, timezone

from models.cv import CVDocument, CVRecord, CVStatus, FileType, TransformedCV

logger = logging.getLogger(__name__)


class CVNotFoundError(KeyError):
    pass


class CVStore:
    """Keyed by document id. Every write replaces the stored CVDocument whole,
    so readers never observe a half-updated document.
    """

    def __init__(self) -> None:
        self._docs: dict[str, CVDocument] = {}

    def create(self, original_file_name: str, file_type: FileType, file_size: int) -> CVDocument:
        doc = CVDocument(
            id=uuid.uuid4().hex,
            original_file_name=original_file_name,
            original_file_type=file_type,
            file_size=file_size,
            uploaded_at=datetime.now(timezone.utc),
        )
        self._docs[doc.id] = doc
        return doc

    def get(self, cv_id: str) -> CVDocument:
        try:
            return self._docs[cv_id]
        except KeyError:
            raise CVNotFoundError(cv_id) from None

    def list_all(self) -> list[CVDocument]:
        return sorted(self._docs.values(), key=lambda d: d.uploaded_at, reverse=True)

    def _replace(self, cv_id: str, **changes) -> CVDocument:
        doc = self.get(cv_id).model_copy(update=changes)
        self._docs[cv_id] = doc
        return doc

    def set_status(self, cv_id: str, status: CVStatus) -> CVDocument:
        return self._replace(cv_id, status=status)

    def set_extracted_text(self, cv_id: str, text: str) -> CVDocument:
        return self._replace(cv_id, extracted_text=text)

    def finish(
        self,
        cv_id: str,
        status: CVStatus,
        transformed_data: TransformedCV | None = None,
        errors: list[str] | None = None,
    ) -> CVDocument:
        """Record the outcome of processing: status, data, metadata and timings at once."""
        now = datetime.now(timezone.utc)
        doc = self.get(cv_id)
        changes = {
            "status": status,
            "errors": list(errors or []),
            "processed_at": now,
            "processing_duration_ms": int((now - doc.uploaded_at).total_seconds() * 1000),
        }
        if transformed_data is not None:
            changes["transformed_data"] = transformed_data
        return self._replace(cv_id, **changes)

    def update_data(self, cv_id: str, record: CVRecord) -> CVDocument:
        """Replace the CV content after a user edit, keeping its processing metadata."""
        doc = self.get(cv_id)
        if doc.transformed_data is None:
            raise ValueError("CV has not been processed yet")
        data = TransformedCV.model_validate({
            **record.model_dump(),
            "ai_processing_details": doc.transformed_data.ai_processing_details,
        })
        return self._replace(cv_id, transformed_data=data)

    def delete(self, cv_id: str) -> None:
        self.get(cv_id)
        del self._docs[cv_id]
        logger.info("Deleted CV %s", cv_id)
