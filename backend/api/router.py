import asyncio
import time

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    File,
    HTTPException,
    Request,
    UploadFile,
)
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_orchestrator, get_store
from config import settings
from models.cv import CVDocument, FileType
from models.requests import TransformRequest, UpdateCVRequest
from models.responses import AIStatusResponse, DeleteResponse, TransformResponse
from services import cv_service, file_processor
from services.cv_store import CVNotFoundError, CVStore
from services.errors import ExtractionError, UnsupportedFormatError
from services.normalizer import normalize_cv
from services.pipeline.orchestrator import TransformationOrchestrator
from services.providers.registry import provider_status

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "providers_configured": [c.name for c in settings.provider_configs() if c.is_configured],
    }


@router.get("/ai/status", response_model=AIStatusResponse)
async def ai_status():
    return provider_status(settings.provider_configs())


@router.post("/ai/transform", response_model=TransformResponse)
@limiter.limit("10/minute")
async def transform(
    request: Request,
    body: TransformRequest,
    orchestrator: TransformationOrchestrator = Depends(get_orchestrator),
):
    if not body.text.strip():
        raise HTTPException(status_code=400, detail="Text content is required")

    start = time.perf_counter()
    transformed = await orchestrator.transform(body.text, body.preferences)
    return TransformResponse(
        transformed_data=transformed,
        processing_time_ms=int((time.perf_counter() - start) * 1000),
    )


async def _read_upload(upload: UploadFile) -> tuple[bytes, FileType]:
    try:
        file_type = file_processor.detect_file_type(upload.filename or "")
    except UnsupportedFormatError:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only PDF, DOCX, and Excel files are allowed.",
        )

    content = await upload.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )
    return content, file_type


@router.post("/cv/extract")
@limiter.limit("20/minute")
async def extract(request: Request, cv: UploadFile = File(...)):
    content, file_type = await _read_upload(cv)
    try:
        text = await asyncio.to_thread(file_processor.extract_text, content, file_type)
    except ExtractionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    validation = file_processor.validate_content(text)
    return {
        "text": text,
        "fileType": file_type.value,
        "warnings": validation.warnings,
        "basicInfo": file_processor.extract_basic_info(text),
    }


@router.post("/cv/upload", response_model=CVDocument, status_code=201)
@limiter.limit("20/minute")
async def upload(
    request: Request,
    background_tasks: BackgroundTasks,
    cv: UploadFile = File(...),
    store: CVStore = Depends(get_store),
    orchestrator: TransformationOrchestrator = Depends(get_orchestrator),
):
    content, file_type = await _read_upload(cv)
    doc = store.create(cv.filename or "", file_type, len(content))
    background_tasks.add_task(
        cv_service.process_upload, store, orchestrator, doc.id, content, file_type
    )
    return doc


@router.get("/cv", response_model=list[CVDocument])
async def list_cvs(store: CVStore = Depends(get_store)):
    return store.list_all()


@router.get("/cv/{cv_id}", response_model=CVDocument)
async def get_cv(cv_id: str, store: CVStore = Depends(get_store)):
    try:
        return store.get(cv_id)
    except CVNotFoundError:
        raise HTTPException(status_code=404, detail="CV not found")


@router.put("/cv/{cv_id}", response_model=CVDocument)
async def update_cv(cv_id: str, body: UpdateCVRequest, store: CVStore = Depends(get_store)):
    try:
        return store.update_data(cv_id, normalize_cv(body.transformed_data))
    except CVNotFoundError:
        raise HTTPException(status_code=404, detail="CV not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/cv/{cv_id}", response_model=DeleteResponse)
async def delete_cv(cv_id: str, store: CVStore = Depends(get_store)):
    try:
        store.delete(cv_id)
    except CVNotFoundError:
        raise HTTPException(status_code=404, detail="CV not found")
    return DeleteResponse()
