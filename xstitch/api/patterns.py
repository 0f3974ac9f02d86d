import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from ..core.errors import ConfigurationError, ImageLoadError
from ..core.fabrics import finished_size, get_fabric
from ..core.pipeline import generate_pattern, render_preview
from ..core.store import PatternRecord, store as pattern_store
from ..core.types import PreviewMode
from ..export.csv_exporter import export_csv
from ..export.json_exporter import export_json
from ..export.pdf_exporter import export_pdf
from ..models.api_schemas import (
    CreatePatternRequest,
    PatternListResponse,
    PatternRecordResponse,
    UploadResponse,
)
from ..models.pattern import PatternResult
from ..settings import MAX_UPLOAD_BYTES
from ..storage import get_storage, save_upload

logger = logging.getLogger(__name__)

router = APIRouter()

ALLOWED_TYPES = {"image/jpeg", "image/png"}


def _http_error(exc: ImageLoadError | ConfigurationError) -> HTTPException:
    status = 400 if isinstance(exc, ImageLoadError) else 422
    return HTTPException(status_code=status, detail=exc.to_dict())


async def _read_image(file: UploadFile) -> bytes:
    if file.content_type not in ALLOWED_TYPES:
        raise HTTPException(status_code=400, detail="Only JPG or PNG images are allowed")
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="No image was uploaded")
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Image is too large")
    return content


def _load_source(image_key: str) -> bytes:
    try:
        return get_storage().load_bytes(image_key)
    except KeyError:
        raise HTTPException(status_code=404, detail="Image not found") from None


def _get_record(pattern_id: int) -> PatternRecord:
    record = pattern_store.get(pattern_id)
    if not record:
        raise HTTPException(status_code=404, detail="Pattern not found")
    return record


def _store_artefacts(record: PatternRecord) -> None:
    storage = get_storage()
    base = f"patterns/{record.id}"
    try:
        storage.save_bytes(f"{base}/preview.png", render_preview(record.result, mode="color"))
        storage.save_bytes(f"{base}/pattern.json", export_json(record.result).encode("utf-8"))
        storage.save_json(f"{base}/record.json", record.to_dict(include_result=False))
    except Exception as exc:
        logger.warning("Could not store artefacts for pattern %s: %s", record.id, exc)


# =====================================================================
#   UPLOAD
# =====================================================================

@router.post("/upload", response_model=UploadResponse)
async def upload_image(image: UploadFile = File(...)):
    content = await _read_image(image)
    key = save_upload(content, image.filename)
    logger.info("Stored upload %s (%s bytes)", key, len(content))
    return UploadResponse(image_key=key, filename=image.filename, size=len(content))


# =====================================================================
#   GENERATE (no persistence)
# =====================================================================

@router.post("/patterns/generate", response_model=PatternResult)
async def generate(
    image: UploadFile = File(...),
    width: int = Form(...),
    height: int = Form(...),
    palette: str = Form("dmc"),
    max_colors: Optional[str] = Form(None),
):
    content = await _read_image(image)
    try:
        return await run_in_threadpool(
            generate_pattern, content, width, height, palette=palette, max_colors=max_colors
        )
    except (ImageLoadError, ConfigurationError) as exc:
        raise _http_error(exc) from exc


# =====================================================================
#   PATTERN CREATE / READ
# =====================================================================

@router.post("/patterns", response_model=PatternRecordResponse, status_code=201)
def create_pattern(payload: CreatePatternRequest):
    content = _load_source(payload.image_key)
    try:
        fabric = get_fabric(payload.fabric_type)
        result = generate_pattern(
            content,
            payload.width,
            payload.height,
            palette=payload.palette,
            max_colors=payload.max_colors,
        )
    except (ImageLoadError, ConfigurationError) as exc:
        raise _http_error(exc) from exc

    record = pattern_store.create(
        name=payload.name,
        owner_id=payload.owner_id,
        image_key=payload.image_key,
        width=result.width,
        height=result.height,
        fabric_type=fabric.id,
        palette=result.palette,
        max_colors=payload.max_colors,
        result=result.model_dump(),
        meta={"finished_size": finished_size(result.width, result.height, fabric.id)},
    )
    _store_artefacts(record)
    logger.info("Saved pattern %s (%s)", record.id, record.name)
    return record.to_dict()


@router.get("/patterns/{pattern_id}", response_model=PatternRecordResponse)
def get_pattern(pattern_id: int):
    return _get_record(pattern_id).to_dict()


@router.get("/users/{owner_id}/patterns", response_model=PatternListResponse)
def list_user_patterns(owner_id: int):
    records = pattern_store.list_by_owner(owner_id)
    return {"items": [r.to_dict() for r in records], "total": len(records)}


# =====================================================================
#   PREVIEW / EXPORT
# =====================================================================

@router.get("/patterns/{pattern_id}/preview")
def preview(pattern_id: int, mode: PreviewMode = "color"):
    record = _get_record(pattern_id)
    img_bytes = render_preview(record.result, mode=mode)
    return Response(content=img_bytes, media_type="image/png")


@router.get("/patterns/{pattern_id}/export/pdf")
def export_pattern_pdf(pattern_id: int):
    record = _get_record(pattern_id)
    try:
        cover = get_storage().load_bytes(record.image_key)
    except KeyError:
        logger.warning("Source image %s missing, exporting without cover", record.image_key)
        cover = None
    pdf = export_pdf(
        record.result,
        title=record.name,
        fabric_type=record.fabric_type,
        source_name=record.image_key.rsplit("/", 1)[-1],
        image=cover,
    )
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="pattern-{record.id}.pdf"'},
    )


@router.get("/patterns/{pattern_id}/export/csv")
def export_pattern_csv(pattern_id: int):
    record = _get_record(pattern_id)
    payload = export_csv(record.result, title=record.name, fabric_type=record.fabric_type)
    return Response(
        content=payload,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="materials-{record.id}.csv"'},
    )
