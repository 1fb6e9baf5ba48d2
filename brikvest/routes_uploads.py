"""
brikvest/routes_uploads.py

Admin file uploads (multipart field `file`). Returns the public URL to put
into a property's partnershipDocumentUrl or imageUrl.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from brikvest.auth import AdminContext
from brikvest.dependencies import require_admin_auth
from brikvest.errors import ValidationError
from brikvest.file_storage import UPLOAD_KINDS, LocalFileStorage, get_file_storage
from brikvest.schemas import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/upload",
    tags=["uploads"],
)


def _store_upload(kind: str, file: UploadFile, storage: LocalFileStorage, ctx: AdminContext) -> UploadResponse:
    folder, allowed = UPLOAD_KINDS[kind]
    if not file.filename:
        raise ValidationError("No file uploaded")

    # One byte past the limit is enough for validate() to reject it
    data = file.file.read(storage.max_bytes + 1)
    stored = storage.save(data, folder, file.filename, allowed)
    logger.info("[UPLOAD] %s uploaded by user_id=%s -> %s", kind, ctx.user_id, stored["id"])
    return UploadResponse(**stored)


@router.post("/document", response_model=UploadResponse)
def upload_document(
    file: UploadFile = File(...),
    storage: LocalFileStorage = Depends(get_file_storage),
    ctx: AdminContext = Depends(require_admin_auth),
):
    """Upload a partnership document (pdf, doc, docx)."""
    return _store_upload("document", file, storage, ctx)


@router.post("/image", response_model=UploadResponse)
def upload_image(
    file: UploadFile = File(...),
    storage: LocalFileStorage = Depends(get_file_storage),
    ctx: AdminContext = Depends(require_admin_auth),
):
    """Upload a property image (jpg, jpeg, png, webp, gif)."""
    return _store_upload("image", file, storage, ctx)
