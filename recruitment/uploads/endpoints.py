import re
import time

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from recruitment.core.config import settings
from recruitment.core.dependencies import require_candidate
from recruitment.core.errors import StorageError
from recruitment.core.logger_setup import setup_logger
from recruitment.core.security import Identity
from recruitment.uploads.b2_client import B2StorageClient, get_storage_client

router = APIRouter()
logger = setup_logger(__name__)

ALLOWED_MIME_TYPES = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "image/jpeg": "jpg",
    "image/png": "png",
}
INVALID_TYPE_MESSAGE = "Invalid file type. Only PDF, DOC, DOCX, JPG, and PNG are allowed."
FILE_TYPE_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,50}$")


def candidate_prefix(identity: Identity) -> str:
    return f"candidates/{identity.id}/"


def build_object_key(identity: Identity, file_type: str, original_name: str, content_type: str) -> str:
    """``candidates/{userId}/{fileType}-{timestampMs}.{ext}``"""
    ext = ""
    if original_name and "." in original_name:
        ext = original_name.rsplit(".", 1)[-1].lower()
    if not re.fullmatch(r"[a-z0-9]{1,10}", ext):
        ext = ALLOWED_MIME_TYPES[content_type]
    timestamp = int(time.time() * 1000)
    return f"{candidate_prefix(identity)}{file_type}-{timestamp}.{ext}"


@router.post("")
async def upload_file(
    file: UploadFile = File(...),
    file_type: str = Form("document", alias="fileType"),
    identity: Identity = Depends(require_candidate),
    storage: B2StorageClient = Depends(get_storage_client),
):
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if content_type not in ALLOWED_MIME_TYPES:
        logger.warning(f"Rejected upload of type {content_type!r} from user {identity.id}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TYPE_MESSAGE)

    if not FILE_TYPE_PATTERN.match(file_type or ""):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid fileType")

    data = await file.read(settings.UPLOAD_MAX_BYTES + 1)
    if len(data) > settings.UPLOAD_MAX_BYTES:
        logger.warning(f"Rejected oversized upload from user {identity.id}")
        max_mb = settings.UPLOAD_MAX_BYTES // (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large. Maximum size is {max_mb}MB.",
        )
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    file_name = build_object_key(identity, file_type, file.filename, content_type)
    try:
        uploaded = await run_in_threadpool(storage.upload_file, data, file_name, content_type)
    except StorageError as e:
        logger.error(f"Error uploading file for user {identity.id}: {str(e)}")
        return JSONResponse(
            content={"error": "Failed to upload file", "message": str(e)},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    logger.info(f"User {identity.id} uploaded {uploaded.file_name}")
    return {
        "success": True,
        "fileUrl": uploaded.url,
        "fileName": uploaded.file_name,
        "fileId": uploaded.file_id,
    }


@router.get("/{file_id}")
async def get_file_info(
    file_id: str,
    identity: Identity = Depends(require_candidate),
    storage: B2StorageClient = Depends(get_storage_client),
):
    try:
        info = await run_in_threadpool(storage.get_file_info, file_id)
    except StorageError as e:
        logger.error(f"Error getting file info for {file_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get file info")

    if not str(info.get("fileName", "")).startswith(candidate_prefix(identity)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return info


@router.delete("/{file_id}")
async def delete_file(
    file_id: str,
    file_name: str = Query(..., alias="fileName"),
    identity: Identity = Depends(require_candidate),
    storage: B2StorageClient = Depends(get_storage_client),
):
    if not file_name.startswith(candidate_prefix(identity)):
        logger.warning(f"User {identity.id} tried to delete {file_name}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    try:
        await run_in_threadpool(storage.delete_file, file_name, file_id)
    except StorageError as e:
        logger.error(f"Error deleting {file_name}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete file")

    return {"success": True, "message": "File deleted successfully"}
