"""File Upload & Forms — form fields, raw bytes, UploadFile and multi-file uploads.

Invariants:
    - Files larger than settings.upload_max_bytes → 413
    - Filenames containing path separators or '..' → 400
    - Content types outside settings.upload_allowed_types → 415
    - Uploaded files are read in chunks and never written to disk
"""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from quickref.api.deps import SettingsDep
from quickref.config import Settings
from quickref.core.errors import (
    InvalidUploadError, PayloadTooLargeError, UnsupportedMediaTypeError,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/uploads", tags=["uploads"])

_CHUNK_SIZE = 64 * 1024


def validate_filename(filename: str | None) -> str:
    if not filename:
        raise InvalidUploadError("No filename provided")
    if ".." in filename or "/" in filename or "\\" in filename:
        raise InvalidUploadError("Invalid filename")
    return filename


async def read_limited(file: UploadFile, limit: int) -> int:
    """Read the upload fully, failing once `limit` bytes are exceeded. Returns size."""
    size = 0
    while chunk := await file.read(_CHUNK_SIZE):
        size += len(chunk)
        if size > limit:
            raise PayloadTooLargeError(size, limit)
    return size


async def inspect_upload(file: UploadFile, settings: Settings) -> dict:
    filename = validate_filename(file.filename)
    if file.content_type not in settings.upload_allowed_types:
        raise UnsupportedMediaTypeError(file.content_type, settings.upload_allowed_types)
    size = await read_limited(file, settings.upload_max_bytes)
    return {"filename": filename, "content_type": file.content_type, "size": size}


@router.post("/login-form")
async def login_form(
    username: Annotated[str, Form(min_length=1)],
    password: Annotated[str, Form(min_length=1)],
):
    return {"username": username, "password_length": len(password)}


@router.post("/file")
async def create_file(file: Annotated[bytes, File()], settings: SettingsDep):
    if len(file) > settings.upload_max_bytes:
        raise PayloadTooLargeError(len(file), settings.upload_max_bytes)
    return {"file_size": len(file)}


@router.post("/uploadfile")
async def create_upload_file(file: UploadFile, settings: SettingsDep):
    info = await inspect_upload(file, settings)
    logger.info(f"Accepted upload {info['filename']} ({info['size']} bytes)")
    return info


@router.post("/multiple")
async def create_upload_files(
    files: list[UploadFile],
    settings: SettingsDep,
    note: Annotated[str, Form()] = "",
):
    inspected = [await inspect_upload(f, settings) for f in files]
    return {
        "files": inspected,
        "total_size": sum(f["size"] for f in inspected),
        "note": note,
    }
