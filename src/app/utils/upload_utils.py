import os
import uuid
from typing import Optional

import aiofiles
from fastapi import HTTPException, UploadFile

from src.app.config.settings import settings
from src.app.utils.logging_utils import loggers

CHUNK_SIZE = 1024 * 1024


async def save_upload(upload: UploadFile) -> str:
    """
    Write an uploaded file to the upload directory under a random name.

    Raises:
        HTTPException: 413 when the file exceeds the configured size limit.
            The partial file is removed before raising.
    """
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    temp_path = os.path.join(settings.UPLOAD_DIR, uuid.uuid4().hex)

    written = 0
    try:
        async with aiofiles.open(temp_path, "wb") as f:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > settings.MAX_UPLOAD_SIZE_BYTES:
                    raise HTTPException(status_code=413, detail="File too large")
                await f.write(chunk)
    except BaseException:
        remove_upload(temp_path)
        raise

    loggers["upload"].info(f"Stored upload {upload.filename} ({written} bytes)")
    return temp_path


async def read_upload(temp_path: str) -> bytes:
    async with aiofiles.open(temp_path, "rb") as f:
        return await f.read()


def remove_upload(temp_path: Optional[str]) -> None:
    if not temp_path or not os.path.exists(temp_path):
        return
    try:
        os.remove(temp_path)
    except OSError as e:
        loggers["upload"].error(f"Error cleaning up temp file {temp_path}: {str(e)}")
