# backend/services/upload_store.py

import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Union

from starlette.datastructures import UploadFile

from models.upload_models import UploadedFile
from services.errors import MissingFieldError

UPLOAD_FIELD = "csvFile"
CHUNK_SIZE = 64 * 1024


async def save_upload(
    upload: Union[UploadFile, str, None],
    scratch_dir: str,
    field: str = UPLOAD_FIELD,
) -> UploadedFile:
    """
    Copy an uploaded file into the scratch directory under a fresh name.
    The original extension is kept. Existing files are never overwritten.
    A plain text value in the field counts as no file.
    """
    if not isinstance(upload, UploadFile) or not upload.filename:
        raise MissingFieldError(field)

    scratch = Path(scratch_dir)
    scratch.mkdir(parents=True, exist_ok=True)

    suffix = Path(upload.filename).suffix
    while True:
        dest = scratch / f"{uuid.uuid4().hex}{suffix}"
        try:
            # "xb" fails instead of clobbering a file that already exists
            out = dest.open("xb")
            break
        except FileExistsError:
            continue

    try:
        with out:
            await upload.seek(0)
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                out.write(chunk)
    except BaseException:
        dest.unlink(missing_ok=True)
        raise

    return UploadedFile(
        temporary_path=str(dest),
        original_name=upload.filename,
        mime_hint=upload.content_type or "application/octet-stream",
    )


def discard_upload(uploaded: UploadedFile) -> None:
    try:
        os.remove(uploaded.temporary_path)
    except FileNotFoundError:
        pass


@asynccontextmanager
async def scratch_upload(
    upload: Union[UploadFile, str, None],
    scratch_dir: str,
    field: str = UPLOAD_FIELD,
) -> AsyncIterator[UploadedFile]:
    """
    Save the upload for the duration of the block, then delete it on every exit path.
    """
    uploaded = await save_upload(upload, scratch_dir, field)
    try:
        yield uploaded
    finally:
        discard_upload(uploaded)
