from __future__ import annotations

import logging
import os
import tempfile

from fastapi import HTTPException, UploadFile, status

from skillsphere.core.config import settings
from skillsphere.parsing.extract import extract_document
from skillsphere.parsing.models import ExtractedDocument

logger = logging.getLogger(__name__)

CHUNK_BYTES = 1024 * 64


def remove_temp_file(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        return
    except OSError as exc:
        logger.warning("temp_file_cleanup_failed path=%s: %s", path, exc)


async def _spool_upload(file: UploadFile, path: str, max_bytes: int) -> int:
    total = 0
    with open(path, "wb") as handle:
        while True:
            chunk = await file.read(CHUNK_BYTES)
            if not chunk:
                break
            total += len(chunk)
            if total > max_bytes:
                raise HTTPException(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    detail=f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB.",
                )
            handle.write(chunk)
    return total


async def extract_upload(file: UploadFile) -> ExtractedDocument:
    """Spool an upload to a temp file, extract its text, and delete the file.

    Raises HTTP 400 for empty uploads, 413 past the size cap and 422 when the
    text is too short to be a resume.
    """
    filename = file.filename or "uploaded-file"
    suffix = os.path.splitext(filename)[1][:10]
    fd, path = tempfile.mkstemp(prefix="skillsphere-", suffix=suffix)
    os.close(fd)
    try:
        size = await _spool_upload(file, path, settings.max_upload_bytes)
        if size == 0:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty.")
        with open(path, "rb") as handle:
            content = handle.read()
        document = extract_document(content, file.content_type, filename)
    finally:
        remove_temp_file(path)

    logger.info(
        "upload_extracted file=%s source=%s extractor=%s chars=%s",
        filename,
        document.source_type,
        document.extractor,
        document.characters,
    )
    if document.characters < settings.min_extracted_chars:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Could not extract enough text from the file. Try a text-based PDF or a .txt export of your resume.",
        )
    return document
