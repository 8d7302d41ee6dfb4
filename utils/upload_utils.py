"""
Helpers for staging incoming uploads on local disk.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import FileValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def staged_filename(original: str) -> str:
    """Unique on-disk name that keeps the original extension.

    Example:
        >>> staged_filename("holiday photo.PNG").endswith(".png")
        True
    """
    suffix = Path(original).suffix.lower()
    return f"upload_{uuid.uuid4().hex}{suffix}"


async def save_upload_file(
    upload: UploadFile,
    directory: Optional[str] = None,
    *,
    max_size: Optional[int] = None,
) -> str:
    """
    Stream an incoming upload to a file under directory.

    Args:
        upload: The multipart file received by the API
        directory: Target directory (default: settings.upload_temp_dir)
        max_size: Reject files larger than this many bytes
            (default: settings.upload_max_file_size)

    Returns:
        Path of the written file

    Raises:
        FileValidationError: filename missing, or the file exceeds max_size.
            Any partially written file is removed first.
    """
    if not upload.filename:
        raise FileValidationError("No filename provided")

    directory = directory or settings.upload_temp_dir
    max_size = settings.upload_max_file_size if max_size is None else max_size

    os.makedirs(directory, exist_ok=True)
    dest_path = os.path.join(directory, staged_filename(upload.filename))

    written = 0
    too_large = False
    try:
        async with aiofiles.open(dest_path, "wb") as f:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_size:
                    too_large = True
                    break
                await f.write(chunk)
    except BaseException:
        # Never leave a partial file behind in the upload dir
        _discard(dest_path)
        raise

    if too_large:
        _discard(dest_path)
        raise FileValidationError(
            f"File too large. Max size: {max_size} bytes",
            file_name=upload.filename,
            status_code=413,
        )

    logger.debug("Staged upload %s -> %s (%d bytes)", upload.filename, dest_path, written)
    return dest_path


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning("Failed to remove partial upload %s: %s", path, str(e))
