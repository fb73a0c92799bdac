"""
Local temporary file handling for incoming multipart uploads.
"""

import logging
import re
import uuid
from pathlib import Path
from typing import Optional, Union

import aiofiles
from fastapi import UploadFile

CHUNK_SIZE = 1024 * 1024  # 1 MB
logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: Optional[str]) -> str:
    """Strip directories and unsafe characters, keeping the extension"""
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"


async def spool_upload(upload: Optional[UploadFile], temp_dir: Union[str, Path]) -> Optional[Path]:
    """
    Write an incoming upload to a uniquely named file in ``temp_dir``.

    Returns None when no file (or an empty file field) was sent. A partially
    written file is removed before the error propagates.
    """
    if upload is None or not upload.filename:
        return None

    directory = Path(temp_dir)
    directory.mkdir(parents=True, exist_ok=True)
    tmp_path = directory / f"upload_{uuid.uuid4().hex}_{safe_filename(upload.filename)}"

    try:
        async with aiofiles.open(tmp_path, "wb") as tmp_file:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                await tmp_file.write(chunk)
    except Exception:
        remove_temp_file(tmp_path)
        raise
    finally:
        await upload.close()

    logger.debug("Temporary file created: %s (size: %s bytes)", tmp_path, tmp_path.stat().st_size)
    return tmp_path


def remove_temp_file(file_path: Optional[Union[str, Path]]) -> None:
    """Remove a temp file; safe to call when it is already gone"""
    if not file_path:
        return

    path = Path(file_path)
    try:
        if path.is_file():
            path.unlink()
            logger.debug("Temporary file cleaned up: %s", path)
        elif path.exists():
            logger.warning("Path exists but is not a file: %s", path)
    except OSError as exc:
        logger.error("Failed to cleanup temporary file %s: %s", path, exc)
