import logging
import os
import shutil
import time
from typing import Optional

from fastapi import UploadFile

logger = logging.getLogger(__name__)

def upload_filename(original_name: str, now_ms: Optional[int] = None) -> str:
    """Timestamp-prefixed name that keeps the client's file name"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    # Drop any directory part sent by the client
    base = os.path.basename(original_name.replace("\\", "/")) or "upload"
    return f"{now_ms}-{base}"

def save_upload(upload: Optional[UploadFile], upload_dir: str, url_prefix: str = "/uploads") -> str:
    """Write an uploaded file into ``upload_dir`` and return its public relative path.

    Returns an empty string when no file was sent.
    """
    if upload is None or not upload.filename:
        return ""

    os.makedirs(upload_dir, exist_ok=True)
    filename = upload_filename(upload.filename)
    file_path = os.path.join(upload_dir, filename)

    with open(file_path, "wb") as out:
        shutil.copyfileobj(upload.file, out)

    logger.debug("Stored upload %s", file_path)
    return f"{url_prefix.rstrip('/')}/{filename}"
