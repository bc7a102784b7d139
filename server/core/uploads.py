# server/core/uploads.py

import os
import shutil
import secrets
import time
from pathlib import Path
from fastapi import UploadFile

from core.errors import ValidationError


UPLOADS_URL_PREFIX = "/uploads"

# The stored extension comes from the declared type, never from the client filename
IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def make_upload_name(ext: str) -> str:
    # millisecond timestamp plus a random suffix keeps concurrent uploads apart
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"


def save_image(upload: UploadFile, upload_dir: Path) -> str:
    """
    Stores an uploaded image in the uploads folder.
    Returns the public path the post row should reference.
    """
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    ext = IMAGE_EXTENSIONS.get(content_type)
    if ext is None:
        raise ValidationError("Only image uploads are allowed")

    os.makedirs(upload_dir, exist_ok=True)
    name = make_upload_name(ext)
    path = Path(upload_dir) / name
    with path.open("wb") as buffer:
        shutil.copyfileobj(upload.file, buffer)

    return f"{UPLOADS_URL_PREFIX}/{name}"
