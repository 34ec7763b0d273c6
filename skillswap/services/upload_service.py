"""Profile photo storage on local disk, served statically under /uploads."""

import logging
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from skillswap.config import Settings
from skillswap.core.exceptions import BadRequestError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"

# Stored extension comes from the content type, never from the client's filename
IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


async def store_profile_photo(upload: UploadFile, settings: Settings) -> str:
    """Validate and persist an uploaded image; return its public path (``/uploads/<name>``)."""

    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    extension = IMAGE_EXTENSIONS.get(content_type)
    if extension is None:
        raise BadRequestError("Only image files are allowed!")

    data = await upload.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise BadRequestError("Profile photo exceeds the maximum upload size")
    if not data:
        raise BadRequestError("Uploaded file is empty")

    filename = f"profilePhoto-{uuid4().hex}{extension}"
    target = Path(settings.upload_dir) / filename
    await run_in_threadpool(_write_file, target, data)
    logger.info("Stored profile photo %s (%d bytes)", filename, len(data))
    return f"{UPLOAD_URL_PREFIX}/{filename}"


def _write_file(target: Path, data: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)


def discard_profile_photo(public_path: str | None, settings: Settings) -> None:
    """Remove a stored photo that ended up unreferenced (e.g. the DB write failed)."""
    if not public_path or not public_path.startswith(f"{UPLOAD_URL_PREFIX}/"):
        return
    target = Path(settings.upload_dir) / Path(public_path).name
    target.unlink(missing_ok=True)
