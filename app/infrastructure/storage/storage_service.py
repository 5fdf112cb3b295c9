"""
Receipt storage backends.
Supabase Storage for deployments, a local directory for development and tests.
"""

import hashlib
import logging
from datetime import datetime
from pathlib import Path

from starlette.concurrency import run_in_threadpool
from supabase import Client

from app.domain.models.base import ValidationError
from app.domain.services.file_storage import FileStorage

logger = logging.getLogger(__name__)

SAFE_FILENAME_CHARS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-"


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe storage."""
    # Drop any directory part the client sent
    filename = Path(filename.replace("\\", "/")).name or "file"

    safe_name = "".join(c if c in SAFE_FILENAME_CHARS else "_" for c in filename)

    # Ensure reasonable length
    if len(safe_name) > 200:
        name_part = Path(safe_name).stem[:180]
        ext_part = Path(safe_name).suffix
        safe_name = f"{name_part}{ext_part}"

    return safe_name


def generate_file_path(filename: str, owner_id: str, now: datetime = None) -> str:
    """
    Build a unique storage path: ``<owner_id>/<YYYY>/<MM>/<stem>_<hash><ext>``.
    """
    now = now or datetime.now()
    safe_filename = sanitize_filename(filename)

    hash_part = hashlib.md5(
        f"{owner_id}{safe_filename}{now.isoformat()}".encode()
    ).hexdigest()[:8]

    name_without_ext = Path(safe_filename).stem
    extension = Path(safe_filename).suffix
    unique_filename = f"{name_without_ext}_{hash_part}{extension}"

    return "/".join([sanitize_filename(owner_id), now.strftime("%Y/%m"), unique_filename])


class SupabaseFileStorage(FileStorage):
    """File storage backed by a Supabase Storage bucket."""

    def __init__(self, client: Client, bucket: str = "receipts"):
        self.client = client
        self.bucket = bucket

    async def upload(self, content: bytes, filename: str, content_type: str, owner_id: str) -> str:
        file_path = generate_file_path(filename, owner_id)
        return await run_in_threadpool(self._upload, content, file_path, content_type)

    def _upload(self, content: bytes, file_path: str, content_type: str) -> str:
        bucket = self.client.storage.from_(self.bucket)
        try:
            bucket.upload(
                path=file_path,
                file=content,
                file_options={
                    "content-type": content_type,
                    "cache-control": "public, max-age=3600",
                    "upsert": "true",
                }
            )
        except Exception as e:
            logger.error(f"Upload of {file_path} to bucket {self.bucket} failed: {e}")
            raise ValidationError(f"Failed to upload file: {str(e)}", field="file")

        logger.info(f"Uploaded {file_path} to bucket {self.bucket}")
        return bucket.get_public_url(file_path)


class LocalFileStorage(FileStorage):
    """
    File storage on the local filesystem.
    Files land under ``upload_dir`` and are served from ``base_url``.
    """

    def __init__(self, upload_dir: str, base_url: str = "/uploads"):
        self.upload_dir = Path(upload_dir)
        self.base_url = base_url.rstrip("/")

    async def upload(self, content: bytes, filename: str, content_type: str, owner_id: str) -> str:
        file_path = generate_file_path(filename, owner_id)
        await run_in_threadpool(self._write, file_path, content)

        logger.info(f"Stored {file_path} ({len(content)} bytes, {content_type}) in {self.upload_dir}")
        return f"{self.base_url}/{file_path}"

    def _write(self, file_path: str, content: bytes) -> None:
        target = self.upload_dir / file_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
