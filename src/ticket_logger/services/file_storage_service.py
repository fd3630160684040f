"""
Local-directory file storage for region images.

Files are stored flat under the upload directory as "<uuid4>_<original name>";
that generated name is what the database keeps and what the static mount serves.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from starlette.concurrency import run_in_threadpool

from ticket_logger.exceptions.base import StorageError, ValidationError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded file already read into memory by the HTTP layer."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.content


def sanitize_filename(filename: str) -> str:
    """Keep only the base name and a conservative character set."""
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "file"


class FileStorageService:

    def __init__(self, upload_dir: Path | str, max_bytes: int | None = None):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes

    def _resolve(self, file_name: str) -> Path:
        path = (self.upload_dir / file_name).resolve()
        if path.parent != self.upload_dir.resolve():
            raise StorageError(f"Invalid file name: {file_name!r}")
        return path

    def _write(self, path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    async def save_file(self, upload: ImageUpload) -> str:
        """
        Write the upload and return the generated file name.

        Raises:
            ValidationError: empty or oversized upload.
            StorageError: the file could not be written.
        """
        if upload.is_empty:
            raise ValidationError("Uploaded file is empty", fields=["image_file"])
        if self.max_bytes is not None and len(upload.content) > self.max_bytes:
            raise ValidationError(
                f"Uploaded file exceeds {self.max_bytes} bytes", fields=["image_file"]
            )

        file_name = f"{uuid4()}_{sanitize_filename(upload.filename)}"
        path = self._resolve(file_name)
        try:
            await run_in_threadpool(self._write, path, upload.content)
        except OSError as exc:
            logger.exception("storage.save.failed", extra={"file_name": file_name})
            raise StorageError("Error saving the file") from exc

        logger.info("storage.save.success", extra={"file_name": file_name, "size": len(upload.content)})
        return file_name

    async def delete_file(self, file_name: str) -> bool:
        """
        Remove a stored file. A file that is already gone is not an error (returns False).

        Raises:
            StorageError: the file exists but could not be removed.
        """
        path = self._resolve(file_name)
        try:
            await run_in_threadpool(path.unlink)
        except FileNotFoundError:
            logger.warning("storage.delete.missing", extra={"file_name": file_name})
            return False
        except OSError as exc:
            logger.exception("storage.delete.failed", extra={"file_name": file_name})
            raise StorageError("Error deleting the file") from exc

        logger.info("storage.delete.success", extra={"file_name": file_name})
        return True

    def exists(self, file_name: str) -> bool:
        return self._resolve(file_name).is_file()
