"""Uploaded-file persistence on the local filesystem (aiofiles)."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from cleo.core.config import settings
from cleo.core.exceptions import DownstreamError, InvalidInputError

logger = logging.getLogger(__name__)


class FileStorage:
    """Stores each upload flat in the instance's file directory.

    The client-supplied name is reduced to its basename, so a stored path
    never leaves ``file_dir``.
    """

    CHUNK_SIZE = 64 * 1024

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes

    def target_path(self, file_dir: str, name: str) -> Path:
        base = os.path.basename(name.replace("\\", "/")).strip()
        if base in ("", ".", ".."):
            raise InvalidInputError("Invalid file name.")
        path = Path(file_dir) / base
        if path.exists():
            raise InvalidInputError(f'A file named "{base}" already exists.')
        return path

    async def save(self, upload: UploadFile, path: Path) -> int:
        """Copy *upload* to *path*; returns the byte count."""
        written = 0
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "wb") as out:
                while True:
                    chunk = await upload.read(self.CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        break
                    await out.write(chunk)
        except OSError as exc:
            logger.error("Could not write %s", path, exc_info=True)
            await self.remove(path)
            raise DownstreamError("Could not store the uploaded file.") from exc

        if written > self.max_bytes:
            await self.remove(path)
            raise InvalidInputError(
                f"Uploaded file exceeds the {self.max_bytes} byte limit."
            )
        logger.info("Stored %s (%d bytes)", path, written)
        return written

    async def remove(self, path: str | Path) -> None:
        """Delete a stored file; a failure is logged and otherwise ignored."""
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError:
            logger.error("Could not remove %s", path, exc_info=True)


def get_storage() -> FileStorage:
    return FileStorage(settings.MAX_UPLOAD_BYTES)
