import asyncio
import shutil
import time
import uuid
from pathlib import Path
from typing import AsyncIterator

import aiofiles
from image_derivatives import OriginalNotFound, PayloadTooLarge, StorageWriteError
from loguru import logger

from ..core.config import Settings

INCOMING_DIR_NAME = ".incoming"

MEDIA_TYPE_BY_EXTENSION = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}


class OriginalStore:
    """Append-only directory of uploaded originals, addressed by storage name.

    Files are written to a private incoming directory first and moved under
    their final name only once complete, so readers never observe a partial
    original. A stored original is never rewritten.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.root = Path(settings.absolute_original_images_dir)
        self.incoming_dir = self.root / INCOMING_DIR_NAME
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        for directory in (self.root, self.incoming_dir):
            directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def generate_storage_name(extension: str) -> str:
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{extension}"

    def _resolve(self, storage_name: str) -> Path | None:
        if not storage_name or storage_name.startswith("."):
            return None
        if "/" in storage_name or "\\" in storage_name or "\x00" in storage_name:
            return None
        return self.root / storage_name

    def exists(self, storage_name: str) -> bool:
        path = self._resolve(storage_name)
        return path is not None and path.is_file()

    def path_for(self, storage_name: str) -> Path:
        path = self._resolve(storage_name)
        if path is None or not path.is_file():
            raise OriginalNotFound("Image not found")
        return path

    def media_type_for(self, storage_name: str) -> str:
        extension = Path(storage_name).suffix.lower()
        return MEDIA_TYPE_BY_EXTENSION.get(extension, "application/octet-stream")

    async def read(self, storage_name: str) -> bytes:
        path = self.path_for(storage_name)
        async with aiofiles.open(path, "rb") as f:
            return await f.read()

    async def write_incoming(
        self, chunks: AsyncIterator[bytes], max_bytes: int
    ) -> tuple[Path, int]:
        """Stream chunks into a fresh incoming file and return it with its size.

        Raises PayloadTooLarge as soon as more than max_bytes arrive and
        StorageWriteError on any filesystem failure. The incoming file is
        removed in both cases.
        """
        temp_path = self.incoming_dir / f"{uuid.uuid4().hex}.part"
        written = 0

        try:
            async with aiofiles.open(temp_path, "xb") as f:
                async for chunk in chunks:
                    written += len(chunk)
                    if written > max_bytes:
                        raise PayloadTooLarge(
                            f"File too large. Maximum size is {max_bytes} bytes"
                        )
                    await f.write(chunk)
            return temp_path, written

        except PayloadTooLarge:
            await self.discard(temp_path)
            raise
        except OSError as e:
            logger.error(f"Failed to write incoming upload {temp_path.name}: {e}")
            await self.discard(temp_path)
            raise StorageWriteError("Failed to store uploaded image")

    async def commit(self, temp_path: Path, storage_name: str) -> Path:
        final_path = self._resolve(storage_name)
        if final_path is None:
            await self.discard(temp_path)
            raise StorageWriteError("Invalid storage name")

        try:
            if final_path.exists():
                raise FileExistsError(storage_name)
            await asyncio.to_thread(shutil.move, str(temp_path), str(final_path))
            return final_path

        except OSError as e:
            logger.error(f"Failed to commit original {storage_name}: {e}")
            await self.discard(temp_path)
            raise StorageWriteError("Failed to store uploaded image")

    async def discard(self, temp_path: Path) -> bool:
        try:
            if temp_path.exists():
                temp_path.unlink()
                return True
            return False
        except OSError as e:
            logger.warning(f"Failed to remove incoming file {temp_path.name}: {e}")
            return False
