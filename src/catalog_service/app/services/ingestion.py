import asyncio
from pathlib import Path
from typing import AsyncIterator, Protocol

from image_derivatives import PayloadTooLarge, UnsupportedMediaType
from loguru import logger
from PIL import Image

from ..core.config import Settings
from .domain import OriginalImage
from .original_store import OriginalStore

CANONICAL_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
}

KNOWN_EXTENSIONS = {
    "image/jpeg": {".jpg", ".jpeg"},
    "image/png": {".png"},
    "image/gif": {".gif"},
}

MEDIA_TYPE_BY_FORMAT = {
    "JPEG": "image/jpeg",
    # multi-picture JPEG written by many phone cameras
    "MPO": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
}


class ReadableUpload(Protocol):
    async def read(self, size: int = -1) -> bytes: ...


async def iter_upload_chunks(
    upload: ReadableUpload, chunk_size: int
) -> AsyncIterator[bytes]:
    while True:
        chunk = await upload.read(chunk_size)
        if not chunk:
            break
        yield chunk


class IngestionService:
    def __init__(self, original_store: OriginalStore, settings: Settings):
        self.original_store = original_store
        self.settings = settings

    def normalize_media_type(self, declared_media_type: str | None) -> str:
        media_type = (declared_media_type or "").split(";", 1)[0].strip().lower()
        if media_type not in self.settings.ALLOWED_MEDIA_TYPES:
            raise UnsupportedMediaType("Only JPEG, PNG, and GIF images are allowed")
        return media_type

    def check_declared_size(self, byte_length: int | None) -> None:
        if byte_length is not None and byte_length > self.settings.MAX_FILE_SIZE:
            raise PayloadTooLarge(
                f"File too large. Maximum size is "
                f"{self.settings.MAX_FILE_SIZE // (1024 * 1024)}MB"
            )

    @staticmethod
    def choose_extension(media_type: str, original_filename: str | None) -> str:
        if original_filename:
            extension = Path(original_filename).suffix.lower()
            if extension in KNOWN_EXTENSIONS.get(media_type, set()):
                return extension
        return CANONICAL_EXTENSIONS[media_type]

    async def ingest(
        self,
        owner_entity_id: str,
        upload_stream: AsyncIterator[bytes],
        declared_media_type: str | None,
        byte_length: int | None,
        original_filename: str | None = None,
    ) -> OriginalImage:
        media_type = self.normalize_media_type(declared_media_type)
        self.check_declared_size(byte_length)

        temp_path, size_bytes = await self.original_store.write_incoming(
            upload_stream, self.settings.MAX_FILE_SIZE
        )

        if size_bytes == 0:
            await self.original_store.discard(temp_path)
            raise UnsupportedMediaType("Empty file provided")

        try:
            width, height = await self._verify_content(temp_path, media_type)
        except UnsupportedMediaType:
            await self.original_store.discard(temp_path)
            raise

        storage_name = self.original_store.generate_storage_name(
            self.choose_extension(media_type, original_filename)
        )
        await self.original_store.commit(temp_path, storage_name)

        logger.info(
            f"Stored original {storage_name} ({media_type}, {size_bytes} bytes) "
            f"for owner {owner_entity_id}"
        )

        return OriginalImage(
            storage_name=storage_name,
            media_type=media_type,
            size_bytes=size_bytes,
            owner_entity_id=str(owner_entity_id),
            width=width,
            height=height,
        )

    async def _verify_content(
        self, temp_path: Path, declared_media_type: str
    ) -> tuple[int, int]:
        def _identify():
            with Image.open(temp_path) as img:
                return img.format, img.width, img.height

        try:
            image_format, width, height = await asyncio.to_thread(_identify)
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
            raise UnsupportedMediaType("Uploaded file is not a readable image")

        detected = MEDIA_TYPE_BY_FORMAT.get(image_format)
        if detected != declared_media_type:
            logger.warning(
                f"Upload declared as {declared_media_type} but contains {image_format}"
            )
            raise UnsupportedMediaType(
                f"File content does not match declared type {declared_media_type}"
            )

        return width, height
