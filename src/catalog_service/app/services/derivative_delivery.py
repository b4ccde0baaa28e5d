import asyncio

from image_derivatives import (
    DerivativeRequestParser,
    TransformEngine,
    TransformFailed,
)
from loguru import logger

from ..core.config import Settings
from .domain import AttachmentUrls, StoredOriginal
from .original_store import OriginalStore

IMAGE_ROUTE_PREFIX = "item/image"


class DerivativeDeliveryService:
    def __init__(
        self,
        original_store: OriginalStore,
        request_parser: DerivativeRequestParser,
        transform_engine: TransformEngine,
        settings: Settings,
    ):
        self.original_store = original_store
        self.request_parser = request_parser
        self.transform_engine = transform_engine
        self.settings = settings
        self._transform_slots = asyncio.Semaphore(settings.CONCURRENT_PROCESSING_LIMIT)

    def get_original(self, filename: str) -> StoredOriginal:
        path = self.original_store.path_for(filename)
        return StoredOriginal(
            path=path, media_type=self.original_store.media_type_for(filename)
        )

    async def render_derivative(
        self, dimensions: str, quality: str, filename: str
    ) -> bytes:
        spec = self.request_parser.parse(dimensions, quality, filename)
        original = await self.original_store.read(spec.source_name)

        # The slot is held until the worker thread returns, not until the
        # request stops waiting for it.
        await self._transform_slots.acquire()
        worker = asyncio.ensure_future(
            asyncio.to_thread(self.transform_engine.transform, original, spec)
        )
        worker.add_done_callback(self._release_slot)

        try:
            derivative = await asyncio.wait_for(
                asyncio.shield(worker), timeout=self.settings.TRANSFORM_TIMEOUT
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Transform of {filename} to {spec.width}x{spec.height} "
                f"exceeded {self.settings.TRANSFORM_TIMEOUT}s"
            )
            raise TransformFailed("Image processing took too long")

        logger.debug(
            f"Rendered {filename} at {spec.width}x{spec.height} q{spec.quality} "
            f"({len(derivative)} bytes)"
        )
        return derivative

    def _release_slot(self, worker: asyncio.Future) -> None:
        self._transform_slots.release()
        if not worker.cancelled() and worker.exception() is not None:
            logger.debug(f"Transform worker finished with {worker.exception()!r}")

    def urls_for(self, storage_name: str) -> AttachmentUrls:
        return AttachmentUrls(
            original=f"{IMAGE_ROUTE_PREFIX}/{storage_name}",
            custom=(
                f"{IMAGE_ROUTE_PREFIX}/{self.settings.DEFAULT_DERIVATIVE_DIMENSIONS}/"
                f"{self.settings.DEFAULT_DERIVATIVE_QUALITY}/{storage_name}"
            ),
            derivative_template=(
                f"{IMAGE_ROUTE_PREFIX}/{{dimensions}}/{{quality}}/{storage_name}"
            ),
        )
