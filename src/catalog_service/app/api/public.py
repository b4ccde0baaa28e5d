from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import FileResponse, Response
from image_derivatives import (
    OUTPUT_MEDIA_TYPE,
    DecodeError,
    ImagePipelineError,
    InvalidDimensions,
    InvalidQuality,
    OriginalNotFound,
    PayloadTooLarge,
    StorageWriteError,
    TransformFailed,
    UnsupportedMediaType,
)
from loguru import logger

from ..core.dependencies import (
    get_catalog_service,
    get_current_admin,
    get_derivative_delivery,
    get_ingestion_service,
)
from ..schemas import ImageUploadResponse
from ..services.catalog import CatalogService
from ..services.derivative_delivery import DerivativeDeliveryService
from ..services.domain import AuthenticatedAdmin
from ..services.ingestion import IngestionService, iter_upload_chunks

router = APIRouter()

ERROR_STATUS_CODES: dict[type[ImagePipelineError], int] = {
    UnsupportedMediaType: 400,
    PayloadTooLarge: 413,
    InvalidDimensions: 400,
    InvalidQuality: 400,
    OriginalNotFound: 404,
    DecodeError: 500,
    TransformFailed: 500,
    StorageWriteError: 500,
}


def _http_error(error: ImagePipelineError) -> HTTPException:
    return HTTPException(
        status_code=ERROR_STATUS_CODES.get(type(error), 500), detail=error.message
    )


@router.get("/item/image/{filename}")
async def serve_original_image(
    filename: str,
    delivery: DerivativeDeliveryService = Depends(get_derivative_delivery),
):
    """
    Serve an uploaded original exactly as it was stored.

    Raises:
        HTTPException: 404 if no original is stored under this name
    """
    logger.info(f"Serving original image {filename}")

    try:
        original = delivery.get_original(filename)
    except OriginalNotFound as e:
        logger.warning(f"Original {filename} not found")
        raise _http_error(e)

    return FileResponse(path=original.path, media_type=original.media_type)


@router.get("/item/image/{dimensions}/{quality}/{filename}")
async def serve_derivative_image(
    dimensions: str,
    quality: str,
    filename: str,
    delivery: DerivativeDeliveryService = Depends(get_derivative_delivery),
):
    """
    Resize an original on demand and return it as JPEG.

    Args:
        dimensions: Either N for an N x N image or WxH
        quality: JPEG quality between 1 and 100
        filename: Storage name of the original

    Raises:
        HTTPException: 400 for malformed dimensions or quality, 404 if the
            original is missing, 500 if it cannot be decoded or resized
    """
    logger.info(f"Rendering {filename} at {dimensions} q{quality}")

    try:
        derivative = await delivery.render_derivative(dimensions, quality, filename)

    except ImagePipelineError as e:
        if isinstance(e, (DecodeError, TransformFailed)):
            logger.error(f"Failed to render {filename} at {dimensions}: {e}")
        else:
            logger.warning(
                f"Rejected derivative request for {filename} ({e.error_type}): {e}"
            )
        raise _http_error(e)

    except Exception as e:
        logger.error(f"Unexpected error rendering {filename}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return Response(content=derivative, media_type=OUTPUT_MEDIA_TYPE)


@router.post("/item/image/upload/{item_id}", response_model=ImageUploadResponse)
async def upload_item_image(
    item_id: int,
    image: UploadFile | None = File(None),
    admin: AuthenticatedAdmin = Depends(get_current_admin),
    ingestion: IngestionService = Depends(get_ingestion_service),
    catalog: CatalogService = Depends(get_catalog_service),
    delivery: DerivativeDeliveryService = Depends(get_derivative_delivery),
):
    """
    Store an image for an item and record it as an attachment.

    The attachment record is only created once the original has been fully
    written to the image store.
    """
    logger.info(f"Admin {admin.id} uploading image for item {item_id}")

    if image is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if not await catalog.item_exists(item_id):
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    try:
        original = await ingestion.ingest(
            owner_entity_id=str(item_id),
            upload_stream=iter_upload_chunks(image, ingestion.settings.UPLOAD_CHUNK_SIZE),
            declared_media_type=image.content_type,
            byte_length=image.size,
            original_filename=image.filename,
        )

    except ImagePipelineError as e:
        logger.warning(
            f"Rejected upload {image.filename} for item {item_id} ({e.error_type}): {e}"
        )
        raise _http_error(e)

    except Exception as e:
        logger.error(f"Unexpected error storing {image.filename}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    try:
        attachment = await catalog.record_attachment(item_id, original)
    except Exception as e:
        logger.error(
            f"Failed to record attachment {original.storage_name} for item {item_id}: {e}"
        )
        raise HTTPException(
            status_code=500, detail="Database error while saving image"
        )

    urls = delivery.urls_for(original.storage_name)

    return ImageUploadResponse(
        message="Image uploaded successfully",
        attachment_id=attachment.attachment_id,
        file_name=original.storage_name,
        original_path=urls.original,
        derivative_path_template=urls.derivative_template,
    )
