class ImagePipelineError(Exception):
    """Base class for every failure raised by the ingestion and derivative pipeline.

    Messages are safe to show to clients: they name the violated constraint
    and never include filesystem paths.
    """

    error_type: str = "image_pipeline_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedMediaType(ImagePipelineError):
    error_type = "unsupported_media_type"


class PayloadTooLarge(ImagePipelineError):
    error_type = "payload_too_large"


class InvalidDimensions(ImagePipelineError):
    error_type = "invalid_dimensions"


class InvalidQuality(ImagePipelineError):
    error_type = "invalid_quality"


class OriginalNotFound(ImagePipelineError):
    error_type = "original_not_found"


class DecodeError(ImagePipelineError):
    error_type = "decode_error"


class TransformFailed(ImagePipelineError):
    error_type = "transform_failed"


class StorageWriteError(ImagePipelineError):
    error_type = "storage_write_error"
