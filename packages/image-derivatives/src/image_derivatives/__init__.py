__version__ = "0.1.0"

from .errors import (
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
from .request_parser import DerivativeRequestParser
from .transform_engine import TransformEngine
from .types import (
    OUTPUT_FORMAT,
    OUTPUT_MEDIA_TYPE,
    DerivativeSpecification,
    OriginalLookup,
)

__all__ = [
    "DerivativeRequestParser",
    "TransformEngine",
    "DerivativeSpecification",
    "OriginalLookup",
    "OUTPUT_FORMAT",
    "OUTPUT_MEDIA_TYPE",
    "ImagePipelineError",
    "UnsupportedMediaType",
    "PayloadTooLarge",
    "InvalidDimensions",
    "InvalidQuality",
    "OriginalNotFound",
    "DecodeError",
    "TransformFailed",
    "StorageWriteError",
]
