import io

from PIL import Image

from .errors import DecodeError, TransformFailed
from .types import OUTPUT_FORMAT, DerivativeSpecification

DEFAULT_MAX_PIXELS = 40_000_000

_BACKGROUND = (255, 255, 255)


class TransformEngine:
    """Resizes an original to exact dimensions and re-encodes it as JPEG.

    The output depends only on the original bytes and the derivative request:
    the resampling filter, chroma subsampling and encoder flags are fixed,
    and no metadata is copied from the original.
    """

    def __init__(
        self,
        max_pixels: int = DEFAULT_MAX_PIXELS,
        resample: Image.Resampling = Image.Resampling.LANCZOS,
    ):
        self.max_pixels = max_pixels
        self.resample = resample

    def transform(self, original: bytes, spec: DerivativeSpecification) -> bytes:
        if spec.pixel_count > self.max_pixels:
            raise TransformFailed(
                f"Requested size {spec.width}x{spec.height} exceeds the limit of "
                f"{self.max_pixels} pixels"
            )

        image = self._decode(original)

        try:
            resized = self._flatten(image).resize(spec.size, resample=self.resample)
            return self._encode(resized, spec.quality)
        except MemoryError:
            raise TransformFailed(
                f"Not enough memory to produce a {spec.width}x{spec.height} image"
            )
        except (OSError, ValueError) as e:
            raise TransformFailed(f"Failed to transform image: {e}")
        finally:
            image.close()

    def _decode(self, original: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(original))
            image.load()
            return image
        except Image.DecompressionBombError:
            raise DecodeError("Original image is too large to decode")
        except MemoryError:
            raise TransformFailed("Not enough memory to decode the original image")
        except (OSError, SyntaxError, ValueError):
            raise DecodeError("Original image could not be decoded")

    @staticmethod
    def _flatten(image: Image.Image) -> Image.Image:
        has_alpha = image.mode in ("RGBA", "LA", "PA") or (
            image.mode == "P" and "transparency" in image.info
        )
        if has_alpha:
            rgba = image.convert("RGBA")
            flattened = Image.new("RGB", rgba.size, _BACKGROUND)
            flattened.paste(rgba, mask=rgba.getchannel("A"))
            return flattened

        if image.mode != "RGB":
            return image.convert("RGB")
        return image

    @staticmethod
    def _encode(image: Image.Image, quality: int) -> bytes:
        buffer = io.BytesIO()
        image.save(
            buffer,
            format=OUTPUT_FORMAT,
            quality=quality,
            subsampling=2,  # 4:2:0
            optimize=False,
            progressive=False,
        )
        return buffer.getvalue()
