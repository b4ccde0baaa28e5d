import re

from .errors import InvalidDimensions, InvalidQuality, OriginalNotFound
from .types import DerivativeSpecification, OriginalLookup

MIN_QUALITY = 1
MAX_QUALITY = 100

# Largest value a signed 32-bit integer can hold.
MAX_DIMENSION_VALUE = 2_147_483_647

_SQUARE_RE = re.compile(r"([0-9]+)")
_RECTANGLE_RE = re.compile(r"([0-9]+)[xX]([0-9]+)")
_QUALITY_RE = re.compile(r"[+-]?[0-9]+")

_QUALITY_MESSAGE = (
    f"Invalid quality percentage. It should be between {MIN_QUALITY} and {MAX_QUALITY}."
)


class DerivativeRequestParser:
    def __init__(self, originals: OriginalLookup):
        self.originals = originals

    def parse(
        self, dimensions_token: str, quality_token: str, filename: str
    ) -> DerivativeSpecification:
        width, height = self.parse_dimensions(dimensions_token)
        quality = self.parse_quality(quality_token)

        if not self.originals.exists(filename):
            raise OriginalNotFound("Image not found")

        return DerivativeSpecification(
            width=width, height=height, quality=quality, source_name=filename
        )

    @staticmethod
    def parse_dimensions(token: str) -> tuple[int, int]:
        if token is None:
            raise InvalidDimensions("Dimensions are required")

        square = _SQUARE_RE.fullmatch(token)
        if square:
            size = _to_dimension(square.group(1), token)
            return size, size

        rectangle = _RECTANGLE_RE.fullmatch(token)
        if rectangle:
            return (
                _to_dimension(rectangle.group(1), token),
                _to_dimension(rectangle.group(2), token),
            )

        raise InvalidDimensions(
            f"Invalid dimensions '{token}'. Use a single size like 150 "
            "or WIDTHxHEIGHT like 150x100."
        )

    @staticmethod
    def parse_quality(token: str) -> int:
        if token is None or not _QUALITY_RE.fullmatch(token):
            raise InvalidQuality(_QUALITY_MESSAGE)

        try:
            quality = int(token)
        except ValueError:
            raise InvalidQuality(_QUALITY_MESSAGE)

        if quality < MIN_QUALITY or quality > MAX_QUALITY:
            raise InvalidQuality(_QUALITY_MESSAGE)
        return quality


def _to_dimension(digits: str, token: str) -> int:
    if len(digits.lstrip("0")) > len(str(MAX_DIMENSION_VALUE)):
        raise InvalidDimensions(f"Dimensions '{token}' are out of range")

    value = int(digits)
    if value <= 0:
        raise InvalidDimensions(
            f"Invalid dimensions '{token}'. Width and height must be positive."
        )
    if value > MAX_DIMENSION_VALUE:
        raise InvalidDimensions(f"Dimensions '{token}' are out of range")
    return value
