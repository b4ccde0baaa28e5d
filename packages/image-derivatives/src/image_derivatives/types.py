from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

OUTPUT_FORMAT = "JPEG"
OUTPUT_MEDIA_TYPE = "image/jpeg"


@dataclass(frozen=True)
class DerivativeSpecification:
    width: int
    height: int
    quality: int  # encoder quality, 1-100 inclusive
    source_name: str

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@runtime_checkable
class OriginalLookup(Protocol):
    @abstractmethod
    def exists(self, storage_name: str) -> bool:
        """Return True when an original is stored under this name."""
        ...
