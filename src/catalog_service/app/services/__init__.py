from .auth import AuthService
from .catalog import CatalogService
from .derivative_delivery import DerivativeDeliveryService
from .ingestion import IngestionService
from .original_store import OriginalStore

__all__ = [
    "AuthService",
    "CatalogService",
    "DerivativeDeliveryService",
    "IngestionService",
    "OriginalStore",
]
