from functools import lru_cache

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from image_derivatives import DerivativeRequestParser, TransformEngine
from loguru import logger

from ..core.config import get_settings
from ..core.security import InvalidTokenError
from ..services.auth import AuthService
from ..services.catalog import CatalogService
from ..services.derivative_delivery import DerivativeDeliveryService
from ..services.domain import AuthenticatedAdmin
from ..services.ingestion import IngestionService
from ..services.original_store import OriginalStore

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_original_store() -> OriginalStore:
    return OriginalStore(get_settings())


@lru_cache()
def get_transform_engine() -> TransformEngine:
    return TransformEngine(max_pixels=get_settings().MAX_DERIVATIVE_PIXELS)


def get_request_parser() -> DerivativeRequestParser:
    return DerivativeRequestParser(get_original_store())


@lru_cache()
def get_derivative_delivery() -> DerivativeDeliveryService:
    return DerivativeDeliveryService(
        original_store=get_original_store(),
        request_parser=get_request_parser(),
        transform_engine=get_transform_engine(),
        settings=get_settings(),
    )


def get_ingestion_service() -> IngestionService:
    return IngestionService(original_store=get_original_store(), settings=get_settings())


def get_catalog_service() -> CatalogService:
    return CatalogService(derivative_delivery=get_derivative_delivery())


@lru_cache()
def get_auth_service() -> AuthService:
    return AuthService(get_settings())


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthenticatedAdmin:
    if credentials is None:
        raise HTTPException(
            status_code=401, detail="Access denied. No token provided."
        )

    try:
        return auth_service.resolve_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise HTTPException(status_code=403, detail="Invalid or expired token")
