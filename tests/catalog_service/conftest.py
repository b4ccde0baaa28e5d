import tempfile
from pathlib import Path

import httpx
import pytest
from image_derivatives import DerivativeRequestParser, TransformEngine
from tortoise import Tortoise

from src.catalog_service.app.core.config import Settings
from src.catalog_service.app.core.dependencies import (
    get_auth_service,
    get_catalog_service,
    get_derivative_delivery,
    get_ingestion_service,
)
from src.catalog_service.app.core.security import create_access_token
from src.catalog_service.app.db.database import tortoise_modules
from src.catalog_service.app.models import Item
from src.catalog_service.app.services import (
    AuthService,
    CatalogService,
    DerivativeDeliveryService,
    IngestionService,
    OriginalStore,
)
from src.catalog_service.main import create_app
from tests.shared_fixtures import SharedImageFixtures


@pytest.fixture
def temp_storage_dir():
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def test_settings(temp_storage_dir):
    return Settings(
        ORIGINAL_IMAGES_DIR=str(Path(temp_storage_dir) / "images"),
        DATABASE_URL="sqlite:///:memory:",
        LOG_FILE=str(Path(temp_storage_dir) / "logs" / "test.log"),
        JWT_SECRET="test-secret-with-enough-length-for-hs256",
        MAX_DERIVATIVE_PIXELS=4_000_000,
        TRANSFORM_TIMEOUT=10.0,
        CONCURRENT_PROCESSING_LIMIT=2,
    )


@pytest.fixture
def original_store(test_settings):
    return OriginalStore(test_settings)


@pytest.fixture
def transform_engine(test_settings):
    return TransformEngine(max_pixels=test_settings.MAX_DERIVATIVE_PIXELS)


@pytest.fixture
def derivative_delivery(original_store, transform_engine, test_settings):
    return DerivativeDeliveryService(
        original_store=original_store,
        request_parser=DerivativeRequestParser(original_store),
        transform_engine=transform_engine,
        settings=test_settings,
    )


@pytest.fixture
def ingestion_service(original_store, test_settings):
    return IngestionService(original_store=original_store, settings=test_settings)


@pytest.fixture
def catalog_service(derivative_delivery):
    return CatalogService(derivative_delivery=derivative_delivery)


@pytest.fixture
def auth_service(test_settings):
    return AuthService(test_settings)


@pytest.fixture
async def db():
    await Tortoise.init(db_url="sqlite://:memory:", modules=tortoise_modules())
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest.fixture
async def sample_item(db):
    return await Item.create(name="Linen shirt", sku="LS-001", price="49.90")


@pytest.fixture
def photo_jpeg():
    return SharedImageFixtures.load_photo_jpeg()[0]


@pytest.fixture
def transparent_png():
    return SharedImageFixtures.load_transparent_png()[0]


@pytest.fixture
def animated_gif():
    return SharedImageFixtures.load_animated_gif()[0]


@pytest.fixture
def store_original(original_store):
    """Place bytes in the store under a given name, bypassing ingestion."""

    def _store(storage_name: str, data: bytes) -> Path:
        path = original_store.root / storage_name
        path.write_bytes(data)
        return path

    return _store


@pytest.fixture
def auth_headers(test_settings):
    token = create_access_token(test_settings, 1, "admin@example.com", "admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_app(
    derivative_delivery, ingestion_service, catalog_service, auth_service
):
    app = create_app()

    app.dependency_overrides[get_derivative_delivery] = lambda: derivative_delivery
    app.dependency_overrides[get_ingestion_service] = lambda: ingestion_service
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    app.dependency_overrides[get_auth_service] = lambda: auth_service

    return app


@pytest.fixture
async def client(test_app):
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
