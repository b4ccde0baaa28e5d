from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .app.api import catalog, public
from .app.core.config import configure_logging, get_settings
from .app.db.database import check_database_health, close_db, init_db

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings)
    logger.info("Starting Catalog Admin Service...")

    database_dir = Path(settings.absolute_database_url.replace("sqlite:///", "")).parent
    storage_dirs = [
        settings.absolute_original_images_dir,
        str(database_dir),
    ]
    for dir_path in storage_dirs:
        Path(dir_path).mkdir(parents=True, exist_ok=True)

    logger.info("Storage directories initialized")

    await init_db()
    logger.info("Database initialized")
    logger.info("Catalog Admin Service startup complete")

    yield

    logger.info("Shutting down Catalog Admin Service...")
    await close_db()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )

    app.include_router(public.router, tags=["images"])
    app.include_router(catalog.router, tags=["catalog"])

    @app.get("/health")
    async def health_check():
        database_ok = await check_database_health()
        return {
            "status": "healthy" if database_ok else "degraded",
            "service": "catalog-admin",
            "database": "ok" if database_ok else "unavailable",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.catalog_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info",
    )
