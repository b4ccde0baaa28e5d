from loguru import logger
from tortoise import Tortoise

from .. import models
from ..core.config import get_settings


def tortoise_modules() -> dict[str, list[str]]:
    return {"models": [models.__name__]}


async def init_db(database_url: str | None = None):
    try:
        if database_url is None:
            database_url = get_settings().absolute_database_url

        # Tortoise expects sqlite://<path> rather than the SQLAlchemy style URL
        if database_url.startswith("sqlite:///"):
            database_url = database_url.replace("sqlite:///", "sqlite://")

        await Tortoise.init(db_url=database_url, modules=tortoise_modules())

        # Generate database schema
        await Tortoise.generate_schemas(safe=True)

        logger.info("Database initialized successfully")

    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


async def close_db():
    try:
        await Tortoise.close_connections()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database: {e}")
        raise


async def check_database_health() -> bool:
    try:
        from tortoise import connections

        conn = connections.get("default")
        await conn.execute_query("SELECT 1")

        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
