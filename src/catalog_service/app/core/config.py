import sys
from functools import lru_cache
from pathlib import Path

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings


def get_project_root() -> Path:
    current_path = Path(__file__).parent
    while current_path != current_path.parent:
        if (current_path / "pyproject.toml").exists():
            return current_path
        current_path = current_path.parent
    return Path(".")


class Settings(BaseSettings):
    # Application Settings
    APP_NAME: str = Field(default="Catalog Admin Service")
    DEBUG: bool = Field(default=False)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5050)

    # CORS Settings
    ALLOWED_ORIGINS: list[str] = Field(default=["*"])

    # DB Settings
    DATABASE_URL: str = Field(default="sqlite:///./storage/databases/catalog.db")

    # Storage Settings
    ORIGINAL_IMAGES_DIR: str = Field(default="./uploads/images")

    # Upload Settings
    MAX_FILE_SIZE: int = Field(default=5 * 1024 * 1024)  # 5MiB
    ALLOWED_MEDIA_TYPES: list[str] = Field(
        default=["image/jpeg", "image/png", "image/gif"]
    )
    UPLOAD_CHUNK_SIZE: int = Field(default=64 * 1024)

    # Derivative Settings
    MAX_DERIVATIVE_PIXELS: int = Field(default=40_000_000)
    TRANSFORM_TIMEOUT: float = Field(default=30.0)  # seconds
    CONCURRENT_PROCESSING_LIMIT: int = Field(default=4)
    DEFAULT_DERIVATIVE_DIMENSIONS: str = Field(default="500X500")
    DEFAULT_DERIVATIVE_QUALITY: int = Field(default=50)

    # Auth Settings
    JWT_SECRET: str = Field(default="change-me-in-production")
    JWT_ALGORITHM: str = Field(default="HS256")
    TOKEN_EXPIRE_MINUTES: int = Field(default=60)

    # Logging Settings
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="./logs/catalog_service.log")

    model_config = {
        "env_file": get_project_root() / ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @property
    def absolute_database_url(self) -> str:
        """Get absolute database URL based on project root."""
        if self.DATABASE_URL.startswith("sqlite:///./"):
            relative_path = self.DATABASE_URL.replace("sqlite:///./", "")
            absolute_path = get_project_root() / relative_path
            return f"sqlite:///{absolute_path}"
        return self.DATABASE_URL

    @property
    def absolute_original_images_dir(self) -> str:
        """Get absolute path for original images directory."""
        return str(get_project_root() / self.ORIGINAL_IMAGES_DIR)

    @property
    def absolute_log_file(self) -> str:
        return str(get_project_root() / self.LOG_FILE)


def configure_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL)

    log_file = Path(settings.absolute_log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level=settings.LOG_LEVEL,
        rotation="10 MB",
        retention=5,
        enqueue=True,
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
