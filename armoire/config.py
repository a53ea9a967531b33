import logging
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Charger les variables d'environnement AVANT de définir la classe Settings
load_dotenv()


class Settings(BaseSettings):
    # --- Application ---
    PROJECT_NAME: str = "Armoire API"
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # --- Pagination ---
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # --- Base de Données ---
    DATABASE_URL: Optional[str] = None
    POSTGRES_DB: str = "armoire"
    POSTGRES_USER: str = "armoire"
    POSTGRES_PASSWORD: str = "armoire"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: str = "5432"
    DB_ECHO_LOG: bool = False
    DB_CREATE_TABLES: bool = False

    # --- Cache ---
    REDIS_URL: Optional[str] = None
    DESIGN_CACHE_TTL: int = 600

    # --- Tokens ---
    VERIFICATION_TOKEN_HOURS: int = 24
    PASSWORD_RESET_TOKEN_HOURS: int = 1

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def database_url(self) -> str:
        """URL SQLAlchemy effective (DATABASE_URL prioritaire sur les POSTGRES_*)."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


settings = Settings()

if settings.POSTGRES_PASSWORD == "armoire" and not settings.DATABASE_URL:
    logger.warning("POSTGRES_PASSWORD utilise la valeur par défaut. Définissez-la dans l'environnement.")

logger.info(f"Configuration chargée: DB={settings.POSTGRES_DB}@{settings.POSTGRES_HOST}, Redis={'oui' if settings.REDIS_URL else 'non'}")
