import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from armoire.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_url,
    echo=settings.DB_ECHO_LOG,
    future=True,
)

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Empêche les objets d'expirer après commit
)

logger.info("Moteur et Session Factory SQLAlchemy Async configurés.")


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides an async database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            # Pas de commit ici: les services démarquent leurs transactions.
        except Exception as e:
            logger.error(f"Erreur durant la session DB, rollback: {e}", exc_info=True)
            await session.rollback()
            raise
        finally:
            await session.close()
            logger.debug("Session DB fermée.")


async def create_tables():
    """Crée toutes les tables définies sur SQLModel.metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def drop_tables():
    """Supprime toutes les tables définies sur SQLModel.metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
