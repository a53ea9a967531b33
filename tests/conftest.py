# Standard Library
from typing import AsyncGenerator
from unittest.mock import AsyncMock

# Third-Party Libraries
import pytest
import pytest_asyncio

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

# First-Party Libraries
from armoire.main import app
from armoire.database import get_db_session
from armoire.addresses.models import Address
from armoire.designs.cache import NoOpDesignCache
from armoire.designs.dependencies import get_design_cache
from armoire.email.dependencies import get_email_service
from armoire.email.services import EmailService
from armoire.users.models import User

# URL de base pour la DB en mémoire
TEST_DATABASE_BASE_URL = "sqlite+aiosqlite:///:memory:"

# --- Fixtures de Base ---

@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Crée un engine, des tables, et fournit une session DB en mémoire pour chaque test."""
    engine: AsyncEngine = create_async_engine(
        TEST_DATABASE_BASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with TestingSessionLocal() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def mock_email_service() -> AsyncMock:
    """EmailService simulé: aucun email n'est réellement envoyé."""
    service = AsyncMock(spec=EmailService)
    service.send_verification_email.return_value = True
    service.send_password_reset_email.return_value = True
    return service


@pytest_asyncio.fixture(scope="function")
async def test_client(db_session: AsyncSession, mock_email_service: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """Fournit un AsyncClient httpx qui utilise la session DB de test isolée."""
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_email_service] = lambda: mock_email_service
    app.dependency_overrides[get_design_cache] = lambda: NoOpDesignCache()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

# --- Fixtures Utilisateur et Adresses ---

@pytest_asyncio.fixture(scope="function")
async def test_user(db_session: AsyncSession) -> User:
    user = User(email="testuser@example.com", user_name="test_user", phone="0600000000")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def test_user_2(db_session: AsyncSession) -> User:
    user = User(email="testuser2@example.com", user_name="test_user_2")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def make_address(db_session: AsyncSession):
    """Fabrique d'adresses persistées directement en base."""
    async def _make(user: User, is_default: bool = False, **overrides) -> Address:
        data = {
            "address_type": "HOME",
            "street_address": "12 rue des Lilas",
            "city": "Lyon",
            "state": "Rhône",
            "postal_code": "69001",
            "country": "France",
        }
        data.update(overrides)
        address = Address(user_id=user.id, is_default=is_default, **data)
        db_session.add(address)
        await db_session.commit()
        await db_session.refresh(address)
        return address
    return _make
