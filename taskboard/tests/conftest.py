"""
Test fixtures - in-memory SQLite database + HTTP client bound to the app
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from taskboard.database import Base, get_db
from taskboard.main import app
from taskboard.models import User, Category
from taskboard.client.api_client import ApiClient
from taskboard.client.state import AppState


@pytest_asyncio.fixture()
async def db_session():
    """Create a fresh in-memory SQLite database for each test"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture()
async def seed_data(db_session):
    """Insert baseline test data: 2 users + 2 categories. Returns their ids."""
    alice = User(name="Alice", avatar="https://example.com/alice.svg")
    bob = User(name="Bob", avatar="https://example.com/bob.svg")
    work = Category(name="Work", color="#10B981")
    home = Category(name="Home", color="#F59E0B")

    db_session.add_all([alice, bob, work, home])
    await db_session.commit()

    return {"alice": alice.id, "bob": bob.id, "work": work.id, "home": home.id}


@pytest_asyncio.fixture()
async def client(db_session):
    """httpx AsyncClient bound to the FastAPI app"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def api(client):
    """Typed API client talking to the app through the ASGI transport"""
    async with ApiClient(http=client) as api_client:
        yield api_client


@pytest_asyncio.fixture()
async def state(api):
    return AppState(api)
