"""
Database configuration and session management
"""
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from taskboard.config import get_settings

settings = get_settings()


def _get_async_url(url: str) -> str:
    """Convert database URL to async variant"""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://")
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://")
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///")
    return url


def use_sqlite_wal(async_engine: AsyncEngine) -> None:
    """Put every SQLite connection in WAL mode so readers never block the writer.

    In-memory databases ignore the request and stay in "memory" mode.
    Foreign keys are left off: deleting a user leaves their todos behind.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_journal_mode(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


database_url = _get_async_url(settings.DATABASE_URL)
is_sqlite = database_url.startswith("sqlite")

if is_sqlite:
    engine = create_async_engine(database_url, echo=settings.DEBUG)
    use_sqlite_wal(engine)
else:
    engine = create_async_engine(
        database_url,
        echo=settings.DEBUG,
        pool_size=10,
        max_overflow=5,
        pool_pre_ping=True,
    )

# One session per request; rows stay readable after commit
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()


async def get_db() -> AsyncSession:
    """Request-scoped session: commit on success, roll back on any error"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
