"""
Database setup script - creates tables and, unless --no-seed is given,
seeds a demo user plus the default categories
"""
import argparse
import asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from taskboard.database import engine, Base
from taskboard.models import User, Category
from taskboard.utils.helpers import DEFAULT_AVATARS, DEFAULT_CATEGORIES


async def setup_database(seed: bool = True, db_engine: AsyncEngine = engine):
    """Create tables and optionally seed initial data"""
    print("Creating database tables...")
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Tables created")

    if seed:
        session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
        async with session_factory() as session:
            result = await session.execute(select(User))
            if not result.scalars().first():
                session.add(User(name="Demo", avatar=DEFAULT_AVATARS[0]))
                print("Created demo user")

            result = await session.execute(select(Category))
            if not result.scalars().first():
                session.add_all([Category(name=name, color=color) for name, color in DEFAULT_CATEGORIES])
                print(f"Created {len(DEFAULT_CATEGORIES)} default categories")

            await session.commit()

    await db_engine.dispose()
    print("\nDatabase setup complete!")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create the Taskboard tables")
    parser.add_argument("--no-seed", action="store_true", help="only create tables, insert no rows")
    args = parser.parse_args(argv)
    asyncio.run(setup_database(seed=not args.no_seed))


if __name__ == "__main__":
    main()
