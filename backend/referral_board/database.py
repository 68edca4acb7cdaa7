from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from referral_board.config import get_settings

settings = get_settings()

SQLITE_PREFIX = "sqlite+aiosqlite:///"

# Convert sqlite:/// to sqlite+aiosqlite:///
database_url = settings.database_url.replace("sqlite:///", SQLITE_PREFIX)

engine = create_async_engine(database_url, echo=False)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with async_session() as session:
        yield session


async def init_db():
    # Register every table on Base.metadata before create_all
    import referral_board.models  # noqa: F401

    if database_url.startswith(SQLITE_PREFIX):
        db_path = database_url[len(SQLITE_PREFIX):]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
