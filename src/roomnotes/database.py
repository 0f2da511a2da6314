# Database connection setup
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import get_settings
from .core.models import BaseModel

settings = get_settings()

engine = create_async_engine(settings.database_url, echo=settings.database_echo)

# Session factory
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session():
    """Get database session."""
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables():
    """Create all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)
