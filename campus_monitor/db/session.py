from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from campus_monitor.core.config import settings

# Асинхронный движок
async_engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

