import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base

from app.core.config import settings
from app.core.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


def _to_async_url(url: str) -> str:
    if url.startswith("postgresql+psycopg2://"):
        return url.replace("postgresql+psycopg2://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


engine = create_async_engine(_to_async_url(settings.database_url), echo=settings.db_echo, future=True)
SessionLocal = async_sessionmaker(
    bind=engine, class_=AsyncSession, autoflush=False, autocommit=False, expire_on_commit=False
)
Base = declarative_base()


async def get_db():
    async with SessionLocal() as db:
        yield db


@asynccontextmanager
async def storage_guard(db: AsyncSession, action: str):
    """把数据库异常统一转成 StorageUnavailableError，并回滚当前事务。"""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(f"database error during {action}")
        await db.rollback()
        raise StorageUnavailableError(action) from exc
