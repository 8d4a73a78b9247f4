"""
数据库模块
异步SQLAlchemy引擎和会话工厂，DATABASE_URL 未配置时使用 workspace/ainft.db
"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from ainft.core.config import settings
from ainft.core.log_utils import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """所有ORM模型的基类"""


# SQLite文件不需要连接池
engine = create_async_engine(settings.async_database_url, echo=settings.db_echo, poolclass=NullPool)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI依赖：每个请求一个会话"""
    async with AsyncSessionLocal() as session:
        yield session


async def init_db() -> None:
    from ainft.models import user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("数据表初始化完成", database_url=settings.async_database_url)


async def close_db() -> None:
    await engine.dispose()
    logger.info("数据库连接已关闭")
