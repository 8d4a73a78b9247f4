"""
Repository基础类
通用的增查方法，子类只需声明对应的模型
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ainft.core.log_utils import get_logger
from ainft.core.log_messages import log_messages

logger = get_logger(__name__)


class BaseRepository(ABC):
    """Repository基础类"""

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    @abstractmethod
    def model(self) -> Type[Any]:
        """Repository对应的模型类"""

    @property
    def model_name(self) -> str:
        return self.model.__name__

    async def get_by_id(self, record_id: str) -> Optional[Any]:
        record = await self.db.get(self.model, record_id)
        if record is None:
            logger.warning("记录不存在", record_id=record_id, model_name=self.model_name)
        return record

    async def list_all(self) -> List[Any]:
        """按创建时间升序返回全部记录"""
        query = select(self.model)
        if hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at)

        try:
            result = await self.db.execute(query)
        except Exception as e:
            logger.error(log_messages.DB_QUERY_FAILED, exception=e, model_name=self.model_name)
            raise

        records = list(result.scalars().all())
        logger.info(log_messages.DB_QUERY_SUCCESS, model_name=self.model_name, record_count=len(records))
        return records

    async def create(self, **fields: Any) -> Any:
        """插入一条记录，主键和创建时间由模型默认值生成"""
        instance = self.model(**fields)
        self.db.add(instance)
        try:
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(log_messages.DB_UPDATE_FAILED, exception=e, model_name=self.model_name)
            raise

        await self.db.refresh(instance)
        logger.info(log_messages.DB_UPDATE_SUCCESS, model_name=self.model_name, record_id=instance.id)
        return instance

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()
