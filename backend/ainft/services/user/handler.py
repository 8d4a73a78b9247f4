"""
用户业务处理器
"""

from typing import Any, Dict, List

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ainft.core.log_utils import get_logger
from ainft.schemas.user import UserCreate
from ainft.services.user.service import UserService
from ainft.utils.string_utils import is_blank

logger = get_logger(__name__)


class UserHandler:
    """用户处理器 - 处理请求校验、日志记录和异常处理"""

    def __init__(self, db: AsyncSession):
        self.user_service = UserService(db)

    async def handle_create_user(self, user_data: UserCreate) -> Dict[str, Any]:
        """处理创建用户请求"""
        if is_blank(user_data.name) or is_blank(user_data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"message": "Name and email are required"}
            )

        try:
            user = await self.user_service.create_user(user_data.name, user_data.email)
        except Exception as e:
            logger.error("创建用户失败", exception=e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"message": "Error creating user", "error": str(e)}
            ) from e

        logger.info("用户创建成功", user_id=user["id"])
        return {"message": "User created", "user": user}

    async def handle_list_users(self) -> List[Dict[str, Any]]:
        """处理获取用户列表请求"""
        try:
            return await self.user_service.list_users()
        except Exception as e:
            logger.error("获取用户列表失败", exception=e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"message": "Error fetching users"}
            ) from e
