"""
用户API端点
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ainft.db.database import get_db
from ainft.schemas.user import UserCreate, UserResponse
from ainft.services.user import UserHandler

router = APIRouter(tags=["用户管理"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="创建用户"
)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
) -> Dict[str, Any]:
    handler = UserHandler(db)
    return await handler.handle_create_user(user_data)


@router.get(
    "",
    response_model=List[UserResponse],
    summary="获取用户列表"
)
async def list_users(db: AsyncSession = Depends(get_db)) -> List[Dict[str, Any]]:
    handler = UserHandler(db)
    return await handler.handle_list_users()
