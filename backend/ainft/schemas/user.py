"""
用户相关的Pydantic模型
"""

from typing import Optional
from pydantic import BaseModel


class UserCreate(BaseModel):
    """用户创建模型，必填校验在处理器中完成"""
    name: Optional[str] = None
    email: Optional[str] = None


class UserResponse(BaseModel):
    """用户响应模型"""
    id: str
    name: str
    email: str
    created_at: Optional[str] = None

    model_config = {
        "from_attributes": True
    }
