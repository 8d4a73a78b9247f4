"""
用户服务
"""

from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from ainft.repositories.user import UserRepository


class UserService:
    """用户增查业务逻辑"""

    def __init__(self, db: AsyncSession):
        self.repository = UserRepository(db)

    async def create_user(self, name: str, email: str) -> Dict[str, Any]:
        user = await self.repository.create(name=name.strip(), email=email.strip())
        return user.to_dict()

    async def list_users(self) -> List[Dict[str, Any]]:
        users = await self.repository.list_all()
        return [user.to_dict() for user in users]
