"""
用户Repository
"""

from ainft.models.user import User
from ainft.repositories.base import BaseRepository


class UserRepository(BaseRepository):
    """用户数据访问"""

    @property
    def model(self):
        return User
