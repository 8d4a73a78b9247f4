"""
Repository层
封装数据访问逻辑
"""

from ainft.repositories.base import BaseRepository
from ainft.repositories.user import UserRepository

__all__ = ["BaseRepository", "UserRepository"]
