"""
存储抽象基类
定义统一的内容固定接口
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class PinResult:
    """固定结果"""
    ipfs_hash: str
    url: str
    size: Optional[int] = None
    pinned_at: Optional[datetime] = None


class BasePinningStorage(ABC):
    """内容固定存储抽象基类"""

    @abstractmethod
    async def pin_file(self, data: bytes, upload_name: str, mime_type: str) -> PinResult:
        """
        固定二进制文件

        Args:
            data: 文件数据
            upload_name: 上传时使用的文件名
            mime_type: MIME类型

        Returns:
            PinResult: 固定结果

        Raises:
            StorageError: 上传失败时抛出
        """

    @abstractmethod
    async def pin_json(self, document: Dict[str, Any]) -> PinResult:
        """
        固定JSON文档

        Args:
            document: JSON文档

        Returns:
            PinResult: 固定结果

        Raises:
            StorageError: 上传失败时抛出
        """

    @abstractmethod
    def gateway_url(self, ipfs_hash: str) -> str:
        """根据内容哈希构建网关URL"""
