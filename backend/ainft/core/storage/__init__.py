"""
存储服务模块
提供IPFS内容固定服务
"""

from typing import Optional

from ainft.core.storage.base_storage import BasePinningStorage, PinResult
from ainft.core.storage.exceptions import *
from ainft.core.storage.pinata_storage import PinataStorage, fetch_json_document

_pinning_service: Optional[PinataStorage] = None


def get_pinning_service() -> PinataStorage:
    """
    获取Pinata固定服务实例

    首次调用时创建，缺少密钥时立即抛出ConfigurationError
    """
    global _pinning_service
    if _pinning_service is None:
        _pinning_service = PinataStorage()
    return _pinning_service

