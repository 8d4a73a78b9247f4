"""
IPFS固定异常定义
"""

from typing import Any, Dict, Optional


class StorageError(Exception):
    """
    固定或读取IPFS内容失败

    Attributes:
        message: 面向调用方的错误消息
        code: 错误码，由子类指定
        details: 出错的URL等上下文
    """

    code: Optional[str] = None

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(StorageError):
    """缺少Pinata密钥"""
    code = "CONFIG_ERROR"


class UploadError(StorageError):
    """图片或元数据没有固定成功"""
    code = "UPLOAD_ERROR"


class DownloadError(StorageError):
    """源图片或网关上的文档读取失败"""
    code = "DOWNLOAD_ERROR"


__all__ = [
    "StorageError",
    "ConfigurationError",
    "UploadError",
    "DownloadError",
]
