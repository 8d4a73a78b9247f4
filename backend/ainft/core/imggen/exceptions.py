"""
图片生成异常定义
code 会作为 /api/generate 错误响应中的 details 返回
"""

from typing import Any, Dict, Optional


class GenerationError(Exception):
    """图片生成失败"""

    code: Optional[str] = None

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ProviderConfigurationError(GenerationError):
    """缺少Replicate令牌"""
    code = "CONFIG_ERROR"


class ProviderRequestError(GenerationError):
    """Replicate返回非2xx状态"""
    code = "HTTP_ERROR"

    def __init__(self, message: str, status_code: int, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class PredictionFailedError(GenerationError):
    """预测任务失败、被取消或轮询超时"""
    code = "PREDICTION_FAILED"


__all__ = [
    "GenerationError",
    "ProviderConfigurationError",
    "ProviderRequestError",
    "PredictionFailedError",
]
