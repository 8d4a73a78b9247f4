"""
图片生成提供商基类
"""

from abc import ABC, abstractmethod
from typing import Any

from ainft.core.mlflow_tracker import get_mlflow_tracker
from .models import ImageGenerationResult
from .tracker import MLflowTracingMixin


class BaseImageProvider(MLflowTracingMixin, ABC):
    """
    图片生成提供商基类

    子类实现 _generate_image_internal，调用方统一使用 generate_image。
    任务失败、超时或没有输出时返回 ImageGenerationResult(success=False)；
    提供商接口的请求错误以 GenerationError 子类抛出（如 ProviderRequestError）
    """

    def __init__(self):
        self.mlflow_tracker = get_mlflow_tracker()

    async def generate_image(self, prompt: str, **kwargs: Any) -> ImageGenerationResult:
        return await self._with_mlflow_trace(prompt, **kwargs)

    @abstractmethod
    async def _generate_image_internal(self, prompt: str, **kwargs: Any) -> ImageGenerationResult:
        ...

    @abstractmethod
    def get_model_name(self) -> str:
        ...

    def _create_error_result(self, error_message: str, **metadata: Any) -> ImageGenerationResult:
        return ImageGenerationResult(
            success=False,
            error_message=error_message,
            metadata=metadata or None
        )
