"""
图片生成的MLflow追踪
"""

import time
from typing import Any

from ainft.core.log_utils import get_logger
from .models import ImageGenerationResult

logger = get_logger(__name__)


class MLflowTracingMixin:
    """
    把 _generate_image_internal 包进MLflow run

    使用方需要提供 mlflow_tracker 属性、get_model_name() 和 _generate_image_internal()
    """

    async def _with_mlflow_trace(self, prompt: str, **kwargs: Any) -> ImageGenerationResult:
        if not self.mlflow_tracker.is_initialized:
            return await self._generate_image_internal(prompt, **kwargs)

        provider = self.__class__.__name__
        model = self.get_model_name()
        started = time.monotonic()

        with self.mlflow_tracker.start_run(run_name=f"ImageGeneration_{provider}_{model}"):
            result = await self._generate_image_internal(prompt, **kwargs)
            duration = time.monotonic() - started
            self.mlflow_tracker.log_generation(
                {"provider": provider, "model": model, "prompt_length": len(prompt)},
                duration,
                result.success
            )

        logger.info("图片生成追踪完成", provider=provider, success=result.success, duration=duration)
        return result
