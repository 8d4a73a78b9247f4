"""
Replicate图片生成提供商
提交预测任务并轮询直到完成
"""

from typing import Any, Dict, Optional

import httpx

from ainft.core.config import settings
from ainft.core.log_utils import get_logger
from ainft.core.log_messages import log_messages
from ainft.core.imggen.base import BaseImageProvider
from ainft.core.imggen.exceptions import ProviderConfigurationError, ProviderRequestError
from ainft.core.imggen.models import ImageGenerationResult, PollStatus
from ainft.core.imggen.polling import poll_prediction

logger = get_logger(__name__)

_UNSET = object()


class ReplicateProvider(BaseImageProvider):
    """Replicate预测API提供商"""

    def __init__(
        self,
        api_token: Optional[str] = None,
        model: Optional[str] = None,
        api_base: Optional[str] = None,
        poll_interval: Optional[float] = None,
        poll_timeout: Any = _UNSET,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep=None,
    ):
        token = api_token if api_token is not None else settings.REPLICATE_API_TOKEN
        if not token:
            raise ProviderConfigurationError("Replicate API token not configured")

        self._api_token = token.strip()
        self._model = model or settings.replicate_model
        self._api_base = (api_base or settings.replicate_api_base).rstrip("/")
        self._poll_interval = poll_interval if poll_interval is not None else settings.replicate_poll_interval
        # 显式传入None表示不限时
        self._poll_timeout = settings.replicate_poll_timeout if poll_timeout is _UNSET else poll_timeout
        self._transport = transport
        self._sleep = sleep
        super().__init__()

    def get_model_name(self) -> str:
        return self._model

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_token}",
            "Content-Type": "application/json",
        }

    def build_input(self, prompt: str) -> Dict[str, Any]:
        """构建固定参数的生成输入"""
        return {
            "prompt": prompt,
            "aspect_ratio": settings.replicate_aspect_ratio,
            "output_format": settings.replicate_output_format,
            "safety_tolerance": settings.replicate_safety_tolerance,
            "image_prompt_strength": settings.replicate_image_prompt_strength,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=settings.replicate_request_timeout,
            transport=self._transport
        )

    async def create_prediction(self, prompt: str) -> Dict[str, Any]:
        """提交预测任务"""
        url = f"{self._api_base}/models/{self._model}/predictions"
        async with self._client() as client:
            response = await client.post(url, headers=self._headers, json={"input": self.build_input(prompt)})
            prediction = self._parse_response(response, "create prediction")

        logger.info(log_messages.PREDICTION_CREATED, prediction_id=prediction.get("id"))
        return prediction

    async def get_prediction(self, prediction_id: str) -> Dict[str, Any]:
        """查询预测任务状态"""
        url = f"{self._api_base}/predictions/{prediction_id}"
        async with self._client() as client:
            response = await client.get(url, headers=self._headers)
            return self._parse_response(response, "get prediction")

    def _parse_response(self, response: httpx.Response, action: str) -> Dict[str, Any]:
        """校验响应状态并解析JSON，失败时带上提供商返回的错误说明"""
        if response.is_success:
            return response.json()

        try:
            body = response.json()
            detail = body.get("detail") or body.get("error") or response.text
        except ValueError:
            detail = response.text

        logger.error(
            "Replicate请求失败",
            action=action,
            status_code=response.status_code,
            detail=detail
        )
        raise ProviderRequestError(
            f"Replicate {action} failed: {detail}",
            status_code=response.status_code,
            details={"detail": detail}
        )

    @staticmethod
    def extract_image_url(output: Any) -> Optional[str]:
        """提取图片URL，数组输出取第一个元素"""
        if isinstance(output, list):
            output = output[0] if output else None
        if isinstance(output, str) and output:
            return output
        return None

    async def _generate_image_internal(self, prompt: str, **kwargs: Any) -> ImageGenerationResult:
        """提交任务 -> 轮询 -> 提取图片URL"""
        logger.info(log_messages.GENERATION_START, model=self._model, prompt_length=len(prompt))

        prediction = await self.create_prediction(prompt)
        prediction_id = prediction["id"]

        poll_kwargs = {}
        if self._sleep is not None:
            poll_kwargs["sleep"] = self._sleep

        outcome = await poll_prediction(
            lambda: self.get_prediction(prediction_id),
            interval=self._poll_interval,
            timeout=self._poll_timeout,
            **poll_kwargs
        )

        if outcome.status in (PollStatus.FAILED, PollStatus.TIMED_OUT):
            logger.warning(log_messages.GENERATION_FAILED, prediction_id=prediction_id, reason=outcome.error)
            return self._create_error_result(
                f"Prediction failed: {outcome.error}",
                prediction_id=prediction_id,
                poll_status=outcome.status.value
            )

        image_url = self.extract_image_url(outcome.prediction.get("output"))
        if not image_url:
            return self._create_error_result(
                "No image URL in prediction output",
                prediction_id=prediction_id,
                poll_status=outcome.status.value
            )

        logger.info(log_messages.GENERATION_SUCCESS, prediction_id=prediction_id, image_url=image_url)
        return ImageGenerationResult(
            success=True,
            image_url=image_url,
            metadata={
                "provider": "replicate",
                "model": self._model,
                "prediction_id": prediction_id,
                "poll_attempts": outcome.attempts,
                "elapsed": outcome.elapsed,
            }
        )
