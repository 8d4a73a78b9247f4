"""
图片生成客户端
向后端 /api/generate 提交提示词，兼容只返回imageUrl和带IPFS信息的两种响应
"""

from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from ainft.core.config import settings
from ainft.core.log_utils import get_logger
from ainft.schemas.generation import IpfsUrls, NFTMetadata
from ainft.utils.string_utils import is_blank

logger = get_logger(__name__)


class InvalidPromptError(ValueError):
    """提示词为空"""


class GenerationClientError(Exception):
    """生成请求失败"""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    def __str__(self) -> str:
        return self.message


class GenerationResult(BaseModel):
    """一次成功生成的结果"""
    imageUrl: str
    ipfs: Optional[IpfsUrls] = None
    metadata: Optional[NFTMetadata] = None

    model_config = {
        "frozen": True
    }

    @property
    def metadata_url(self) -> Optional[str]:
        return self.ipfs.metadataUrl if self.ipfs else None

    @property
    def display_image_url(self) -> str:
        """优先展示IPFS上的图片"""
        return self.ipfs.imageUrl if self.ipfs else self.imageUrl


class GenerationClient:
    """后端生成接口客户端"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.client_request_timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{settings.api_prefix}/generate"

    async def generate_image(self, prompt: Optional[str]) -> GenerationResult:
        """
        请求生成图片

        Args:
            prompt: 提示词

        Returns:
            GenerationResult: 生成结果

        Raises:
            InvalidPromptError: 提示词为空，不发送请求
            GenerationClientError: 请求失败或响应格式错误
        """
        if is_blank(prompt):
            raise InvalidPromptError("Please enter a prompt")

        logger.info("发送图片生成请求", endpoint=self.endpoint, prompt_length=len(prompt))
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.endpoint, json={"prompt": prompt})
        except httpx.HTTPError as e:
            logger.error("图片生成请求失败", exception=e)
            raise GenerationClientError(f"Failed to generate image: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if response.is_error:
            message = data.get("error") or data.get("details") or "Failed to generate image"
            logger.warning("后端返回错误", status_code=response.status_code, error_message=message)
            raise GenerationClientError(message, status_code=response.status_code, details=data.get("details"))

        result = self.parse_response(data)
        logger.info("已收到图片地址", image_url=result.imageUrl, pinned=result.ipfs is not None)
        return result

    @staticmethod
    def parse_response(data: Dict[str, Any]) -> GenerationResult:
        """校验并解析成功响应"""
        image_url = data.get("imageUrl")
        if not image_url:
            raise GenerationClientError("No image URL in response")

        if isinstance(image_url, list):
            image_url = image_url[0]
        if not isinstance(image_url, str):
            raise GenerationClientError("Invalid image URL format")

        try:
            return GenerationResult(
                imageUrl=image_url,
                ipfs=data.get("ipfs"),
                metadata=data.get("metadata")
            )
        except ValueError as e:
            raise GenerationClientError(f"Invalid response format: {e}") from e
