"""
NFT图片生成服务
生成图片 -> 固定图片到IPFS -> 构建并固定元数据
"""

import time
from typing import Optional

from ainft.core.config import settings
from ainft.core.log_utils import get_logger
from ainft.core.imggen import BaseImageProvider
from ainft.core.imggen.exceptions import PredictionFailedError
from ainft.core.imggen.providers import ReplicateProvider
from ainft.core.storage import BasePinningStorage, get_pinning_service
from ainft.schemas.generation import GenerateResponse, IpfsUrls, NFTAttribute, NFTMetadata

logger = get_logger(__name__)


class NFTGenerationService:
    """NFT生成业务逻辑"""

    def __init__(
        self,
        provider: Optional[BaseImageProvider] = None,
        pinning: Optional[BasePinningStorage] = None,
        pinning_enabled: Optional[bool] = None,
    ):
        self._provider = provider
        self._pinning = pinning
        self._pinning_enabled = settings.pinning_enabled if pinning_enabled is None else pinning_enabled

    @property
    def provider(self) -> BaseImageProvider:
        if self._provider is None:
            self._provider = ReplicateProvider()
        return self._provider

    @property
    def pinning(self) -> Optional[BasePinningStorage]:
        if not self._pinning_enabled:
            return None
        if self._pinning is None:
            self._pinning = get_pinning_service()
        return self._pinning

    @staticmethod
    def build_metadata(prompt: str, image_url: str, model_name: Optional[str] = None) -> NFTMetadata:
        """构建NFT元数据，description即用户的提示词"""
        attributes = [NFTAttribute(trait_type="Generator", value=settings.nft_generator_trait)]
        if model_name:
            attributes.append(NFTAttribute(trait_type="Model", value=model_name))

        return NFTMetadata(
            name=f"{settings.nft_name_prefix} #{int(time.time())}",
            description=prompt,
            image=image_url,
            attributes=attributes
        )

    async def generate(self, prompt: str) -> GenerateResponse:
        """
        执行完整的生成流程

        Args:
            prompt: 已校验的非空提示词

        Returns:
            GenerateResponse: 未启用固定时只包含imageUrl

        Raises:
            GenerationError: 图片生成失败
            StorageError: IPFS固定失败
        """
        result = await self.provider.generate_image(prompt)
        if not result.success:
            raise PredictionFailedError(result.error_message or "Image generation failed", details=result.metadata)

        pinning = self.pinning
        if pinning is None:
            logger.info("未启用IPFS固定，直接返回图片地址", image_url=result.image_url)
            return GenerateResponse(imageUrl=result.image_url)

        ipfs_image_url = await pinning.upload_image(result.image_url)
        metadata = self.build_metadata(prompt, ipfs_image_url, self.provider.get_model_name())
        metadata_url = await pinning.upload_metadata(metadata.model_dump())

        return GenerateResponse(
            imageUrl=result.image_url,
            ipfs=IpfsUrls(imageUrl=ipfs_image_url, metadataUrl=metadata_url),
            metadata=metadata
        )
