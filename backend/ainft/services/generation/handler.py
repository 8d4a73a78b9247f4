"""
NFT生成业务处理器
处理请求校验、日志记录和异常转换
"""

from typing import Optional

from fastapi import HTTPException, status

from ainft.core.log_utils import get_logger
from ainft.core.log_messages import log_messages
from ainft.core.imggen.exceptions import GenerationError
from ainft.core.storage.exceptions import StorageError
from ainft.schemas.generation import GenerateRequest, GenerateResponse
from ainft.services.generation.service import NFTGenerationService
from ainft.utils.string_utils import is_blank

logger = get_logger(__name__)


class GenerationHandler:
    """生成处理器 - 错误统一转换为 {error, details} 响应体"""

    def __init__(self, service: NFTGenerationService = None):
        self.service = service or NFTGenerationService()

    async def handle_generate(self, request: Optional[GenerateRequest]) -> GenerateResponse:
        if request is None or is_blank(request.prompt):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "Prompt is required"}
            )

        prompt = request.prompt.strip()
        logger.info("处理图片生成请求", prompt_length=len(prompt))

        try:
            response = await self.service.generate(prompt)
        except (GenerationError, StorageError) as e:
            logger.error(log_messages.GENERATION_FAILED, exception=e, error_code=e.code)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"error": e.message, "details": e.code}
            ) from e
        except Exception as e:
            logger.error(log_messages.GENERATION_FAILED, exception=e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"error": "Failed to generate image", "details": str(e)}
            ) from e

        logger.info("图片生成请求完成", pinned=response.ipfs is not None)
        return response
