"""
AI生成API端点
根据提示词生成图片并固定到IPFS
"""

from typing import Optional

from fastapi import APIRouter, Body

from ainft.schemas.generation import GenerateRequest, GenerateResponse
from ainft.services.generation import GenerationHandler

router = APIRouter(tags=["AI生成"])


@router.post(
    "",
    response_model=GenerateResponse,
    response_model_exclude_none=True,
    summary="生成NFT图片",
    description="生成图片，启用固定时同时返回IPFS图片地址和元数据地址"
)
async def generate_nft_image(request: Optional[GenerateRequest] = Body(None)) -> GenerateResponse:
    """
    生成NFT图片

    Args:
        request: 包含prompt的请求体，缺失时按未提供prompt处理

    Returns:
        GenerateResponse: {imageUrl} 或 {imageUrl, ipfs, metadata}
    """
    handler = GenerationHandler()
    return await handler.handle_generate(request)
