"""
图片生成相关的Pydantic模型
字段名与前端约定的JSON格式保持一致（camelCase）
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator


class GenerateRequest(BaseModel):
    """生成请求"""
    prompt: Optional[str] = Field(None, description="图片描述")

    @field_validator("prompt", mode="before")
    @classmethod
    def drop_non_string_prompt(cls, value: Any) -> Any:
        # 非字符串按未提供处理，由处理器返回400
        return value if isinstance(value, str) else None


class NFTAttribute(BaseModel):
    trait_type: str
    value: str


class NFTMetadata(BaseModel):
    """NFT元数据文档，原样固定到IPFS"""
    name: str
    description: str
    image: str
    attributes: List[NFTAttribute] = Field(default_factory=list)


class IpfsUrls(BaseModel):
    imageUrl: str
    metadataUrl: str


class GenerateResponse(BaseModel):
    """
    生成响应

    未启用IPFS固定时只返回imageUrl
    """
    imageUrl: str
    ipfs: Optional[IpfsUrls] = None
    metadata: Optional[NFTMetadata] = None
