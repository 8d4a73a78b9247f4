"""
NFT相关的Pydantic模型
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class OwnedNFT(BaseModel):
    """用户持有的NFT"""
    tokenId: int
    tokenURI: str
    name: Optional[str] = None
    description: Optional[str] = None
    imageUrl: Optional[str] = None


class OwnedNFTList(BaseModel):
    address: str
    tokens: List[OwnedNFT]
    total: int


class CollectionStats(BaseModel):
    totalSupply: int


class MintRequest(BaseModel):
    """服务端铸造请求"""
    recipient: str = Field(..., description="接收地址")
    tokenURI: str = Field(..., min_length=1, description="元数据地址")


class MintReceiptResponse(BaseModel):
    transactionHash: str
    tokenId: Optional[int] = None
    recipient: Optional[str] = None
    tokenURI: Optional[str] = None
    blockNumber: Optional[int] = None
