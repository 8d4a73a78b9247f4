"""
NFT API端点
用户画廊、合约统计和服务端铸造
"""

from fastapi import APIRouter

from ainft.schemas.nft import CollectionStats, MintReceiptResponse, MintRequest, OwnedNFTList
from ainft.services.nft import NFTHandler

router = APIRouter(tags=["NFT"])


@router.get(
    "/stats",
    response_model=CollectionStats,
    summary="合约统计",
    description="返回合约已铸造的token总数"
)
async def get_collection_stats() -> CollectionStats:
    handler = NFTHandler()
    return await handler.handle_stats()


@router.get(
    "/{address}/tokens",
    response_model=OwnedNFTList,
    summary="用户持有的NFT",
    description="读取地址持有的token及其元数据"
)
async def list_owned_nfts(address: str) -> OwnedNFTList:
    """
    获取用户持有的NFT

    Args:
        address: 钱包地址

    Returns:
        OwnedNFTList: token列表
    """
    handler = NFTHandler()
    return await handler.handle_list_owned(address)


@router.post(
    "/mint",
    response_model=MintReceiptResponse,
    summary="服务端铸造",
    description="使用服务端私钥铸造NFT，未配置私钥时返回503"
)
async def mint_nft(request: MintRequest) -> MintReceiptResponse:
    handler = NFTHandler()
    return await handler.handle_mint(request)
