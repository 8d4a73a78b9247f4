"""
NFT业务处理器
"""

from typing import Optional

from fastapi import HTTPException, status

from ainft.core.log_utils import get_logger
from ainft.core.chain import ChainError, ContractConfigurationError, MintError
from ainft.schemas.nft import CollectionStats, MintReceiptResponse, MintRequest, OwnedNFTList
from ainft.services.nft.gallery_service import NFTGalleryService
from ainft.services.nft.mint_service import ServerMintService

logger = get_logger(__name__)


def _error(status_code: int, error: str, details: Optional[str] = None) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": error, "details": details})


class NFTHandler:
    """NFT处理器 - 链上错误转换为 {error, details} 响应体"""

    def __init__(
        self,
        gallery_service: Optional[NFTGalleryService] = None,
        mint_service: Optional[ServerMintService] = None,
    ):
        self._gallery_service = gallery_service
        self._mint_service = mint_service

    @property
    def gallery_service(self) -> NFTGalleryService:
        if self._gallery_service is None:
            self._gallery_service = NFTGalleryService()
        return self._gallery_service

    async def handle_list_owned(self, address: str) -> OwnedNFTList:
        """处理获取用户NFT请求"""
        try:
            tokens = await self.gallery_service.list_owned(address)
        except ValueError as e:
            raise _error(status.HTTP_400_BAD_REQUEST, "Invalid address", str(e)) from e
        except ContractConfigurationError as e:
            raise _error(status.HTTP_503_SERVICE_UNAVAILABLE, e.message) from e
        except Exception as e:
            logger.error("获取用户NFT失败", exception=e, address=address)
            raise _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to load NFTs", str(e)) from e

        return OwnedNFTList(address=address, tokens=tokens, total=len(tokens))

    async def handle_stats(self) -> CollectionStats:
        """处理合约统计请求"""
        try:
            return await self.gallery_service.collection_stats()
        except ContractConfigurationError as e:
            raise _error(status.HTTP_503_SERVICE_UNAVAILABLE, e.message) from e
        except Exception as e:
            logger.error("获取合约统计失败", exception=e)
            raise _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to load collection stats", str(e)) from e

    async def handle_mint(self, request: MintRequest) -> MintReceiptResponse:
        """处理服务端铸造请求"""
        try:
            mint_service = self._mint_service or ServerMintService()
            receipt = await mint_service.mint(request.recipient, request.tokenURI)
        except ValueError as e:
            raise _error(status.HTTP_400_BAD_REQUEST, "Invalid address", str(e)) from e
        except ContractConfigurationError as e:
            raise _error(status.HTTP_503_SERVICE_UNAVAILABLE, e.message) from e
        except MintError as e:
            raise _error(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message, e.kind.value) from e
        except ChainError as e:
            logger.error("服务端铸造失败", exception=e)
            raise _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to mint NFT", e.message) from e

        return MintReceiptResponse(**receipt.to_dict())
