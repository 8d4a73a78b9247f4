"""
NFT画廊服务
读取用户持有的token及其元数据
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional

from web3 import AsyncWeb3

from ainft.core.log_utils import get_logger
from ainft.core.chain import NFTContract, get_contract, get_read_provider
from ainft.core.storage import StorageError, fetch_json_document
from ainft.schemas.nft import CollectionStats, OwnedNFT

logger = get_logger(__name__)

DocumentFetcher = Callable[[str], Awaitable[Dict[str, Any]]]


class NFTGalleryService:
    """只读的合约查询"""

    def __init__(
        self,
        provider: Optional[AsyncWeb3] = None,
        fetch_document: Optional[DocumentFetcher] = None,
    ):
        self._provider = provider
        self._fetch_document = fetch_document or fetch_json_document

    def _contract(self) -> NFTContract:
        if self._provider is None:
            self._provider = get_read_provider()
        return get_contract(self._provider)

    async def _load_token(self, contract: NFTContract, token_id: int) -> OwnedNFT:
        token_uri = await contract.token_uri(token_id)
        owned = OwnedNFT(tokenId=token_id, tokenURI=token_uri)
        try:
            metadata = await self._fetch_document(token_uri)
        except StorageError as e:
            # 元数据不可读时仍返回token
            logger.warning("读取NFT元数据失败", token_id=token_id, token_uri=token_uri, reason=e.message)
            return owned

        owned.name = metadata.get("name")
        owned.description = metadata.get("description")
        owned.imageUrl = metadata.get("image")
        return owned

    async def list_owned(self, address: str) -> List[OwnedNFT]:
        """
        获取地址持有的NFT

        Raises:
            ValueError: 地址格式错误
        """
        if not AsyncWeb3.is_address(address):
            raise ValueError(f"Invalid address: {address}")

        contract = self._contract()
        token_ids = await contract.get_user_tokens(address)
        logger.info("已获取用户token列表", address=address, token_count=len(token_ids))

        return list(await asyncio.gather(*(self._load_token(contract, token_id) for token_id in token_ids)))

    async def collection_stats(self) -> CollectionStats:
        total = await self._contract().total_supply()
        return CollectionStats(totalSupply=total)
