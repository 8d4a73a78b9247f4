"""
NFT画廊与服务端铸造单元测试
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from ainft.core.chain import ContractConfigurationError, MintReceipt
from ainft.core.storage import DownloadError
from ainft.services.nft import NFTGalleryService, ServerMintService
from tests.utils.test_data_utils import (
    METADATA_URL,
    OTHER_ADDRESS,
    TEST_PRIVATE_KEY,
    TX_HASH,
    TestDataGenerator,
)

GALLERY_CONTRACT = "ainft.services.nft.gallery_service.get_contract"


def make_contract(token_ids, total=3):
    contract = MagicMock()
    contract.get_user_tokens = AsyncMock(return_value=token_ids)
    contract.token_uri = AsyncMock(side_effect=lambda token_id: f"{METADATA_URL}/{token_id}")
    contract.total_supply = AsyncMock(return_value=total)
    return contract


@pytest.mark.unit
@pytest.mark.nft
class TestNFTGalleryService:
    """NFTGalleryService 单元测试类"""

    @pytest.mark.asyncio
    async def test_list_owned(self):
        fetch = AsyncMock(return_value=TestDataGenerator.generate_metadata())
        service = NFTGalleryService(provider=MagicMock(), fetch_document=fetch)

        with patch(GALLERY_CONTRACT, return_value=make_contract([1, 4])):
            tokens = await service.list_owned(OTHER_ADDRESS)

        assert [token.tokenId for token in tokens] == [1, 4]
        assert tokens[1].tokenURI == f"{METADATA_URL}/4"
        assert tokens[0].name == "AI NFT #1700000000"
        assert tokens[0].description == "a robotic turtle"
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_unreadable_metadata_keeps_token(self):
        fetch = AsyncMock(side_effect=[
            DownloadError("Failed to fetch document: 404"),
            TestDataGenerator.generate_metadata(),
        ])
        service = NFTGalleryService(provider=MagicMock(), fetch_document=fetch)

        with patch(GALLERY_CONTRACT, return_value=make_contract([1, 2])):
            tokens = await service.list_owned(OTHER_ADDRESS)

        assert tokens[0].tokenId == 1
        assert tokens[0].name is None
        assert tokens[1].imageUrl is not None

    @pytest.mark.asyncio
    async def test_no_tokens(self):
        fetch = AsyncMock()
        service = NFTGalleryService(provider=MagicMock(), fetch_document=fetch)

        with patch(GALLERY_CONTRACT, return_value=make_contract([])):
            assert await service.list_owned(OTHER_ADDRESS) == []

        fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_address(self):
        service = NFTGalleryService(provider=MagicMock(), fetch_document=AsyncMock())

        with pytest.raises(ValueError):
            await service.list_owned("not-an-address")

    @pytest.mark.asyncio
    async def test_collection_stats(self):
        service = NFTGalleryService(provider=MagicMock(), fetch_document=AsyncMock())

        with patch(GALLERY_CONTRACT, return_value=make_contract([], total=42)):
            stats = await service.collection_stats()

        assert stats.totalSupply == 42


@pytest.mark.unit
@pytest.mark.nft
class TestServerMintService:
    """ServerMintService 单元测试类"""

    def test_requires_private_key(self):
        with pytest.raises(ContractConfigurationError, match="not configured"):
            ServerMintService(private_key="")

    @pytest.mark.asyncio
    async def test_invalid_private_key(self, contract_settings):
        service = ServerMintService(private_key="0x1234")

        with pytest.raises(ContractConfigurationError, match="invalid"):
            await service.mint(OTHER_ADDRESS, METADATA_URL)

    @pytest.mark.asyncio
    async def test_invalid_recipient(self, contract_settings):
        service = ServerMintService(private_key=TEST_PRIVATE_KEY)

        with pytest.raises(ValueError):
            await service.mint("0x123", METADATA_URL)

    @pytest.mark.asyncio
    async def test_mint_uses_local_key_signer(self, contract_settings):
        receipt = MintReceipt(transaction_hash=TX_HASH, token_id=5, recipient=OTHER_ADDRESS)
        service = ServerMintService(private_key=TEST_PRIVATE_KEY, web3_factory=lambda url: MagicMock())

        with patch("ainft.services.nft.mint_service.get_contract") as get_contract, \
                patch("ainft.services.nft.mint_service.mint_token", AsyncMock(return_value=receipt)) as mint_token:
            result = await service.mint(OTHER_ADDRESS, METADATA_URL)

        assert result.token_id == 5
        signer = get_contract.call_args.args[0]
        assert signer.address == "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
        mint_token.assert_awaited_once_with(get_contract.return_value, OTHER_ADDRESS, METADATA_URL)
