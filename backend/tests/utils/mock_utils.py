"""
测试专用的 mock 工具和辅助函数
提供常用的 mock 对象和装饰器，供所有测试使用
"""

import functools
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock, patch

from ainft.core.chain import (
    UNRECOGNIZED_CHAIN,
    InjectedWallet,
    MintReceipt,
    WalletRpcError,
)

from .test_data_utils import TEST_ADDRESS, TX_HASH


class ScriptedWallet(InjectedWallet):
    """
    按预设脚本响应的注入式钱包

    responses中的值为异常时抛出，为可调用对象时以params调用
    """

    def __init__(self, chain_id: int = 1, accounts: Optional[List[str]] = None,
                 known_chains: Optional[List[int]] = None):
        super().__init__()
        self.chain_id = chain_id
        self.accounts = [TEST_ADDRESS] if accounts is None else accounts
        self.known_chains = set(known_chains or [chain_id])
        self.calls: List[tuple] = []
        self.responses: Dict[str, Any] = {}

    def methods(self) -> List[str]:
        return [method for method, _ in self.calls]

    async def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        self.calls.append((method, params))
        if method in self.responses:
            response = self.responses[method]
            if isinstance(response, Exception):
                raise response
            return response(params) if callable(response) else response

        if method == "eth_requestAccounts":
            return list(self.accounts)
        if method == "eth_chainId":
            return hex(self.chain_id)
        if method == "wallet_switchEthereumChain":
            chain_id = int(params[0]["chainId"], 16)
            if chain_id not in self.known_chains:
                raise WalletRpcError(UNRECOGNIZED_CHAIN, "Unrecognized chain ID")
            self.chain_id = chain_id
            self.emit("chainChanged", hex(chain_id))
            return None
        if method == "wallet_addEthereumChain":
            self.known_chains.add(int(params[0]["chainId"], 16))
            return None
        if method == "eth_sendTransaction":
            return TX_HASH
        raise WalletRpcError(4200, f"Unsupported method: {method}")


class MockBuilder:
    """Mock对象构建器 - 用于创建常用的mock对象"""

    @staticmethod
    def create_mock_contract(
        gas_estimate: int = 100000,
        gas_price: int = 1_000_000_000,
        token_id: Optional[int] = 1,
        recipient: str = TEST_ADDRESS,
    ) -> MagicMock:
        """创建NFT合约句柄的mock对象"""
        mock = MagicMock()
        mock.estimate_mint_gas = AsyncMock(return_value=gas_estimate)
        mock.current_gas_price = AsyncMock(return_value=gas_price)
        mock.mint_nft = AsyncMock(return_value=TX_HASH)
        mock.wait_for_confirmations = AsyncMock(return_value={"status": 1, "blockNumber": 100})

        def extract(receipt, tx_hash):
            return MintReceipt(
                transaction_hash=tx_hash,
                token_id=token_id,
                recipient=recipient,
                block_number=receipt["blockNumber"]
            )

        mock.extract_mint_receipt = MagicMock(side_effect=extract)
        mock.total_supply = AsyncMock(return_value=3)
        return mock

    @staticmethod
    def create_mock_provider(image_url: Optional[str] = "https://replicate.delivery/image.jpg",
                             error_message: Optional[str] = None) -> MagicMock:
        """创建图片生成提供商的mock对象"""
        from ainft.core.imggen import ImageGenerationResult

        mock = MagicMock()
        mock.get_model_name.return_value = "black-forest-labs/flux-1.1-pro-ultra"
        if error_message:
            result = ImageGenerationResult(success=False, error_message=error_message)
        else:
            result = ImageGenerationResult(success=True, image_url=image_url)
        mock.generate_image = AsyncMock(return_value=result)
        return mock

    @staticmethod
    def create_mock_pinning(image_url: str = "https://gateway.pinata.cloud/ipfs/QmImageHash",
                            metadata_url: str = "https://gateway.pinata.cloud/ipfs/QmMetadataHash") -> MagicMock:
        """创建Pinata固定服务的mock对象"""
        mock = MagicMock()
        mock.upload_image = AsyncMock(return_value=image_url)
        mock.upload_metadata = AsyncMock(return_value=metadata_url)
        return mock


def mock_settings(test_config: Dict[str, Any]) -> Callable:
    """
    装饰器：临时修改配置
    用于替换ainft.core.config.settings上的字段

    Args:
        test_config: 测试配置字典

    Returns:
        Callable: 装饰器函数
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            from ainft.core.config import settings

            with patch.multiple(settings, **test_config):
                return func(*args, **kwargs)
        return wrapper
    return decorator
