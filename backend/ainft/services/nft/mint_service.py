"""
服务端铸造
使用配置的私钥代替用户钱包签名，主流程不依赖此路径
"""

from typing import Callable, Optional

from web3 import AsyncWeb3

from ainft.core.config import settings
from ainft.core.chain import (
    ChainParameters,
    ContractConfigurationError,
    LocalKeyWallet,
    MintReceipt,
    WalletSigner,
    get_contract,
    mint_token,
)


class ServerMintService:
    """私钥托管的铸造服务"""

    def __init__(
        self,
        private_key: Optional[str] = None,
        web3_factory: Optional[Callable[[str], AsyncWeb3]] = None,
    ):
        self._private_key = private_key if private_key is not None else settings.PRIVATE_KEY
        if not self._private_key:
            raise ContractConfigurationError("Server-side minting is not configured")
        self._web3_factory = web3_factory

    async def _signer(self) -> WalletSigner:
        target = ChainParameters.target_chain()
        try:
            wallet = LocalKeyWallet(
                self._private_key,
                chains=[target],
                active_chain_id=target.chain_id,
                web3_factory=self._web3_factory
            )
        except Exception as e:
            raise ContractConfigurationError("Server private key is invalid") from e
        accounts = await wallet.request("eth_requestAccounts")
        return WalletSigner(wallet, wallet.web3_for_active_chain(), accounts[0])

    async def mint(self, recipient: str, token_uri: str) -> MintReceipt:
        """
        铸造到指定地址

        Raises:
            ValueError: 接收地址格式错误
            MintError: 铸造失败
        """
        if not AsyncWeb3.is_address(recipient):
            raise ValueError(f"Invalid address: {recipient}")

        signer = await self._signer()
        return await mint_token(get_contract(signer), recipient, token_uri)
